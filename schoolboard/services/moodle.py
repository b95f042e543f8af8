"""
Moodle web-service client
The single point of contact with the remote LMS
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from schoolboard.core.exceptions import ConfigurationError, RemoteServiceError
from schoolboard.schemas.leaderboard import Category, Course, Quiz

logger = logging.getLogger(__name__)

REST_PATH = "/webservice/rest/server.php"
RESPONSE_FORMAT = "json"


class MoodleClient:
    """
    Thin async wrapper over Moodle's REST web-service endpoint

    Every call carries the access token, the function name and the response
    format marker. Failures are raised immediately; there are no retries.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.token = token or ""
        self._http = http_client or httpx.AsyncClient()

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.token)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{REST_PATH}"

    async def aclose(self) -> None:
        await self._http.aclose()

    async def call(self, function_name: str, params: Optional[Dict[str, str]] = None) -> Any:
        """
        Invoke a web-service function and decode its JSON reply

        Args:
            function_name: Moodle wsfunction name
            params: Extra query parameters for the function

        Returns:
            Decoded JSON value

        Raises:
            ConfigurationError: base URL or token is missing
            RemoteServiceError: transport failure, non-2xx status, or a
                Moodle exception payload
        """
        if not self.is_configured:
            raise ConfigurationError()

        query = {
            "wstoken": self.token,
            "wsfunction": function_name,
            "moodlewsrestformat": RESPONSE_FORMAT,
            **(params or {}),
        }

        logger.debug(f"Calling Moodle function {function_name}", extra={"params": params or {}})

        try:
            response = await self._http.get(self.endpoint, params=query)
        except httpx.HTTPError as e:
            raise RemoteServiceError(
                f"Moodle API request failed: {e}", details={"function": function_name}
            ) from e

        if not response.is_success:
            raise RemoteServiceError(
                f"Moodle API error: {response.status_code}",
                details={"function": function_name, "status_code": response.status_code},
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteServiceError(
                "Moodle API returned invalid JSON", details={"function": function_name}
            ) from e

        # Moodle reports function-level failures with HTTP 200 and an exception body
        if isinstance(data, dict) and "exception" in data:
            raise RemoteServiceError(
                f"Moodle API error: {data.get('message') or data.get('errorcode') or data['exception']}",
                details={"function": function_name, "errorcode": data.get("errorcode")},
            )

        return data

    async def get_categories(self) -> List[Category]:
        """Fetch all categories (schools)"""
        data = await self.call("core_course_get_categories")
        return [Category.model_validate(item) for item in data or []]

    async def get_courses_by_category(self, category_id: int) -> List[Course]:
        """Fetch the courses filed under one category"""
        data = await self.call(
            "core_course_get_courses_by_field",
            {"field": "category", "value": str(category_id)},
        )
        courses = (data or {}).get("courses") or []
        return [Course.model_validate(item) for item in courses]

    async def get_quizzes_by_course(self, course_id: int) -> List[Quiz]:
        """Fetch the quizzes in one course"""
        data = await self.call(
            "mod_quiz_get_quizzes_by_courses",
            {"courseids[0]": str(course_id)},
        )
        quizzes = (data or {}).get("quizzes") or []
        return [Quiz.model_validate(item) for item in quizzes]
