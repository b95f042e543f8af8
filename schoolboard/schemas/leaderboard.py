"""Leaderboard schemas"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    """A Moodle course category; one school on the leaderboard"""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: Optional[str] = None
    idnumber: Optional[str] = None


class Course(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    category: Optional[int] = None


class Quiz(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    course: Optional[int] = None
    grade: Optional[float] = None

    @property
    def passing_grade(self) -> float:
        return self.grade or 0


class LeaderboardEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[int] = None
    name: Optional[str] = None
    shortname: str
    logo_path: str = Field(alias="logoPath")
    tasks_completed: int = Field(alias="tasksCompleted", ge=0)


class LeaderboardResponse(BaseModel):
    source: Literal["mock", "cache", "live"]
    data: List[LeaderboardEntry]


class ErrorResponse(BaseModel):
    error: str
    hint: str
