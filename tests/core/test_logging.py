"""Tests for log record enrichment and timing."""

import json
import logging

import pytest

from schoolboard.core.logging import (
    JSONFormatter,
    RequestIDFilter,
    log_execution_time,
    request_id_ctx,
)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("schoolboard.test", logging.INFO, __file__, 1, "hello", (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestIDFilter:
    def test_defaults_outside_request(self) -> None:
        record = make_record()

        assert RequestIDFilter().filter(record) is True
        assert record.request_id == "-"

    def test_stamps_current_request_id(self) -> None:
        token = request_id_ctx.set("req-42")
        try:
            record = make_record()
            RequestIDFilter().filter(record)
        finally:
            request_id_ctx.reset(token)

        assert record.request_id == "req-42"

    def test_keeps_explicit_request_id(self) -> None:
        record = make_record(request_id="explicit")
        RequestIDFilter().filter(record)

        assert record.request_id == "explicit"


class TestJSONFormatter:
    def test_includes_extra_fields(self) -> None:
        record = make_record(request_id="req-7", status_code=500)

        payload = json.loads(JSONFormatter().format(record))

        assert payload["message"] == "hello"
        assert payload["request_id"] == "req-7"
        assert payload["status_code"] == 500


class TestLogExecutionTime:
    @pytest.mark.asyncio
    async def test_returns_result_and_reraises(self) -> None:
        @log_execution_time()
        async def ok() -> int:
            return 7

        @log_execution_time()
        async def boom() -> None:
            raise RuntimeError("nope")

        assert await ok() == 7
        with pytest.raises(RuntimeError, match="nope"):
            await boom()

    def test_rejects_sync_functions(self) -> None:
        with pytest.raises(TypeError):
            log_execution_time()(lambda: None)
