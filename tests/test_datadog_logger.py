"""
Tests for the Datadog log handler.
"""

import json
import logging
from unittest.mock import patch

import requests

from settings.datadog_logger import DatadogLogger


def _record(name="taskflow_app", msg="request completed", **extra):
    record = logging.LogRecord(name, logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestDatadogLogger:

    def test_payload_carries_structured_fields(self):
        handler = DatadogLogger(service="Taskflow", api_key="key")
        record = _record(**{
            "http.method": "POST",
            "http.status_code": 200,
            "event_type": "request_complete",
        })

        payload = handler.build_payload(record)

        assert payload["message"] == "request completed"
        assert payload["service"] == "Taskflow"
        assert payload["status"] == "info"
        assert payload["http.method"] == "POST"
        assert "http.method:post" in payload["ddtags"]
        assert "http.status_code:200" in payload["ddtags"]
        assert "event_type:request_complete" in payload["ddtags"]
        assert "duration_ms" not in payload

    def test_excluded_loggers_are_dropped(self):
        handler = DatadogLogger(service="Taskflow", api_key="key")

        assert handler.should_log(_record(name="urllib3.connectionpool")) is False
        assert handler.should_log(_record(name="api.workload.domain")) is True

    def test_emit_posts_payload(self):
        handler = DatadogLogger(service="Taskflow", api_key="key")

        with patch("settings.datadog_logger.requests.post") as post:
            handler.emit(_record())

        post.assert_called_once()
        kwargs = post.call_args.kwargs
        assert kwargs["headers"]["DD-API-KEY"] == "key"
        assert json.loads(kwargs["data"])["logger"] == "taskflow_app"

    def test_emit_without_api_key_is_noop(self):
        handler = DatadogLogger(service="Taskflow", api_key=None)
        handler.api_key = None

        with patch("settings.datadog_logger.requests.post") as post:
            handler.emit(_record())

        post.assert_not_called()

    def test_intake_failure_goes_to_handle_error(self):
        handler = DatadogLogger(service="Taskflow", api_key="key")

        with patch("settings.datadog_logger.requests.post", side_effect=requests.ConnectionError("down")), \
                patch.object(handler, "handleError") as handle_error:
            handler.emit(_record())

        handle_error.assert_called_once()
