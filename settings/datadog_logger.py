import logging
import os
import json
import requests

# =========================
# Datadog Configuration
# =========================

DATADOG_API_KEY = os.getenv("DATADOG_API_KEY")

DATADOG_LOG_URL = os.getenv(
    "DATADOG_LOG_URL", "https://http-intake.logs.datadoghq.com/v1/input"
)

# ONLY exclude very noisy internals
EXCLUDED_LOGGERS = {
    "multipart",
    "httpcore",
    "urllib3",     # our own intake requests
}

# Optional allowlist (comma-separated logger prefixes)
# Example: DD_INCLUDE_LOGGERS=taskflow_app,api.workload
INCLUDE_LOGGERS = (
    os.getenv("DD_INCLUDE_LOGGERS").split(",")
    if os.getenv("DD_INCLUDE_LOGGERS")
    else None
)

# Fields copied from LogRecord attributes set via extra=
STRUCTURED_FIELDS = (
    "http.method",
    "http.url",
    "http.url_details.query_string",
    "http.status_code",
    "http.client_ip",
    "http.request_id",
    "duration_ms",
    "error.message",
    "error.type",
    "event_type",
)

# =========================
# Datadog Logging Handler
# =========================

class DatadogLogger(logging.Handler):
    def __init__(self, service: str, api_key: str = None):
        super().__init__()
        self.service = service
        self.api_key = api_key or DATADOG_API_KEY
        self.env = os.getenv("ENV", "qa")
        self.setFormatter(logging.Formatter("%(message)s"))

    def should_log(self, record: logging.LogRecord) -> bool:
        """
        Decide whether to send this log to Datadog.
        """
        logger_name = record.name

        # Allowlist mode (if configured)
        if INCLUDE_LOGGERS:
            return any(
                logger_name.startswith(prefix.strip())
                for prefix in INCLUDE_LOGGERS
                if prefix.strip()
            )

        for excluded in EXCLUDED_LOGGERS:
            if logger_name.startswith(excluded):
                return False

        return True

    def build_payload(self, record: logging.LogRecord) -> dict:
        payload = {
            "message": self.format(record),
            "ddsource": "python",
            "service": self.service,
            "hostname": os.getenv("HOSTNAME"),
            "status": record.levelname.lower(),
            "logger": record.name,
        }

        tags = [f"env:{self.env}", f"service:{self.service}"]
        for field in STRUCTURED_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value

        if payload.get("http.method"):
            tags.append(f"http.method:{payload['http.method'].lower()}")
        if payload.get("http.status_code"):
            tags.append(f"http.status_code:{payload['http.status_code']}")
        if payload.get("event_type"):
            tags.append(f"event_type:{payload['event_type']}")

        payload["ddtags"] = ",".join(tags)
        return payload

    def emit(self, record: logging.LogRecord):
        if not self.api_key or not self.should_log(record):
            return

        try:
            requests.post(
                DATADOG_LOG_URL,
                headers={
                    "Content-Type": "application/json",
                    "DD-API-KEY": self.api_key,
                },
                data=json.dumps(self.build_payload(record), default=str),
                timeout=2,
            )
        except requests.RequestException:
            self.handleError(record)
