"""Structured Logging — JSON formatter, credential redaction and logging setup.

Invariants:
    - Every JSON line carries timestamp, level, logger and message
    - Identity extras (operation, error_code, attempt, path, status_code,
      api_error_type, cart_bound) are copied when present; other extras are not
    - Values that look like customer access tokens or passwords are masked before
      any handler formats the record
    - setup_logging is idempotent: calling it twice does not duplicate output

Design Decisions:
    - Redaction as a logging.Filter on the handler: covers third-party loggers
      (httpx, uvicorn) as well as ours
"""

import json
import logging
import re
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "operation", "error_code", "attempt", "path", "status_code",
    "api_error_type", "cart_bound",
)

_SECRET_PATTERN = re.compile(
    r"(?P<key>customerAccessToken|accessToken|password|passwordConfirm|"
    r"newPassword2?|currentPassword)(?P<sep>[\"']?\s*[:=]\s*[\"']?)[^\"'&,\s}]+",
    re.IGNORECASE,
)
_MASK = "***"
_HANDLER_NAME = "storefront_identity"


def redact(text: str) -> str:
    """Mask `key=value` / `"key": "value"` pairs whose key names a credential."""
    return _SECRET_PATTERN.sub(lambda m: f"{m['key']}{m['sep']}{_MASK}", text)


class RedactingFilter(logging.Filter):
    """Rewrites the rendered message with credentials masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = redact(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = redact(self.formatException(record.exc_info))
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the service handler on the root logger (replacing a previous one)."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.addFilter(RedactingFilter())
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
