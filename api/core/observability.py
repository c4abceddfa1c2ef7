"""
Logging setup.

Modules log through `logging.getLogger(__name__)` with `event key=value`
messages; this module only decides how records are rendered.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = ("path", "error_code", "backend", "reason")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class GatewayLogHandler(logging.StreamHandler):
    """Root handler installed by setup_logging; replaced, never stacked."""


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    handler = GatewayLogHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    root = logging.getLogger()
    # Lifespan can run more than once per process (tests, reload).
    for existing in list(root.handlers):
        if isinstance(existing, GatewayLogHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
