from __future__ import annotations

import logging
import sys


class NoBodyFilter(logging.Filter):
    """Redacts user content from log records; only ids, slugs and counts may be logged."""
    BLOCK_KEYS = {
        "body",
        "request_body",
        "response_body",
        "content",
        "payload",
        "input",
        "output",
        "email",
        "topic",
    }

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, dict):
            for k in list(record.args.keys()):
                if k in self.BLOCK_KEYS:
                    record.args[k] = "[REDACTED]"
        for k in self.BLOCK_KEYS:
            if hasattr(record, k):
                setattr(record, k, "[REDACTED]")
        return True


class _ExtraFormatter(logging.Formatter):
    """Appends ``extra=`` fields as key=value pairs after the event name."""

    _STD = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {k: v for k, v in vars(record).items() if k not in self._STD}
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(extras.items()))
        return line


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_ExtraFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
    for h in root.handlers:
        if not any(isinstance(f, NoBodyFilter) for f in h.filters):
            h.addFilter(NoBodyFilter())
    logging.getLogger("uvicorn.error").addFilter(NoBodyFilter())
    logging.getLogger("uvicorn.access").addFilter(NoBodyFilter())
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
