"""Logging configuration for the service."""

from __future__ import annotations

import contextvars
import logging

from swasthya.config import settings

voice_session_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "voice_session",
    default=None,
)


class VoiceSessionFilter(logging.Filter):
    """Attach the active voice session id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.voice_session = getattr(record, "voice_session", None) or voice_session_var.get() or "-"
        return True


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s voice_session=%(voice_session)s",
    )
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.addFilter(VoiceSessionFilter())
