"""
Event logging for meeturi.

The library never fails on URI input; what it absorbs (an override value that
cannot be encoded, a parameter that cannot be decoded) is reported as a
LogEvent record carrying the group, key and error as ``event_data``.

Library code only creates loggers below ``meeturi`` and never installs
handlers. Applications that want the records rendered call setup_logging().

Usage:
    from meeturi.common.logging import get_logger
    from meeturi.common.log_events import LogEvent

    logger = get_logger(__name__)
    logger.log_event(LogEvent.OVERRIDE_ENCODE_FAILED, group="config", key="p2p")
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from meeturi.common.log_events import LogEvent, LogLevel, get_default_level

LIBRARY_LOGGER = 'meeturi'

LEVEL_MAP = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}


def _event_of(record: logging.LogRecord) -> tuple[str | None, dict[str, Any]]:
    return getattr(record, 'event', None), getattr(record, 'event_data', None) or {}


class EventFormatter(logging.Formatter):
    """One JSON object per record, event data nested under ``data``"""

    def format(self, record: logging.LogRecord) -> str:
        event, data = _event_of(record)
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if event:
            log_data['event'] = event
            log_data['data'] = data

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    One line per record, e.g.

        WARNING params.decode_failed meeturi.uri.params: Failed to parse ... [key=b error=...]
    """

    def format(self, record: logging.LogRecord) -> str:
        event, data = _event_of(record)

        parts = [record.levelname]
        if event:
            parts.append(event)
        parts.append(f"{record.name}: {record.getMessage()}")
        if data:
            parts.append('[' + ' '.join(f"{k}={v}" for k, v in data.items()) + ']')

        message = ' '.join(parts)
        if record.exc_info:
            message += '\n' + self.formatException(record.exc_info)
        return message


FORMATTERS = {
    'human': HumanReadableFormatter,
    'json': EventFormatter,
}


class UriLogger(logging.LoggerAdapter):
    """
    The logging interface used across meeturi.

    Examples:
        logger = get_logger(__name__)
        logger.log_event(LogEvent.PARAM_DECODE_FAILED, key="config.p2p", error="...")
    """

    def log_event(
        self,
        event: LogEvent,
        message: str | None = None,
        level: LogLevel | None = None,
        **data: Any
    ) -> None:
        """
        Log an event with structured data.

        Args:
            event: Event type from LogEvent enum
            message: Human-readable message (derived from the event if None)
            level: Log level (default level of the event if None)
            **data: Structured data fields (group, key, error, ...)
        """
        if level is None:
            level = get_default_level(event)

        if message is None:
            message = event.value.replace('.', ' ').replace('_', ' ').title()

        self.log(LEVEL_MAP[level], message, extra={'event': event.value, 'event_data': data})

    def process(self, msg, kwargs):
        return msg, kwargs


def setup_logging(
    log_level: str = 'INFO',
    log_format: str = 'human',  # 'human' or 'json'
    log_file: Path | None = None,
) -> logging.Logger:
    """
    Render meeturi's records on stderr, and in ``log_file`` when given.

    Handlers go on the ``meeturi`` logger, so the application's root logger is
    left alone. Calling it again replaces the handlers installed before.

    Example:
        config = load_config()
        setup_logging(**config.logging.to_dict())
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    formatter = FORMATTERS.get(log_format, HumanReadableFormatter)()

    logger = logging.getLogger(LIBRARY_LOGGER)
    for handler in logger.handlers[:]:
        if isinstance(handler.formatter, tuple(FORMATTERS.values())):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> UriLogger:
    """Get a UriLogger instance, use this in every module (name=__name__)."""
    return UriLogger(logging.getLogger(name), {})
