"""
Centralized Event Type Definitions for Logging.

This module defines ALL valid event types as an Enum to ensure consistency
across the library. NO other event types are allowed.

Usage:
    from meeturi.common.log_events import LogEvent
    logger.log_event(LogEvent.OVERRIDE_ENCODE_FAILED, group="config", key=key)
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    All valid logging event types emitted by meeturi.

    Adding a new event requires:
    1. Adding it to this Enum
    2. Giving it a default level in EVENT_LOG_LEVELS
    3. Using it via the logger.log_event() method
    """

    # ============================================================================
    # NORMALIZATION EVENTS
    # ============================================================================
    OVERRIDE_ENCODE_FAILED = "normalize.override_encode_failed"

    # ============================================================================
    # URL PARAMETER EVENTS
    # ============================================================================
    PARAM_DECODE_FAILED = "params.decode_failed"

    # ============================================================================
    # SYSTEM EVENTS
    # ============================================================================
    CONFIG_LOADED = "system.config_loaded"
    CONFIG_ENV_OVERRIDE = "system.config_env_override"
    CONFIGURATION_ERROR = "error.configuration"


class LogLevel(str, Enum):
    """Standard logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Event type to default log level mapping
EVENT_LOG_LEVELS = {
    # Per-item failures are absorbed, so they only warn
    LogEvent.OVERRIDE_ENCODE_FAILED: LogLevel.WARNING,
    LogEvent.PARAM_DECODE_FAILED: LogLevel.WARNING,

    # System
    LogEvent.CONFIG_LOADED: LogLevel.INFO,
    LogEvent.CONFIG_ENV_OVERRIDE: LogLevel.DEBUG,
    LogEvent.CONFIGURATION_ERROR: LogLevel.ERROR,
}


def get_default_level(event: LogEvent) -> LogLevel:
    """Get the default log level for an event type."""
    return EVENT_LOG_LEVELS.get(event, LogLevel.INFO)
