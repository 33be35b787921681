"""
Error taxonomy.

ConfigurationError is always raised to the caller. FileSinkError is raised by
the file sink and swallowed at the routing boundary: file logging is
best-effort and never aborts a log call.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class LogRouteError(Exception):
    """Base class for all logroute errors."""


class ConfigurationError(LogRouteError, ValueError):
    """Conflicting switches, or an invalid level/message type/color value."""


class ParameterBindingError(ConfigurationError):
    """An explicit message type was combined with a message type switch."""


class ParameterValidationError(ConfigurationError):
    """A named value (color, message type, level) is not in its closed set."""

    def __init__(self, parameter: str, value: Any, valid: list[str] | None = None):
        self.parameter = parameter
        self.value = value
        self.valid = valid or []
        msg = f"Cannot validate argument on parameter '{parameter}': invalid value '{value}'."
        if self.valid:
            msg += f" Valid values: {', '.join(self.valid)}"
        super().__init__(msg)


class FileSinkError(LogRouteError):
    """The log file could not be created or appended to."""

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = path
        super().__init__(message)
