"""
Log events and the closed value sets they are built from.

LogLevel is the configured threshold; MessageType is the classification of a
single event. The three result types (SUCCESS, FAILURE, PARTIAL_FAILURE)
filter at INFORMATION severity but render their own {Result} text and color.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum

from logroute.errors import ParameterValidationError


def _normalize(name: str) -> str:
    return name.strip().upper().replace("_", "").replace(" ", "").replace("-", "")


class LogLevel(IntEnum):
    """Severity threshold. Higher rank lets more through."""
    OFF = 0
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    DEBUG = 4
    VERBOSE = 5

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve level from string name, case-insensitive."""
        key = _normalize(name)
        key = _LEVEL_ALIASES.get(key, key)
        for member in cls:
            if member.name == key:
                return member
        raise ParameterValidationError("LogLevel", name, [m.name for m in cls])

    @classmethod
    def from_value(cls, value: "int | str | LogLevel") -> "LogLevel":
        """Resolve level from int rank or string name."""
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise ParameterValidationError(
                    "LogLevel", value, [f"{m.name}={m.value}" for m in cls]
                ) from None
        raise TypeError(f"Expected int or str, got {type(value).__name__}")


_LEVEL_ALIASES = {"INFO": "INFORMATION", "WARN": "WARNING", "NONE": "OFF"}


class MessageType(str, Enum):
    """Classification of a single log event."""
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFORMATION = "INFORMATION"
    DEBUG = "DEBUG"
    VERBOSE = "VERBOSE"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    PARTIAL_FAILURE = "PARTIAL_FAILURE"

    @classmethod
    def from_name(cls, name: str) -> "MessageType":
        """Case-insensitive; accepts PartialFailure, partial_failure, PARTIAL-FAILURE."""
        key = _normalize(name)
        for member in cls:
            if _normalize(member.name) == key:
                return member
        raise ParameterValidationError("MessageType", name, [m.name for m in cls])

    @property
    def is_result(self) -> bool:
        return self in _RESULT_TYPES

    @property
    def severity(self) -> LogLevel:
        """Level at which this type starts being emitted."""
        return _SEVERITY[self]


_RESULT_TYPES = frozenset({MessageType.SUCCESS, MessageType.FAILURE, MessageType.PARTIAL_FAILURE})

_SEVERITY: dict[MessageType, LogLevel] = {
    MessageType.ERROR: LogLevel.ERROR,
    MessageType.WARNING: LogLevel.WARNING,
    MessageType.INFORMATION: LogLevel.INFORMATION,
    MessageType.DEBUG: LogLevel.DEBUG,
    MessageType.VERBOSE: LogLevel.VERBOSE,
    MessageType.SUCCESS: LogLevel.INFORMATION,
    MessageType.FAILURE: LogLevel.INFORMATION,
    MessageType.PARTIAL_FAILURE: LogLevel.INFORMATION,
}


class HostColor(str, Enum):
    """Named console colors accepted for host output."""
    BLACK = "Black"
    DARK_BLUE = "DarkBlue"
    DARK_GREEN = "DarkGreen"
    DARK_CYAN = "DarkCyan"
    DARK_RED = "DarkRed"
    DARK_MAGENTA = "DarkMagenta"
    DARK_YELLOW = "DarkYellow"
    GRAY = "Gray"
    DARK_GRAY = "DarkGray"
    BLUE = "Blue"
    GREEN = "Green"
    CYAN = "Cyan"
    RED = "Red"
    MAGENTA = "Magenta"
    YELLOW = "Yellow"
    WHITE = "White"

    @classmethod
    def from_name(cls, name: "str | HostColor") -> "HostColor":
        """Case-insensitive; accepts DarkBlue, darkblue, DARK_BLUE."""
        if isinstance(name, HostColor):
            return name
        if not isinstance(name, str):
            raise ParameterValidationError("HostTextColor", name, [m.value for m in cls])
        key = _normalize(name)
        for member in cls:
            if _normalize(member.value) == key:
                return member
        raise ParameterValidationError("HostTextColor", name, [m.value for m in cls])


class Destination(Enum):
    HOST = "host"
    STREAMS = "streams"


class Channel(Enum):
    """Where a console writer puts text: the host, or one stream per severity."""
    HOST = "host"
    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"
    DEBUG = "debug"
    VERBOSE = "verbose"


@dataclass(frozen=True)
class LogEvent:
    """
    One log call, created after classification and consumed immediately.

    caller_name is only filled in when the active template asks for it.
    """
    message: str
    message_type: MessageType
    timestamp: datetime
    caller_name: str = ""
    destination: Destination = Destination.HOST
    host_color: HostColor | None = None

    @classmethod
    def create(
        cls,
        message: str | None,
        message_type: MessageType,
        timestamp: datetime,
        caller_name: str = "",
        destination: Destination = Destination.HOST,
        host_color: HostColor | None = None,
    ) -> "LogEvent":
        """Factory that turns a None message into an empty string."""
        return cls(
            message="" if message is None else str(message),
            message_type=message_type,
            timestamp=timestamp,
            caller_name=caller_name,
            destination=destination,
            host_color=host_color,
        )
