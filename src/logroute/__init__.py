"""
logroute: configurable structured logging.

One entry point, log_message(), classifies a message, applies the severity
threshold, renders it from a template and routes it to the host console or
to per-severity streams, plus an optional date-stamped log file.
"""

from logroute.core import Logger, get_logger, log_message, set_level
from logroute.config import HostTextColors, LogConfiguration
from logroute.errors import (
    ConfigurationError,
    FileSinkError,
    LogRouteError,
    ParameterBindingError,
    ParameterValidationError,
)
from logroute.records import Channel, Destination, HostColor, LogEvent, LogLevel, MessageType
from logroute.adapters import (
    ConsoleWriter,
    FileWriter,
    LocalFileWriter,
    LoggingStreamWriter,
    MemoryFileWriter,
    MemoryWriter,
    TerminalWriter,
)
from logroute.reconfig import LoggerReconfig

__all__ = [
    "Logger",
    "get_logger",
    "log_message",
    "set_level",
    "LogConfiguration",
    "HostTextColors",
    "LogRouteError",
    "ConfigurationError",
    "ParameterBindingError",
    "ParameterValidationError",
    "FileSinkError",
    "Channel",
    "Destination",
    "HostColor",
    "LogEvent",
    "LogLevel",
    "MessageType",
    "ConsoleWriter",
    "FileWriter",
    "LocalFileWriter",
    "LoggingStreamWriter",
    "MemoryFileWriter",
    "MemoryWriter",
    "TerminalWriter",
    "LoggerReconfig",
]
