"""
Logger: the public logging entry point.

One call to log_message() runs the whole pipeline:

    classify → level filter → render template → route (host | streams) + file

Validation errors (conflicting switches, bad colors or type names) are raised
before the level filter, so a suppressed message still fails loudly on bad
arguments. Everything after the level filter degrades instead of raising.

Threading: the configuration and the file sink's written state are shared
mutable state with no locking. Hosts that log from several threads must
serialize log calls and configuration changes themselves, or give each
thread its own Logger.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from logroute.adapters import (
    ConsoleWriter,
    FileWriter,
    LocalFileWriter,
    LoggingStreamWriter,
    TerminalWriter,
)
from logroute.classification import (
    resolve_color_override,
    resolve_destination,
    resolve_message_type,
)
from logroute.config import LogConfiguration
from logroute.errors import ConfigurationError, FileSinkError
from logroute.fields import (
    CallerNameProvider,
    ClockSource,
    FieldResolver,
    StackCallerNameProvider,
    SystemClock,
)
from logroute.filesink import FileSinkManager
from logroute.records import HostColor, LogEvent, LogLevel, MessageType
from logroute.routing import DestinationRouter, should_emit
from logroute.template import CALLER_NAME, MessageFormatInfo, TemplateCompiler


class Logger:
    """
    Formatting and routing engine behind log_message().

    Usage:
        log = Logger.instance()
        log.log_message("Starting import")
        log.log_message("Import failed", is_error=True)
        log.success("Import finished", write_to_streams=True)
    """

    _instance: Optional["Logger"] = None
    _lock = threading.Lock()

    def __init__(
        self,
        config: LogConfiguration | None = None,
        host_writer: ConsoleWriter | None = None,
        stream_writer: ConsoleWriter | None = None,
        file_writer: FileWriter | None = None,
        clock: ClockSource | None = None,
        caller_name_provider: CallerNameProvider | None = None,
        base_dir: str | Path | None = None,
    ) -> None:
        self._config = config if config is not None else LogConfiguration()
        self._clock = clock or SystemClock()
        self._caller = caller_name_provider or StackCallerNameProvider()
        self._compiler = TemplateCompiler()
        self._fields = FieldResolver()
        self._file_sink = FileSinkManager(file_writer or LocalFileWriter(), base_dir=base_dir)
        self._router = DestinationRouter(
            host_writer=host_writer or TerminalWriter(),
            stream_writer=stream_writer or LoggingStreamWriter(),
            file_sink=self._file_sink,
        )

    @classmethod
    def instance(cls) -> "Logger":
        """Get or create the process-wide default Logger."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the process-wide Logger. The next instance() starts from defaults."""
        with cls._lock:
            cls._instance = None

    # ── Configuration ─────────────────────────────────────────────

    @property
    def config(self) -> LogConfiguration:
        """The live configuration. Changes apply to the next log call."""
        return self._config

    @config.setter
    def config(self, value: LogConfiguration) -> None:
        self._config = value
        self._file_sink.reset()

    @property
    def file_sink(self) -> FileSinkManager:
        return self._file_sink

    @property
    def router(self) -> DestinationRouter:
        return self._router

    @property
    def message_format_info(self) -> MessageFormatInfo:
        """Compiled form of the configured message format."""
        return self._compiler.compile(self._config.message_format)

    @property
    def compiler(self) -> TemplateCompiler:
        return self._compiler

    # ── Core Logging ──────────────────────────────────────────────

    def log_message(
        self,
        message: Any = None,
        message_type: MessageType | str | None = None,
        *,
        is_error: bool = False,
        is_warning: bool = False,
        is_information: bool = False,
        is_debug: bool = False,
        is_verbose: bool = False,
        is_success_result: bool = False,
        is_failure_result: bool = False,
        is_partial_failure_result: bool = False,
        write_to_host: bool = False,
        write_to_streams: bool = False,
        host_text_color: HostColor | str | None = None,
        message_format: str | None = None,
    ) -> None:
        """
        Log one message.

        Args:
            message: Text to log. None renders as an empty string.
            message_type: Explicit classification. Cannot be combined with
                the is_* switches.
            is_error ... is_partial_failure_result: At most one may be set.
            write_to_host / write_to_streams: Per-call destination; at most
                one may be set. Default comes from config.write_to_host.
            host_text_color: Named color for this message on the host.
            message_format: Template for this call only.

        Raises:
            ConfigurationError: conflicting switches, unknown message type
                or invalid color name.
        """
        config = self._config

        resolved_type = resolve_message_type(
            message_type,
            is_error=is_error,
            is_warning=is_warning,
            is_information=is_information,
            is_debug=is_debug,
            is_verbose=is_verbose,
            is_success_result=is_success_result,
            is_failure_result=is_failure_result,
            is_partial_failure_result=is_partial_failure_result,
        )
        destination = resolve_destination(
            config.write_to_host,
            write_to_host=write_to_host,
            write_to_streams=write_to_streams,
        )
        color = resolve_color_override(host_text_color)

        if not should_emit(config.log_level, resolved_type):
            return

        info = self._compiler.compile(
            message_format if message_format is not None else config.message_format
        )
        caller_name = self._caller.caller_name() if info.uses(CALLER_NAME) else ""

        event = LogEvent.create(
            message=message,
            message_type=resolved_type,
            timestamp=self._clock.now(),
            caller_name=caller_name,
            destination=destination,
            host_color=color,
        )
        text = self._fields.render(info, event)
        self._router.route(event, text, config)

    def is_enabled(self, message_type: MessageType | str) -> bool:
        """Would a message of this type be emitted at the current level?"""
        return should_emit(self._config.log_level, resolve_message_type(message_type))

    # ── Convenience Methods ───────────────────────────────────────

    def error(self, message: Any = None, **options: Any) -> None:
        self.log_message(message, MessageType.ERROR, **options)

    def warning(self, message: Any = None, **options: Any) -> None:
        self.log_message(message, MessageType.WARNING, **options)

    def info(self, message: Any = None, **options: Any) -> None:
        self.log_message(message, MessageType.INFORMATION, **options)

    def debug(self, message: Any = None, **options: Any) -> None:
        self.log_message(message, MessageType.DEBUG, **options)

    def verbose(self, message: Any = None, **options: Any) -> None:
        self.log_message(message, MessageType.VERBOSE, **options)

    def success(self, message: Any = None, **options: Any) -> None:
        self.log_message(message, MessageType.SUCCESS, **options)

    def failure(self, message: Any = None, **options: Any) -> None:
        self.log_message(message, MessageType.FAILURE, **options)

    def partial_failure(self, message: Any = None, **options: Any) -> None:
        self.log_message(message, MessageType.PARTIAL_FAILURE, **options)

    # ── Status ────────────────────────────────────────────────────

    def status(self) -> dict:
        """Current logger state for display."""
        config = self._config
        try:
            log_file = self._file_sink.resolve_path(config)
        except FileSinkError as exc:
            log_file = None
            self._file_sink.last_error = exc
        last_error = self._file_sink.last_error
        return {
            "log_level": config.log_level.name,
            "destination": "host" if config.write_to_host else "streams",
            "message_format": config.message_format,
            "fields": sorted(self.message_format_info.field_names),
            "log_file": str(log_file) if log_file else None,
            "overwrite_log_file": config.overwrite_log_file,
            "written_files": sorted(str(p) for p in self._file_sink.written_paths),
            "last_file_error": str(last_error) if last_error else None,
            "writers": self._router.describe(),
            "emitting": [
                mt.name for mt in MessageType if should_emit(config.log_level, mt)
            ],
        }


def log_message(message: Any = None, message_type: MessageType | str | None = None, **options: Any) -> None:
    """Log through the process-wide Logger. Same arguments as Logger.log_message."""
    Logger.instance().log_message(message, message_type, **options)


def get_logger() -> Logger:
    return Logger.instance()


def set_level(level: LogLevel | int | str) -> None:
    """Shortcut for changing the process-wide threshold."""
    try:
        Logger.instance().config.log_level = level
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid log level: {exc}") from exc
