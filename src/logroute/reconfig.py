"""
Runtime configuration surface for a Logger.

Provides control over logging without rebuilding the Logger:
- Read a copy of, change, or reset the configuration
- Turn the log file on and off
- Change host colors per message type
- Load settings from YAML

Usage:
    reconfig = LoggerReconfig()
    reconfig.set_configuration(log_level="debug", write_to_streams=True)
    reconfig.enable_log_file("logs/run.log", overwrite_log_file=False)
    reconfig.reset_configuration()
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from logroute.config import DEFAULT_LOG_FILE_NAME, HostTextColors, LogConfiguration
from logroute.core import Logger
from logroute.errors import ConfigurationError
from logroute.records import HostColor, LogLevel, MessageType


# Settings that decide which file is written and how; changing any of them
# starts the overwrite-once cycle again.
FILE_SETTINGS = frozenset({"log_file_name", "overwrite_log_file", "include_date_in_file_name"})


def _exclusive(name_a: str, a: bool, name_b: str, b: bool) -> bool | None:
    """Two switches for one boolean: True/False when one is set, None when neither."""
    if a and b:
        raise ConfigurationError(f"Only one of {name_a} and {name_b} may be set")
    if a:
        return True
    if b:
        return False
    return None


class LoggerReconfig:
    """Runtime reconfiguration interface for Logger."""

    def __init__(self, logger: Logger | None = None):
        self._log = logger or Logger.instance()

    # ── Read ──────────────────────────────────────────────────

    def get_configuration(self) -> LogConfiguration:
        """Deep copy of the active configuration. Editing it changes nothing."""
        return self._log.config.copy_config()

    # ── Change ────────────────────────────────────────────────

    def set_configuration(
        self,
        config: LogConfiguration | dict | None = None,
        *,
        log_level: LogLevel | int | str | None = None,
        write_to_host: bool = False,
        write_to_streams: bool = False,
        host_text_color: HostTextColors | dict | None = None,
        log_file_name: str | Path | None = None,
        overwrite_log_file: bool = False,
        append_to_log_file: bool = False,
        include_date_in_file_name: bool = False,
        exclude_date_from_file_name: bool = False,
        message_format: str | None = None,
    ) -> LogConfiguration:
        """
        Replace the configuration wholesale, or change individual settings.

        Paired switches (write_to_host/write_to_streams,
        overwrite_log_file/append_to_log_file,
        include_date_in_file_name/exclude_date_from_file_name) are mutually
        exclusive; leaving both unset keeps the current value.

        Raises:
            ConfigurationError: conflicting switches or invalid values.
        """
        changes: dict[str, Any] = {}

        host = _exclusive("write_to_host", write_to_host, "write_to_streams", write_to_streams)
        if host is not None:
            changes["write_to_host"] = host
        overwrite = _exclusive(
            "overwrite_log_file", overwrite_log_file, "append_to_log_file", append_to_log_file
        )
        if overwrite is not None:
            changes["overwrite_log_file"] = overwrite
        include_date = _exclusive(
            "include_date_in_file_name", include_date_in_file_name,
            "exclude_date_from_file_name", exclude_date_from_file_name,
        )
        if include_date is not None:
            changes["include_date_in_file_name"] = include_date

        if log_level is not None:
            changes["log_level"] = log_level
        if host_text_color is not None:
            changes["host_text_color"] = host_text_color
        if log_file_name is not None:
            changes["log_file_name"] = log_file_name
        if message_format is not None:
            changes["message_format"] = message_format

        if config is not None:
            new_config = self._validate(config)
            self._log.config = new_config
            if not changes:
                return new_config

        self._apply(changes)
        return self._log.config

    def reset_configuration(self) -> LogConfiguration:
        """Back to defaults; the log file will be overwritten again on next write."""
        self._log.config = LogConfiguration()
        return self._log.config

    def load_configuration(self, path: str | Path) -> LogConfiguration:
        """Replace the configuration with one read from a YAML file."""
        try:
            config = LogConfiguration.from_yaml(path)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid log configuration in '{path}': {exc}") from exc
        self._log.config = config
        return config

    # ── Log file ──────────────────────────────────────────────

    def enable_log_file(
        self,
        log_file_name: str | Path | None = None,
        *,
        overwrite_log_file: bool = False,
        append_to_log_file: bool = False,
        include_date_in_file_name: bool = False,
        exclude_date_from_file_name: bool = False,
    ) -> Path | None:
        """
        Turn the file sink on. Without a name, the current name is kept, or the
        default name is used if none is set. Returns the resolved path.
        """
        name = log_file_name
        if name is None:
            name = self._log.config.log_file_name if self._log.config.has_log_file else DEFAULT_LOG_FILE_NAME
        self.set_configuration(
            log_file_name=name,
            overwrite_log_file=overwrite_log_file,
            append_to_log_file=append_to_log_file,
            include_date_in_file_name=include_date_in_file_name,
            exclude_date_from_file_name=exclude_date_from_file_name,
        )
        return self.log_file_path()

    def disable_log_file(self) -> None:
        """Turn the file sink off; no file writes happen afterwards."""
        self._apply({"log_file_name": ""})

    def log_file_path(self) -> Path | None:
        """Resolved path the next file write would go to."""
        return self._log.file_sink.resolve_path(self._log.config)

    # ── Colors ────────────────────────────────────────────────

    def set_host_text_color(
        self, message_type: MessageType | str, color: HostColor | str | None
    ) -> None:
        """Change the host color of one message type. None falls back to the information color."""
        if isinstance(message_type, str):
            message_type = MessageType.from_name(message_type)
        try:
            self._log.config.host_text_color.set_color(message_type, color)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc

    # ── Level ─────────────────────────────────────────────────

    def set_level(self, level: LogLevel | int | str) -> None:
        self._apply({"log_level": level})

    def get_level(self) -> LogLevel:
        return self._log.config.log_level

    # ── Status ────────────────────────────────────────────────

    def status(self) -> dict[str, Any]:
        """Logger status plus the full configuration as plain data."""
        return {
            **self._log.status(),
            "configuration": self._log.config.to_dict(by_alias=True),
        }

    # ── Internals ─────────────────────────────────────────────

    def _validate(self, config: LogConfiguration | dict) -> LogConfiguration:
        if isinstance(config, LogConfiguration):
            return config
        try:
            return LogConfiguration.from_dict(config)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid log configuration: {exc}") from exc

    def _apply(self, changes: dict[str, Any]) -> None:
        """Validate all changes first, then assign them to the live config."""
        if not changes:
            return
        live = self._log.config
        try:
            LogConfiguration.model_validate({**live.model_dump(), **changes})
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid log configuration: {exc}") from exc

        for name, value in changes.items():
            setattr(live, name, value)
        if FILE_SETTINGS & changes.keys():
            self._log.file_sink.reset()
