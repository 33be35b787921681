"""
Pydantic configuration schema for logroute.

One LogConfiguration is active per Logger. It is mutable: assignments are
validated and seen by the very next log call. Keys may be written in
snake_case or PascalCase, so both of these load:

    log_level: debug
    log_file_name: logs/run.log

    LogLevel: Debug
    HostTextColor:
      PartialFailure: DarkYellow

Usage:
    config = LogConfiguration.from_yaml("logging.yaml")
    config.log_level = "verbose"
    config.to_dict()
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal

from logroute.records import HostColor, LogLevel, MessageType


DEFAULT_MESSAGE_FORMAT = "{Timestamp:yyyy-MM-dd hh:mm:ss.fff} | {CallerName} | {MessageType} | {Message}"
DEFAULT_LOG_FILE_NAME = "Results.log"


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        validate_assignment=True,
    )


# ═══════════════════════════════════════════════════════════════════
#  Host colors
# ═══════════════════════════════════════════════════════════════════

class HostTextColors(_ConfigModel):
    """
    Host text color per message type. A type left as None is shown in the
    information color.
    """
    error: Optional[HostColor] = HostColor.RED
    warning: Optional[HostColor] = HostColor.YELLOW
    information: HostColor = HostColor.CYAN
    debug: Optional[HostColor] = HostColor.WHITE
    verbose: Optional[HostColor] = HostColor.WHITE
    success: Optional[HostColor] = HostColor.GREEN
    failure: Optional[HostColor] = HostColor.RED
    partial_failure: Optional[HostColor] = HostColor.YELLOW

    @field_validator("*", mode="before")
    @classmethod
    def _parse_color(cls, value: Any) -> Optional[HostColor]:
        if value is None:
            return None
        return HostColor.from_name(value)

    def for_type(self, message_type: MessageType) -> Optional[HostColor]:
        return getattr(self, message_type.name.lower())

    def set_color(self, message_type: MessageType, color: HostColor | str | None) -> None:
        setattr(self, message_type.name.lower(), color)


# ═══════════════════════════════════════════════════════════════════
#  Log configuration
# ═══════════════════════════════════════════════════════════════════

class LogConfiguration(_ConfigModel):
    """
    Everything a log call reads from its environment.

    A blank, whitespace-only or None log_file_name disables the file sink.
    """
    log_level: LogLevel = LogLevel.INFORMATION
    write_to_host: bool = True
    host_text_color: HostTextColors = Field(default_factory=HostTextColors)
    log_file_name: Optional[str] = DEFAULT_LOG_FILE_NAME
    overwrite_log_file: bool = True
    include_date_in_file_name: bool = True
    message_format: str = DEFAULT_MESSAGE_FORMAT

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> LogLevel:
        if isinstance(value, LogLevel):
            return value
        try:
            return LogLevel.from_value(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("log_file_name", mode="before")
    @classmethod
    def _parse_file_name(cls, value: Any) -> Optional[str]:
        if isinstance(value, Path):
            return str(value)
        return value

    @field_validator("message_format", mode="before")
    @classmethod
    def _parse_message_format(cls, value: Any) -> str:
        return DEFAULT_MESSAGE_FORMAT if value is None else value

    @property
    def has_log_file(self) -> bool:
        return bool(self.log_file_name and self.log_file_name.strip())

    def copy_config(self) -> "LogConfiguration":
        """Independent deep copy; changing it does not affect this one."""
        return self.model_copy(deep=True)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LogConfiguration":
        """Load and validate from a YAML file."""
        path = Path(path)
        return cls.from_yaml_string(path.read_text(encoding="utf-8"))

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> "LogConfiguration":
        """Load and validate from a YAML string. An empty document gives defaults."""
        data = yaml.safe_load(yaml_string) or {}
        return cls.model_validate(data)

    @classmethod
    def from_dict(cls, data: dict) -> "LogConfiguration":
        """Load and validate from a dict."""
        return cls.model_validate(data)

    def to_dict(self, by_alias: bool = False) -> dict:
        """Export as a plain dict (enum members become their names/values)."""
        data = self.model_dump(mode="json", by_alias=by_alias)
        key = "LogLevel" if by_alias else "log_level"
        data[key] = self.log_level.name
        return data

    def to_yaml(self, by_alias: bool = False) -> str:
        return yaml.safe_dump(self.to_dict(by_alias=by_alias), sort_keys=False)
