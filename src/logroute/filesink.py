"""
File sink manager.

Decides create-vs-append for the configured log file:

    overwrite_log_file false            → always append
    overwrite_log_file true, first write → replace contents (NOT_YET_WRITTEN → WRITTEN)
    overwrite_log_file true, afterwards  → append

The written state is kept per resolved path and lives until reset(). It is
shared mutable state with no locking: concurrent writers to the same path
must coordinate outside this class.
"""

from __future__ import annotations

import os
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Callable

from logroute.adapters import FileWriter, LocalFileWriter
from logroute.config import LogConfiguration
from logroute.errors import FileSinkError


class FileSinkState(Enum):
    NOT_YET_WRITTEN = "not_yet_written"
    WRITTEN = "written"


def build_log_file_path(
    file_name: str,
    include_date: bool = False,
    today: date | None = None,
    base_dir: str | Path | None = None,
) -> Path:
    """
    Absolute path for a configured log file name.

    Relative names resolve against base_dir (default: the working directory).
    With include_date, "_YYYYMMDD" goes in front of the extension:
    logs/run.log → logs/run_20260118.log

    Raises:
        FileSinkError: the name cannot be a file path.
    """
    name = (file_name or "").strip()
    if not name:
        raise FileSinkError("Log file name is blank", file_name)
    if "\0" in name:
        raise FileSinkError(f"Log file name contains a NUL character: {name!r}", name)
    if name.endswith(("/", os.sep)):
        raise FileSinkError(f"Log file name is a directory: '{name}'", name)

    path = Path(name).expanduser()
    if path.name in ("", ".", ".."):
        raise FileSinkError(f"Log file name is a directory: '{name}'", name)
    if not path.is_absolute():
        path = Path(base_dir or Path.cwd()) / path

    if include_date:
        stamp = (today or date.today()).strftime("%Y%m%d")
        if path.name.startswith(".") and not path.suffix:
            # ".log" is all extension: stamp goes in front of it
            path = path.with_name(f"_{stamp}{path.name}")
        else:
            path = path.with_name(f"{path.stem}_{stamp}{path.suffix}")

    return Path(os.path.abspath(path))


class FileSinkManager:
    """Owns the log file path and its first-write-per-run state."""

    def __init__(
        self,
        writer: FileWriter | None = None,
        base_dir: str | Path | None = None,
        today: Callable[[], date] | None = None,
    ):
        self.writer = writer or LocalFileWriter()
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self._today = today or date.today
        self._written: set[Path] = set()
        self._cache_key: tuple | None = None
        self._cached_path: Path | None = None
        self.last_error: Exception | None = None

    # ── Path resolution ───────────────────────────────────────────

    def resolve_path(self, config: LogConfiguration) -> Path | None:
        """
        Current absolute path, or None when no file is configured.
        Cached until the file name, date flag, base directory or date changes.
        """
        if not config.has_log_file:
            return None

        base = self.base_dir or Path.cwd()
        today = self._today() if config.include_date_in_file_name else None
        key = (config.log_file_name, config.include_date_in_file_name, base, today)
        if key == self._cache_key:
            return self._cached_path

        path = build_log_file_path(
            config.log_file_name,
            include_date=config.include_date_in_file_name,
            today=today,
            base_dir=base,
        )
        self._cache_key = key
        self._cached_path = path
        return path

    # ── Writing ───────────────────────────────────────────────────

    def write(self, config: LogConfiguration, text: str) -> bool:
        """
        Hand one line to the file writer. Returns False when no file is
        configured (the writer is not called at all).

        Raises:
            FileSinkError: invalid path or the writer failed.
        """
        path = self.resolve_path(config)
        if path is None:
            return False

        if config.overwrite_log_file and path not in self._written:
            self.writer.create(path, text)
            self._written.add(path)
        else:
            self.writer.append(path, text)
        return True

    def state(self, path: str | Path) -> FileSinkState:
        if Path(os.path.abspath(path)) in self._written:
            return FileSinkState.WRITTEN
        return FileSinkState.NOT_YET_WRITTEN

    @property
    def written_paths(self) -> frozenset[Path]:
        return frozenset(self._written)

    def reset(self) -> None:
        """Forget written state and the cached path."""
        self._written.clear()
        self._cache_key = None
        self._cached_path = None
        self.last_error = None
