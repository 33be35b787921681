"""
Writer adapters (output primitives).

The router only knows two narrow interfaces:

    ConsoleWriter.write(text, channel, color)
    FileWriter.create(path, text) / FileWriter.append(path, text)

Host output and stream output are both ConsoleWriters; which one is used is
the router's decision, not the writer's.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from pathlib import Path

from logroute.errors import FileSinkError
from logroute.records import Channel, HostColor


VERBOSE = 15  # between DEBUG and INFO
logging.addLevelName(VERBOSE, "VERBOSE")

STREAMS_LOGGER_NAME = "logroute.streams"


# ═══════════════════════════════════════════════════════════════════
#  Console writers
# ═══════════════════════════════════════════════════════════════════

class ConsoleWriter(ABC):
    """Receives rendered text for the host or for one stream channel."""

    @abstractmethod
    def write(self, text: str, channel: Channel, color: HostColor | None = None) -> None: ...


class TerminalWriter(ConsoleWriter):
    """
    Writes to stdout/stderr with ANSI color coding.
    Host text is colored; ERROR and WARNING channels go to stderr.
    """

    COLORS = {
        HostColor.BLACK: "\033[30m",
        HostColor.DARK_BLUE: "\033[34m",
        HostColor.DARK_GREEN: "\033[32m",
        HostColor.DARK_CYAN: "\033[36m",
        HostColor.DARK_RED: "\033[31m",
        HostColor.DARK_MAGENTA: "\033[35m",
        HostColor.DARK_YELLOW: "\033[33m",
        HostColor.GRAY: "\033[37m",
        HostColor.DARK_GRAY: "\033[90m",
        HostColor.BLUE: "\033[94m",
        HostColor.GREEN: "\033[92m",
        HostColor.CYAN: "\033[96m",
        HostColor.RED: "\033[91m",
        HostColor.MAGENTA: "\033[95m",
        HostColor.YELLOW: "\033[93m",
        HostColor.WHITE: "\033[97m",
    }
    RESET = "\033[0m"

    def __init__(self, color: bool = True):
        self.color = color

    def write(self, text: str, channel: Channel, color: HostColor | None = None) -> None:
        if self.color and color is not None:
            text = f"{self.COLORS[color]}{text}{self.RESET}"
        stream = sys.stderr if channel in (Channel.ERROR, Channel.WARNING) else sys.stdout
        print(text, file=stream, flush=True)


class LoggingStreamWriter(ConsoleWriter):
    """
    Maps stream channels onto a stdlib logging.Logger, so the application's
    own handler setup decides where each severity ends up.
    """

    LEVELS = {
        Channel.ERROR: logging.ERROR,
        Channel.WARNING: logging.WARNING,
        Channel.INFORMATION: logging.INFO,
        Channel.DEBUG: logging.DEBUG,
        Channel.VERBOSE: VERBOSE,
        Channel.HOST: logging.INFO,
    }

    def __init__(self, logger: logging.Logger | str | None = None):
        if logger is None or isinstance(logger, str):
            logger = logging.getLogger(logger or STREAMS_LOGGER_NAME)
        self.logger = logger

    def write(self, text: str, channel: Channel, color: HostColor | None = None) -> None:
        self.logger.log(self.LEVELS[channel], text)


@dataclass(frozen=True)
class WrittenEntry:
    text: str
    channel: Channel
    color: HostColor | None = None


class MemoryWriter(ConsoleWriter):
    """
    Ring buffer of the last N writes. Does not grow unbounded.
    """

    def __init__(self, capacity: int = 10000):
        self._buffer: deque[WrittenEntry] = deque(maxlen=capacity)

    def write(self, text: str, channel: Channel, color: HostColor | None = None) -> None:
        self._buffer.append(WrittenEntry(text, channel, color))

    @property
    def entries(self) -> list[WrittenEntry]:
        return list(self._buffer)

    def texts(self, channel: Channel | None = None) -> list[str]:
        return [e.text for e in self._buffer if channel is None or e.channel == channel]

    @property
    def count(self) -> int:
        return len(self._buffer)

    def clear(self) -> None:
        self._buffer.clear()


# ═══════════════════════════════════════════════════════════════════
#  File writers
# ═══════════════════════════════════════════════════════════════════

class FileWriter(ABC):
    """Each call writes one line: `text` followed by a newline."""

    @abstractmethod
    def create(self, path: Path, text: str) -> None:
        """Replace the file's contents with this line."""
        ...

    @abstractmethod
    def append(self, path: Path, text: str) -> None:
        """Add this line, creating the file if absent."""
        ...


class LocalFileWriter(FileWriter):
    """Writes to the local filesystem, creating parent directories."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def create(self, path: Path, text: str) -> None:
        self._write(path, text, "w")

    def append(self, path: Path, text: str) -> None:
        self._write(path, text, "a")

    def _write(self, path: Path, text: str, mode: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, mode, encoding=self.encoding) as f:
                f.write(text + "\n")
        except (OSError, UnicodeError) as exc:
            raise FileSinkError(f"Cannot write log file '{path}': {exc}", path) from exc


class MemoryFileWriter(FileWriter):
    """Keeps file contents in memory and records every call."""

    def __init__(self) -> None:
        self.files: dict[Path, list[str]] = {}
        self.calls: list[tuple[str, Path, str]] = []

    def create(self, path: Path, text: str) -> None:
        self.calls.append(("create", path, text))
        self.files[path] = [text]

    def append(self, path: Path, text: str) -> None:
        self.calls.append(("append", path, text))
        self.files.setdefault(path, []).append(text)

    def lines(self, path: Path) -> list[str]:
        return list(self.files.get(path, []))
