"""
Shared fixtures: a Logger wired to in-memory writers and a fixed clock.
"""

from dataclasses import dataclass
from datetime import datetime

import pytest

from logroute.adapters import MemoryFileWriter, MemoryWriter
from logroute.config import LogConfiguration
from logroute.core import Logger
from logroute.fields import ClockSource


FIXED_TS = datetime(2026, 2, 12, 14, 32, 5, 123456)


class FixedClock(ClockSource):
    def __init__(self, ts: datetime = FIXED_TS):
        self.ts = ts

    def now(self) -> datetime:
        return self.ts


@dataclass
class Harness:
    log: Logger
    host: MemoryWriter
    streams: MemoryWriter
    files: MemoryFileWriter

    @property
    def config(self) -> LogConfiguration:
        return self.log.config


@pytest.fixture(autouse=True)
def reset_logger():
    """Reset the process-wide Logger before and after each test."""
    Logger.reset()
    yield
    Logger.reset()


@pytest.fixture
def make_harness(tmp_path):
    """
    Build a Logger with memory writers. No log file and a bare {Message}
    template unless overridden.
    """
    def _make(**config_values) -> Harness:
        values = {"log_file_name": "", "message_format": "{Message}"}
        values.update(config_values)
        host, streams, files = MemoryWriter(), MemoryWriter(), MemoryFileWriter()
        log = Logger(
            config=LogConfiguration(**values),
            host_writer=host,
            stream_writer=streams,
            file_writer=files,
            clock=FixedClock(),
            base_dir=tmp_path,
        )
        return Harness(log, host, streams, files)

    return _make


@pytest.fixture
def harness(make_harness) -> Harness:
    return make_harness()
