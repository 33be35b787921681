"""
Level filter and destination router.

Emission is decided once per event: an event of type T goes out iff

    rank(configured level) >= rank(T.severity)

and then goes out everywhere it is routed. There is no partial emission.

Routing:
1. HOST    → host writer, one colored write
2. STREAMS → stream writer, exactly one channel per message type
3. FILE    → file sink, independently of 1/2, whenever a file is configured
"""

from __future__ import annotations

import logging

from logroute.adapters import ConsoleWriter
from logroute.config import LogConfiguration
from logroute.errors import FileSinkError
from logroute.filesink import FileSinkManager
from logroute.records import Channel, Destination, HostColor, LogEvent, LogLevel, MessageType


_log = logging.getLogger(__name__)


def should_emit(level: LogLevel, message_type: MessageType) -> bool:
    """Level filter. OFF suppresses everything, VERBOSE emits everything."""
    return level >= message_type.severity


STREAM_CHANNELS: dict[MessageType, Channel] = {
    MessageType.ERROR: Channel.ERROR,
    MessageType.WARNING: Channel.WARNING,
    MessageType.DEBUG: Channel.DEBUG,
    MessageType.VERBOSE: Channel.VERBOSE,
}


def stream_channel(message_type: MessageType) -> Channel:
    """INFORMATION and the result types all share the information channel."""
    return STREAM_CHANNELS.get(message_type, Channel.INFORMATION)


def resolve_host_color(
    override: HostColor | None,
    config: LogConfiguration,
    message_type: MessageType,
) -> HostColor:
    """Per-call override > configured color for the type > INFORMATION color."""
    if override is not None:
        return override
    colors = config.host_text_color
    color = colors.for_type(message_type)
    return color if color is not None else colors.information


class DestinationRouter:
    """Writes one rendered line to the destinations an event is routed to."""

    def __init__(
        self,
        host_writer: ConsoleWriter,
        stream_writer: ConsoleWriter,
        file_sink: FileSinkManager,
    ):
        self.host_writer = host_writer
        self.stream_writer = stream_writer
        self.file_sink = file_sink

    def route(self, event: LogEvent, text: str, config: LogConfiguration) -> None:
        if event.destination is Destination.HOST:
            color = resolve_host_color(event.host_color, config, event.message_type)
            self.host_writer.write(text, Channel.HOST, color)
        else:
            self.stream_writer.write(text, stream_channel(event.message_type))

        self.write_file(text, config)

    def write_file(self, text: str, config: LogConfiguration) -> bool:
        """Best-effort file write. Failures never reach the caller."""
        if not config.has_log_file:
            return False
        try:
            return self.file_sink.write(config, text)
        except (FileSinkError, OSError) as exc:
            self.file_sink.last_error = exc
            _log.debug("File sink write failed: %s", exc)
            return False

    def describe(self) -> dict:
        return {
            "host_writer": type(self.host_writer).__name__,
            "stream_writer": type(self.stream_writer).__name__,
            "file_writer": type(self.file_sink.writer).__name__,
        }
