"""
Field resolution.

Turns a compiled template plus a LogEvent into the final line of text. Also
holds the two environment capabilities the fields depend on: the clock that
stamps events and the call-stack inspector behind {CallerName}.
"""

from __future__ import annotations

import os
import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Sequence

from logroute.records import LogEvent
from logroute.template import (
    CALLER_NAME,
    LOG_LEVEL,
    MESSAGE,
    MESSAGE_TYPE,
    RESULT,
    TIMESTAMP,
    FieldToken,
    LiteralToken,
    MessageFormatInfo,
)


DEFAULT_TIMESTAMP_FORMAT = "yyyy-MM-dd hh:mm:ss.fff"

UNKNOWN_CALLER = "[UNKNOWN CALLER]"
CONSOLE_CALLER = "[CONSOLE]"

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


# ═══════════════════════════════════════════════════════════════════
#  Clock
# ═══════════════════════════════════════════════════════════════════

class ClockSource(ABC):
    @abstractmethod
    def now(self) -> datetime: ...


class SystemClock(ClockSource):
    """Local wall-clock time, the way a console user reads it."""

    def now(self) -> datetime:
        return datetime.now()


# ═══════════════════════════════════════════════════════════════════
#  Timestamp formatting
# ═══════════════════════════════════════════════════════════════════

# Quoted literals, escapes, runs of one pattern letter, or any single char.
_DATE_TOKEN = re.compile(r"'[^']*'|\"[^\"]*\"|\\.|y+|M+|d+|H+|h+|m+|s+|f+|F+|t+|.", re.DOTALL)


def format_timestamp(ts: datetime, spec: str | None = None) -> str:
    """
    Render a timestamp from a .NET-style custom format such as
    "yyyy-MM-dd hh:mm:ss.fff". A spec containing '%' is passed to strftime.
    """
    spec = spec or DEFAULT_TIMESTAMP_FORMAT
    if "%" in spec:
        return ts.strftime(spec)
    return "".join(_render_date_token(ts, tok) for tok in _DATE_TOKEN.findall(spec))


def _render_date_token(ts: datetime, tok: str) -> str:
    head, n = tok[0], len(tok)

    if head in ("'", '"') and n >= 2 and tok[-1] == head:
        return tok[1:-1]
    if head == "\\" and n == 2:
        return tok[1]

    if head == "y":
        if n >= 3:
            return f"{ts.year:0{n}d}"
        return f"{ts.year % 100:0{n}d}"
    if head == "M":
        if n >= 4:
            return ts.strftime("%B")
        if n == 3:
            return ts.strftime("%b")
        return f"{ts.month:0{n}d}"
    if head == "d":
        if n >= 4:
            return ts.strftime("%A")
        if n == 3:
            return ts.strftime("%a")
        return f"{ts.day:0{n}d}"
    if head == "H":
        return f"{ts.hour:0{min(n, 2)}d}"
    if head == "h":
        hour = ts.hour % 12 or 12
        return f"{hour:0{min(n, 2)}d}"
    if head == "m":
        return f"{ts.minute:0{min(n, 2)}d}"
    if head == "s":
        return f"{ts.second:0{min(n, 2)}d}"
    if head in ("f", "F"):
        digits = f"{ts.microsecond:06d}0"[:min(n, 7)]
        return digits.rstrip("0") if head == "F" else digits
    if head == "t":
        marker = "AM" if ts.hour < 12 else "PM"
        return marker[:n]
    return tok


# ═══════════════════════════════════════════════════════════════════
#  Caller name
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CallFrame:
    """One stack frame as the caller-name rules see it."""
    script_name: str | None
    function_name: str | None


class CallStackInspector:
    """Reads the live Python stack, innermost frame first."""

    def current_frames(self) -> list[CallFrame]:
        frames: list[CallFrame] = []
        frame = sys._getframe(1)
        try:
            while frame is not None:
                code = frame.f_code
                frames.append(CallFrame(code.co_filename, code.co_name))
                frame = frame.f_back
        finally:
            del frame
        return frames


def is_internal_frame(script_name: str) -> bool:
    """True for frames that belong to this package."""
    if _is_pseudo_file(script_name):
        return False
    return os.path.abspath(script_name).startswith(_PACKAGE_DIR + os.sep)


def _is_pseudo_file(script_name: str) -> bool:
    # "<stdin>", "<string>", "<python-input-0>", "<ipython-input-3-...>"
    return script_name.startswith("<") and script_name.endswith(">")


def resolve_caller_name(
    frames: Sequence[CallFrame],
    is_internal: Callable[[str], bool] = is_internal_frame,
) -> str:
    """
    Name the first frame outside the logging package.

    [UNKNOWN CALLER] when there is no such frame, [CONSOLE] when it has no
    file behind it, "Script <file>" for top-level script code, otherwise the
    function name.
    """
    for frame in frames:
        script = frame.script_name
        if script and is_internal(script):
            continue
        if not script or _is_pseudo_file(script):
            return CONSOLE_CALLER
        if not frame.function_name or frame.function_name == "<module>":
            return f"Script {os.path.basename(script)}"
        return frame.function_name
    return UNKNOWN_CALLER


class CallerNameProvider(ABC):
    @abstractmethod
    def caller_name(self) -> str: ...


class StackCallerNameProvider(CallerNameProvider):
    """Caller name from the live call stack. Never raises."""

    def __init__(
        self,
        inspector: CallStackInspector | None = None,
        is_internal: Callable[[str], bool] = is_internal_frame,
    ):
        self.inspector = inspector or CallStackInspector()
        self.is_internal = is_internal

    def caller_name(self) -> str:
        try:
            frames = self.inspector.current_frames()
        except Exception:
            return UNKNOWN_CALLER
        if not frames:
            return UNKNOWN_CALLER
        return resolve_caller_name(frames, self.is_internal)


class FixedCallerNameProvider(CallerNameProvider):
    """Caller supplies its own name; nothing is inspected."""

    def __init__(self, name: str):
        self.name = name

    def caller_name(self) -> str:
        return self.name or UNKNOWN_CALLER


# ═══════════════════════════════════════════════════════════════════
#  Resolver
# ═══════════════════════════════════════════════════════════════════

class FieldResolver:
    """Substitutes each field token of a compiled template from a LogEvent."""

    def render(self, info: MessageFormatInfo, event: LogEvent) -> str:
        parts = []
        for token in info.tokens:
            if isinstance(token, LiteralToken):
                parts.append(token.text)
            else:
                parts.append(self.resolve(token, event))
        return "".join(parts)

    def resolve(self, token: FieldToken, event: LogEvent) -> str:
        name = token.name
        if name == MESSAGE:
            return event.message or ""
        if name == TIMESTAMP:
            return format_timestamp(event.timestamp, token.format_spec)
        if name == CALLER_NAME:
            return event.caller_name or UNKNOWN_CALLER
        if name in (MESSAGE_TYPE, LOG_LEVEL):
            return event.message_type.name
        if name == RESULT:
            return event.message_type.name if event.message_type.is_result else ""
        return ""
