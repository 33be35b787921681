"""
Message format templates.

A template is literal text with {FieldName} or {FieldName:FormatSpec}
placeholders, for example:

    "{Timestamp:yyyy-MM-dd hh:mm:ss.fff} | {CallerName} | {MessageType} | {Message}"

Recognized field names are case-insensitive. A placeholder whose name is not
recognized stays in the output exactly as written.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union


MESSAGE = "Message"
TIMESTAMP = "Timestamp"
CALLER_NAME = "CallerName"
MESSAGE_TYPE = "MessageType"
LOG_LEVEL = "LogLevel"
RESULT = "Result"

FIELD_NAMES: tuple[str, ...] = (MESSAGE, TIMESTAMP, CALLER_NAME, MESSAGE_TYPE, LOG_LEVEL, RESULT)

_CANONICAL = {name.lower(): name for name in FIELD_NAMES}

# Name may not contain ':' or braces; everything after the first ':' is the spec.
_PLACEHOLDER = re.compile(r"\{\s*([^{}:]+?)\s*(?::([^{}]*))?\}")


@dataclass(frozen=True)
class LiteralToken:
    text: str


@dataclass(frozen=True)
class FieldToken:
    name: str
    format_spec: str | None = None


Token = Union[LiteralToken, FieldToken]


@dataclass(frozen=True)
class MessageFormatInfo:
    """Compiled template: token sequence plus the set of fields it uses."""
    template: str
    tokens: tuple[Token, ...]
    field_names: frozenset[str]

    def uses(self, field_name: str) -> bool:
        return field_name in self.field_names


def compile_template(template: str | None) -> MessageFormatInfo:
    """Parse template text into literal and field tokens. Never raises."""
    text = template or ""
    tokens: list[Token] = []
    pending = ""
    pos = 0

    for match in _PLACEHOLDER.finditer(text):
        pending += text[pos:match.start()]
        pos = match.end()

        name = _CANONICAL.get(match.group(1).lower())
        if name is None:
            pending += match.group(0)
            continue

        if pending:
            tokens.append(LiteralToken(pending))
            pending = ""
        spec = match.group(2)
        tokens.append(FieldToken(name, spec if spec else None))

    pending += text[pos:]
    if pending:
        tokens.append(LiteralToken(pending))

    return MessageFormatInfo(
        template=text,
        tokens=tuple(tokens),
        field_names=frozenset(t.name for t in tokens if isinstance(t, FieldToken)),
    )


class TemplateCompiler:
    """
    Caches compiled templates by their text.

    A template is compiled once; later lookups with the same text return the
    same MessageFormatInfo. A changed template is a different key, so edits
    to the configured format take effect on the next call.
    """

    def __init__(self, max_entries: int = 64):
        self.max_entries = max_entries
        self._cache: dict[str, MessageFormatInfo] = {}
        self._compiled = 0

    def compile(self, template: str | None) -> MessageFormatInfo:
        key = template or ""
        info = self._cache.get(key)
        if info is not None:
            return info

        info = compile_template(key)
        self._compiled += 1
        if len(self._cache) >= self.max_entries:
            # Drop the oldest entry (dicts keep insertion order)
            self._cache.pop(next(iter(self._cache)))
        self._cache[key] = info
        return info

    @property
    def compiled_count(self) -> int:
        """How many times a template was actually parsed."""
        return self._compiled

    def clear(self) -> None:
        self._cache.clear()
