"""Statement classification and INSERT line protocol parsing."""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass, field
from typing import Any

_INT64_MAX = 2**63 - 1
_INT64_MIN = -(2**63)
_UINT64_MAX = 2**64 - 1

_QUERY_KEYWORDS = frozenset({"SELECT", "SHOW", "EXPLAIN", "DESCRIBE", "DESC", "WITH"})
_COMMAND_KEYWORDS = frozenset({"CREATE", "DROP", "ALTER", "UPDATE", "DELETE"})

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"[0-9]+")
_DECIMAL_FLOAT = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL_FLOAT = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)

_TRUE_WORDS = frozenset({"true", "TRUE", "t", "T"})
_FALSE_WORDS = frozenset({"false", "FALSE", "f", "F"})


class StatementType(enum.Enum):
    """Category of a statement sent to the server."""

    UNKNOWN = "unknown"
    QUERY = "query"
    COMMAND = "command"
    INSERT = "insert"


class LineProtocolError(ValueError):
    """Raised when an INSERT statement or line protocol text is malformed."""


@dataclass
class ParsedPoint:
    """A point read from line protocol text."""

    measurement: str = ""
    tags: dict[str, str] = field(default_factory=dict)
    fields: dict[str, Any] = field(default_factory=dict)
    timestamp: int = 0


def is_query_keyword(word: str) -> bool:
    return word in _QUERY_KEYWORDS


def is_command_keyword(word: str) -> bool:
    return word in _COMMAND_KEYWORDS


def is_insert_keyword(word: str) -> bool:
    return word == "INSERT"


def clean_command(command: str) -> str:
    """Strip comments and surrounding whitespace from a command."""
    text = command.strip()

    idx = text.find("--")
    if idx != -1:
        text = text[:idx].strip()

    while "/*" in text:
        start = text.find("/*")
        end = text.find("*/")
        if end == -1 or end <= start:
            break
        before, after = text[:start], text[end + 2 :]
        if before and after and not before.endswith(" ") and not after.startswith(" "):
            text = before + " " + after
        else:
            text = before + after

    return text.strip()


def parse_statement_type(command: str) -> StatementType:
    """Classify a command by its first keyword."""
    words = clean_command(command).upper().split()
    if not words:
        return StatementType.UNKNOWN
    first = words[0]
    if is_query_keyword(first):
        return StatementType.QUERY
    if is_command_keyword(first):
        return StatementType.COMMAND
    if is_insert_keyword(first):
        return StatementType.INSERT
    return StatementType.UNKNOWN


def parse_insert_statement(command: str) -> list[ParsedPoint]:
    """Parse ``INSERT <line protocol>`` into points."""
    text = command.strip()
    if text[:6].upper() != "INSERT":
        raise LineProtocolError("not an INSERT statement")
    try:
        point = parse_line_protocol_to_point(text[6:].strip())
    except LineProtocolError as err:
        raise LineProtocolError(f"invalid line protocol format: {err}") from err
    return [point]


class _State(enum.Enum):
    MEASUREMENT = 0
    TAG_KEY = 1
    TAG_VALUE = 2
    FIELD_KEY = 3
    FIELD_VALUE = 4
    TIMESTAMP = 5


def parse_line_protocol_to_point(lp: str) -> ParsedPoint:
    """Parse one line of line protocol, honouring backslash escapes and quotes."""
    point = ParsedPoint()
    state = _State.MEASUREMENT
    measurement: list[str] = []
    key: list[str] = []
    value: list[str] = []
    escape = False
    in_quote = False

    def take_measurement() -> None:
        point.measurement = "".join(measurement)
        if not point.measurement:
            raise LineProtocolError("measurement name is required")

    def flush_tag() -> None:
        point.tags["".join(key)] = "".join(value)
        key.clear()
        value.clear()

    def flush_field() -> None:
        point.fields["".join(key)] = parse_field_value("".join(value))
        key.clear()
        value.clear()

    for pos, ch in enumerate(lp):
        if ch == "\\" and not escape:
            escape = True
            continue

        if ch == '"' and not escape and state in (_State.FIELD_KEY, _State.FIELD_VALUE):
            in_quote = not in_quote
            continue

        plain = not escape
        if state is _State.MEASUREMENT:
            if plain and ch == ",":
                take_measurement()
                state = _State.TAG_KEY
                continue
            if plain and ch == " ":
                take_measurement()
                state = _State.FIELD_KEY
                continue
            measurement.append(ch)
        elif state is _State.TAG_KEY:
            if plain and ch == "=":
                state = _State.TAG_VALUE
                continue
            key.append(ch)
        elif state is _State.TAG_VALUE:
            if plain and ch == ",":
                flush_tag()
                state = _State.TAG_KEY
                continue
            if plain and ch == " ":
                flush_tag()
                state = _State.FIELD_KEY
                continue
            value.append(ch)
        elif state is _State.FIELD_KEY:
            if plain and not in_quote and ch == "=":
                state = _State.FIELD_VALUE
                continue
            key.append(ch)
        elif state is _State.FIELD_VALUE:
            if plain and not in_quote and ch == ",":
                flush_field()
                state = _State.FIELD_KEY
                continue
            if plain and not in_quote and ch == " ":
                flush_field()
                state = _State.TIMESTAMP
                continue
            value.append(ch)
        else:
            if "0" <= ch <= "9":
                value.append(ch)
            else:
                raise LineProtocolError(
                    f"invalid timestamp: unexpected character '{ch}' at position {pos}"
                )

        escape = False

    if state is _State.TAG_VALUE and key:
        flush_tag()
    elif state is _State.FIELD_VALUE and key:
        flush_field()
    elif state is _State.TIMESTAMP and value:
        digits = "".join(value)
        timestamp = int(digits)
        if timestamp > _INT64_MAX:
            raise LineProtocolError(f"invalid timestamp: {digits}")
        point.timestamp = timestamp

    if not point.measurement:
        raise LineProtocolError("measurement name is required")
    if not point.fields:
        raise LineProtocolError("at least one field is required")
    return point


def _parse_float(text: str) -> float | None:
    if _SPECIAL_FLOAT.fullmatch(text):
        return float(text)
    if _DECIMAL_FLOAT.fullmatch(text):
        result = float(text)
    elif _HEX_FLOAT.fullmatch(text):
        try:
            result = float.fromhex(text)
        except OverflowError:
            return None
    else:
        return None
    if math.isinf(result):
        return None
    return result


def parse_field_value(value_str: str) -> Any:
    """Infer the type of a line protocol field value."""
    text = value_str.strip()

    if text.endswith(("i", "I")):
        digits = text[:-1]
        if _SIGNED_INT.fullmatch(digits):
            number = int(digits)
            if _INT64_MIN <= number <= _INT64_MAX:
                return number

    if text.endswith(("u", "U")):
        digits = text[:-1]
        if _UNSIGNED_INT.fullmatch(digits):
            number = int(digits)
            if number <= _UINT64_MAX:
                return number

    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text[1:-1]

    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False

    number = _parse_float(text)
    if number is not None:
        return number

    return text