"""Filter expressions: ``key OP value`` conditions joined by ``&`` and ``|``.

An expression parses into a flat list of segments. Evaluation treats every
condition as AND-combined; ``|`` is accepted and serialized for the backend
but carries no local precedence. Keep that in mind before relying on ``|``
for local store filtering.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Sequence, Union

from vz_common.errors import ParseError
from vz_core.items import Item

logger = logging.getLogger(__name__)

EPSILON = 1e-9


class Operator(str, Enum):
    EQ = "="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    CONTAINS = ":"
    NOT_CONTAINS = "!:"


class Logical(str, Enum):
    AND = "and"
    OR = "or"


FilterValue = Union[str, int, float, bool]


@dataclass(frozen=True)
class Condition:
    key: str
    operator: Operator
    value: FilterValue


Segment = Union[Condition, Logical]

_LOGICAL_CHARS = {"&": Logical.AND, "|": Logical.OR}

# Two-character operators come first so "!=" never parses as "!" + "=".
_CONDITION_RE = re.compile(
    r"""^\s*
    (?P<key>[A-Za-z_][A-Za-z0-9_]*)\s*
    (?P<op>!=|<=|>=|!:|=|<|>|:)\s*
    (?:'(?P<single>[^']*)'|"(?P<double>[^"]*)"|(?P<bare>[^\s'"&|=<>!:]+))
    \s*$""",
    re.VERBOSE,
)
_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")
_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:[0-9]+\.[0-9]*|\.[0-9]+)$")


def _split_top_level(text: str) -> list[str | Logical]:
    """Split on ``&``/``|`` outside quotes, keeping the operators in order."""
    parts: list[str | Logical] = []
    current: list[str] = []
    quote: str | None = None
    for char in text:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
            continue
        if char in ("'", '"'):
            quote = char
            current.append(char)
        elif char in _LOGICAL_CHARS:
            parts.append("".join(current).strip())
            parts.append(_LOGICAL_CHARS[char])
            current = []
        else:
            current.append(char)
    if quote:
        raise ParseError(f"Unterminated quote in filter: {text}", context={"filter": text})
    parts.append("".join(current).strip())
    return parts


def _typed_value(raw: str) -> FilterValue:
    if _HEX_RE.match(raw):
        return int(raw[2:], 16)
    if _INT_RE.match(raw):
        return int(raw)
    if _FLOAT_RE.match(raw):
        return float(raw)
    if raw == "true":
        return True
    if raw == "false":
        return False
    return raw


def parse_condition(text: str) -> Condition:
    match = _CONDITION_RE.match(text)
    if match is None:
        raise ParseError(
            f"Failed to parse condition segment: '{text}'. Please check syntax.",
            context={"segment": text},
        )
    if match.group("bare") is not None:
        value: FilterValue = _typed_value(match.group("bare"))
    elif match.group("single") is not None:
        value = match.group("single")
    else:
        value = match.group("double")
    return Condition(key=match.group("key"), operator=Operator(match.group("op")), value=value)


def parse(text: str | None) -> list[Segment]:
    """Parse a filter expression; empty input means "no filter"."""
    if text is None or not text.strip():
        return []
    segments: list[Segment] = []
    for position, part in enumerate(_split_top_level(text)):
        expect_condition = position % 2 == 0
        if isinstance(part, Logical):
            segments.append(part)
            continue
        if not expect_condition or not part:
            raise ParseError(
                f"Dangling logical operator in filter: {text}", context={"filter": text}
            )
        segments.append(parse_condition(part))
    return segments


# --- field lookup ---------------------------------------------------------

_MISSING = object()

_KEY_ALIASES = {
    "protect": "protection",
    "module_name": "module",
    "class": "class_name",
}


def canonical_key(key: str) -> str:
    lowered = key.lower()
    return _KEY_ALIASES.get(lowered, lowered)


def field_value(item: Item, key: str) -> Any:
    """Return the item's value for a filter key, or a sentinel when inapplicable."""
    canonical = canonical_key(key)
    if canonical == "type":
        return item.kind.value
    if canonical == "saved":
        return item.saved
    if canonical == "value_type":
        value_type = getattr(item, "value_type", _MISSING)
        return value_type if value_type is _MISSING else value_type.value
    if canonical == "args":
        args = getattr(item, "args", _MISSING)
        return args if args is _MISSING else ", ".join(args)
    if canonical in {"name", "address", "size", "protection", "id", "module", "class_name", "return_type"}:
        return getattr(item, canonical, _MISSING)
    return _MISSING


# --- comparison -----------------------------------------------------------


def _as_number(text: str) -> int | float | None:
    raw = text.strip()
    if _HEX_RE.match(raw):
        return int(raw[2:], 16)
    if _INT_RE.match(raw):
        return int(raw)
    if _FLOAT_RE.match(raw):
        return float(raw)
    return None


def _compare_numbers(left: int | float, op: Operator, right: int | float) -> bool:
    if isinstance(left, int) and isinstance(right, int):
        equal = left == right
    else:
        equal = abs(float(left) - float(right)) < EPSILON
    if op is Operator.EQ:
        return equal
    if op is Operator.NE:
        return not equal
    if op is Operator.LT:
        return left < right and not equal
    if op is Operator.LE:
        return left < right or equal
    if op is Operator.GT:
        return left > right and not equal
    if op is Operator.GE:
        return left > right or equal
    return False


def _compare_strings(left: str, op: Operator, right: str) -> bool:
    if op is Operator.EQ:
        return left.casefold() == right.casefold()
    if op is Operator.NE:
        return left.casefold() != right.casefold()
    if op is Operator.LT:
        return left < right
    if op is Operator.LE:
        return left <= right
    if op is Operator.GT:
        return left > right
    if op is Operator.GE:
        return left >= right
    return False


def _text_forms(value: Any, *, with_hex: bool) -> list[str]:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int):
        forms = [str(value)]
        if with_hex:
            forms.append(hex(value))
        return forms
    return [str(value)]


def _contains(field: Any, value: FilterValue) -> bool:
    numeric_field = isinstance(field, int)
    haystacks = [text.casefold() for text in _text_forms(field, with_hex=numeric_field)]
    needles = [text.casefold() for text in _text_forms(value, with_hex=numeric_field)]
    return any(needle in hay for hay in haystacks for needle in needles)


def compare(field: Any, op: Operator, value: FilterValue) -> bool:
    """Type-aware comparison of an item field against a filter value."""
    if field is _MISSING or field is None:
        return False
    if isinstance(field, bool) or isinstance(value, bool):
        if isinstance(field, bool) and isinstance(value, bool):
            if op is Operator.EQ:
                return field == value
            if op is Operator.NE:
                return field != value
        return False
    if op is Operator.CONTAINS:
        return _contains(field, value)
    if op is Operator.NOT_CONTAINS:
        return not _contains(field, value)

    field_is_number = isinstance(field, (int, float))
    value_is_number = isinstance(value, (int, float))
    if field_is_number and value_is_number:
        return _compare_numbers(field, op, value)
    if not field_is_number and not value_is_number:
        return _compare_strings(str(field), op, str(value))
    # Cross-type: parse the string side as a number, else the condition fails.
    if field_is_number:
        parsed = _as_number(str(value))
        return parsed is not None and _compare_numbers(field, op, parsed)
    parsed = _as_number(str(field))
    return parsed is not None and _compare_numbers(parsed, op, value)


def matches(item: Item, condition: Condition) -> bool:
    return compare(field_value(item, condition.key), condition.operator, condition.value)


def evaluate(item: Item, segments: Sequence[Segment]) -> bool:
    """True when every condition holds; logical segments are not consulted."""
    return all(
        matches(item, segment) for segment in segments if isinstance(segment, Condition)
    )


def apply(items: Iterable[Item], segments: Sequence[Segment]) -> list[Item]:
    return [item for item in items if evaluate(item, segments)]


def to_backend(segments: Sequence[Segment]) -> list[Any]:
    """Serialize segments into the backend's ``[key, op, value]``/"and"/"or" list."""
    serialized: list[Any] = []
    for segment in segments:
        if isinstance(segment, Logical):
            serialized.append(segment.value)
            continue
        value = segment.value
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        serialized.append([canonical_key(segment.key), segment.operator.value, value])
    logger.debug("Serialized filter: %s", serialized)
    return serialized
