"""
Runtime values for the turtle scripting language.

A Value is one of a small closed set of variants: Number, Text, List and
Nothing. Values are immutable; list operations build new lists.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable


class ValueKind(Enum):
    """The closed set of value variants."""
    NUMBER = "number"
    TEXT = "text"
    LIST = "list"
    NOTHING = "nothing"


@dataclass(frozen=True)
class Value:
    """
    A runtime value tagged with its variant.

    ``data`` is a ``float`` for numbers, a ``str`` for text, a ``tuple`` of
    Values for lists and ``None`` for nothing.
    """
    kind: ValueKind
    data: Any

    def __repr__(self) -> str:
        if self.kind == ValueKind.NOTHING:
            return "Nothing"
        if self.kind == ValueKind.LIST:
            return "[" + ", ".join(repr(v) for v in self.data) + "]"
        if self.kind == ValueKind.NUMBER:
            return f"{self.data:g}"
        return repr(self.data)

    def __str__(self) -> str:
        if self.kind == ValueKind.TEXT:
            return self.data
        return repr(self)

    @property
    def is_number(self) -> bool:
        return self.kind == ValueKind.NUMBER

    @property
    def is_text(self) -> bool:
        return self.kind == ValueKind.TEXT

    @property
    def is_list(self) -> bool:
        return self.kind == ValueKind.LIST

    @property
    def is_nothing(self) -> bool:
        return self.kind == ValueKind.NOTHING

    def is_truthy(self) -> bool:
        """
        Check if this value is truthy in boolean context.

        Numbers are true unless zero. Text and lists are true unless empty.
        Nothing is always false.
        """
        if self.kind == ValueKind.NUMBER:
            return self.data != 0.0
        if self.kind in (ValueKind.TEXT, ValueKind.LIST):
            return len(self.data) > 0
        return False


NOTHING = Value(ValueKind.NOTHING, None)


# Convenience constructors

def number_val(x: float) -> Value:
    """Create a number value."""
    return Value(ValueKind.NUMBER, float(x))


def text_val(s: str) -> Value:
    """Create a text value."""
    return Value(ValueKind.TEXT, str(s))


def list_val(items: Iterable[Value]) -> Value:
    """Create a list value from an iterable of Values."""
    return Value(ValueKind.LIST, tuple(items))


def bool_number(b: bool) -> Value:
    """Encode a boolean as the number 1 or 0."""
    return number_val(1.0 if b else 0.0)


def wrap_value(data: Any) -> Value:
    """
    Lift a plain Python object into a Value.

    Accepts numbers (bools become 1/0), strings, lists/tuples (recursively)
    and None. Values pass through unchanged.
    """
    if isinstance(data, Value):
        return data
    if data is None:
        return NOTHING
    if isinstance(data, bool):
        return bool_number(data)
    if isinstance(data, (int, float)):
        return number_val(data)
    if isinstance(data, str):
        return text_val(data)
    if isinstance(data, (list, tuple)):
        return list_val(wrap_value(item) for item in data)
    raise ValueError(f"cannot convert {type(data).__name__} to a runtime value")


def unwrap_value(v: Value) -> Any:
    """Extract plain Python data from a Value (lists become Python lists)."""
    if v.kind == ValueKind.LIST:
        return [unwrap_value(item) for item in v.data]
    return v.data

