"""Ordered field sets and the value variants they hold."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TextValue:
    value: str


@dataclass(frozen=True)
class RawTextValue:
    """A string its producer has already escaped for use inside JSON quotes."""
    value: str


@dataclass(frozen=True)
class NumberValue:
    value: Union[int, float]


@dataclass(frozen=True)
class NullValue:
    pass


@dataclass(frozen=True)
class ObjectValue:
    fields: "FieldSet"


FieldValue = Union[TextValue, RawTextValue, NumberValue, NullValue, ObjectValue]

NULL = NullValue()


def to_value(obj) -> FieldValue:
    """Wrap a plain Python value in its FieldValue variant.

    Anything that is not a string, number, None or nested field set falls
    back to its textual representation.
    """
    if isinstance(obj, (TextValue, RawTextValue, NumberValue, NullValue, ObjectValue)):
        return obj
    if obj is None:
        return NULL
    if isinstance(obj, str):
        return TextValue(obj)
    # bool is an int subclass but is not a number here
    if isinstance(obj, (int, float)) and not isinstance(obj, bool):
        return NumberValue(obj)
    if isinstance(obj, FieldSet):
        return ObjectValue(obj)
    return TextValue(str(obj))


class FieldSet:
    """Insertion-ordered mapping of field name to FieldValue."""

    def __init__(self):
        self._fields: dict[str, FieldValue] = {}

    def put(self, key: str, value) -> "FieldSet":
        self._fields[key] = to_value(value)
        return self

    def get(self, key: str) -> FieldValue | None:
        return self._fields.get(key)

    def keys(self) -> list[str]:
        return list(self._fields)

    def items(self):
        return self._fields.items()

    def __contains__(self, key) -> bool:
        return key in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FieldSet({self._fields!r})"
