"""
Metadata domain models.

Contains the tagged value type used for decoded D-Bus scalars and the
result type returned by store lookups.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Union

ScalarValue = Union[str, int, float]

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT64_MAX = 2**64 - 1


class TypeTag(Enum):
    """Storable D-Bus wire types, valued by their signature code."""

    STRING = "s"
    INT32 = "i"
    UINT64 = "t"
    DOUBLE = "d"

    @classmethod
    def from_token(cls, token: str) -> Optional["TypeTag"]:
        """Return the tag for a signature code, or None if it isn't storable."""
        try:
            return cls(token)
        except ValueError:
            return None

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    TypeTag.STRING: "String",
    TypeTag.INT32: "Int32",
    TypeTag.UINT64: "UInt64",
    TypeTag.DOUBLE: "Double",
}


@dataclass(frozen=True)
class TaggedValue:
    """A decoded scalar together with its wire type.

    The payload is validated against the tag on construction, so a
    STRING value always holds a str, an INT32 value always fits in 32 bits,
    and so on.
    """

    tag: TypeTag
    value: ScalarValue

    def __post_init__(self) -> None:
        tag, value = self.tag, self.value
        if not isinstance(tag, TypeTag):
            raise TypeError(f"Expected a TypeTag, got {tag!r}")

        if tag is TypeTag.STRING:
            if not isinstance(value, str):
                raise TypeError(f"String value must be str, got {type(value).__name__}")
        elif tag is TypeTag.DOUBLE:
            if not isinstance(value, float):
                raise TypeError(f"Double value must be float, got {type(value).__name__}")
        else:
            # bool is an int subclass but is its own wire type
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(
                    f"{tag.label} value must be int, got {type(value).__name__}"
                )
            low, high = (INT32_MIN, INT32_MAX) if tag is TypeTag.INT32 else (0, UINT64_MAX)
            if not low <= value <= high:
                raise ValueError(f"{value} is out of range for {tag.label}")

    def __str__(self) -> str:
        if self.tag is TypeTag.DOUBLE:
            return f"{self.value:f}"
        return str(self.value)


@dataclass(frozen=True)
class MetadataEntry:
    """One key and its decoded value, as held by the store."""

    key: str
    value: TaggedValue

    @property
    def type(self) -> TypeTag:
        return self.value.tag


class LookupStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    WRONG_TYPE = "wrong_type"


class LookupResult(NamedTuple):
    """Outcome of a typed store lookup."""

    status: LookupStatus
    value: Optional[ScalarValue] = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @classmethod
    def hit(cls, value: ScalarValue) -> "LookupResult":
        return cls(LookupStatus.FOUND, value)

    @classmethod
    def miss(cls) -> "LookupResult":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def wrong_type(cls) -> "LookupResult":
        return cls(LookupStatus.WRONG_TYPE)
