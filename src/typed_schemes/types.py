"""Attribute kinds and default-value specifications for typed_schemes."""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class AttributeKind(Enum):
    """Value kinds an attribute can be declared with."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    STRING = "string"
    FLOAT = "float"
    NUMERIC = "numeric"
    DATE = "date"
    TIME = "time"
    BLOB = "blob"

    @property
    def storage_type(self) -> str:
        """Return the storage column type name for this kind."""
        names = {
            AttributeKind.BOOLEAN: "boolean",
            AttributeKind.INTEGER: "integer",
            AttributeKind.STRING: "text",
            AttributeKind.FLOAT: "float",
            AttributeKind.NUMERIC: "numeric",
            AttributeKind.DATE: "date",
            AttributeKind.TIME: "timestamp",
            AttributeKind.BLOB: "blob",
        }
        return names[self]


# Mapping from DSL kind names to AttributeKind values (includes storage aliases)
ATTRIBUTE_KIND_NAMES: dict[str, AttributeKind] = {k.value: k for k in AttributeKind}
ATTRIBUTE_KIND_NAMES.update(
    {
        "text": AttributeKind.STRING,
        "decimal": AttributeKind.NUMERIC,
        "timestamp": AttributeKind.TIME,
    }
)


# Value kinds handed out as a shallow copy when used as a static default
MUTABLE_VALUE_TYPES: tuple[type, ...] = (list, dict, set, bytearray)


def is_mutable_value(value: Any) -> bool:
    """Check whether a value must be copied before it is shared between records."""
    return isinstance(value, MUTABLE_VALUE_TYPES)


class DefaultSpec:
    """Base class for the default-value policy of an attribute."""

    @property
    def is_absent(self) -> bool:
        """Return whether this spec declares no default at all."""
        return False

    def resolve(self) -> Any:
        """Produce the value to store in a new record."""
        raise NotImplementedError


@dataclass(frozen=True)
class Absent(DefaultSpec):
    """No default: the field is left unset in new records."""

    @property
    def is_absent(self) -> bool:
        return True

    def resolve(self) -> Any:
        return None


@dataclass(frozen=True)
class Static(DefaultSpec):
    """A fixed default value.

    Mutable values (lists, dicts, sets, bytearrays) are copied on every
    resolution so that records never alias each other's defaults.
    """

    value: Any

    def resolve(self) -> Any:
        if is_mutable_value(self.value):
            return copy.copy(self.value)
        return self.value


@dataclass(frozen=True)
class Computed(DefaultSpec):
    """A default produced by calling a zero-argument function.

    The producer is called once per resolution, e.g. once per new record.
    ``name`` is the producer's registered name, used when dumping schemes.
    """

    producer: Callable[[], Any]
    name: str | None = None

    def resolve(self) -> Any:
        return self.producer()


ABSENT = Absent()


def to_default_spec(default: Any) -> DefaultSpec:
    """Turn the ``default`` option of an attribute into a DefaultSpec.

    An existing DefaultSpec is returned unchanged, a callable becomes
    Computed, None becomes Absent, and anything else becomes Static.
    """
    if isinstance(default, DefaultSpec):
        return default
    if default is None:
        return ABSENT
    if callable(default):
        return Computed(producer=default, name=getattr(default, "__name__", None))
    return Static(value=default)
