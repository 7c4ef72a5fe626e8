"""Attribute definitions and the accessors they install on record types."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from typed_schemes.errors import ReservedAttributeError
from typed_schemes.types import (
    ATTRIBUTE_KIND_NAMES,
    AttributeKind,
    DefaultSpec,
    to_default_spec,
)

if TYPE_CHECKING:
    from typed_schemes.record import Record
    from typed_schemes.scheme import Scheme

logger = logging.getLogger(__name__)


class Attribute:
    """One named field of a scheme.

    Constructing an attribute installs a property named ``name`` on the
    scheme's record type. The property reads and writes the record's tuple
    under ``field``, which defaults to ``name``. Reads never apply the
    default; defaults are resolved only when a new record is created.
    """

    kind: AttributeKind | None = None

    def __init__(
        self,
        scheme: Scheme,
        name: str,
        *,
        default: Any = None,
        field: str | None = None,
        key: bool = False,
        serial: bool = False,
    ) -> None:
        """Initialize an attribute and bind its accessors.

        Args:
            scheme: Scheme whose record type receives the accessors.
            name: Attribute name, also the accessor name on records.
            default: Static value, zero-argument callable, DefaultSpec, or
                None for no default.
            field: Tuple key the accessors use. Defaults to ``name``.
            key: Whether the attribute is part of the record identity.
            serial: Whether storage assigns the value on insert.
        """
        self.name = name
        self.field = field if field is not None else name
        self.key = key
        self.serial = serial
        self.default_spec: DefaultSpec = to_default_spec(default)
        self.define_scheme_methods(scheme)

    @property
    def has_default(self) -> bool:
        """Return whether new records get a value for this attribute."""
        return not self.default_spec.is_absent

    def resolve_default(self) -> Any:
        """Return the default value for one new record.

        Computed defaults call their producer each time. Mutable static
        values are copied; immutable ones are returned as-is.
        """
        return self.default_spec.resolve()

    def get(self, record: Record) -> Any:
        """Read this attribute from a record's tuple, None when unset."""
        return record.tuple.get(self.field, None)

    def set(self, record: Record, value: Any) -> None:
        """Write this attribute into a record's tuple."""
        record.tuple.store(self.field, value)

    def define_scheme_methods(self, scheme: Scheme) -> None:
        """Install the getter/setter property on the scheme's record type."""
        record_type = scheme.record_type
        if hasattr(record_type, self.name):
            raise ReservedAttributeError(scheme.name, self.name)

        field = self.field

        def getter(record: Record) -> Any:
            return record.tuple.get(field, None)

        def setter(record: Record, value: Any) -> None:
            record.tuple.store(field, value)

        getter.__name__ = setter.__name__ = self.name
        setattr(record_type, self.name, property(getter, setter, doc=repr(self)))
        logger.debug(
            "Bound attribute %s.%s to field %r", scheme.name, self.name, field
        )

    def __repr__(self) -> str:
        parts = [repr(self.name)]
        if self.field != self.name:
            parts.append(f"field={self.field!r}")
        if self.key:
            parts.append("key=True")
        if self.serial:
            parts.append("serial=True")
        if self.has_default:
            parts.append(f"default={self.default_spec!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


class Boolean(Attribute):
    kind = AttributeKind.BOOLEAN


class Integer(Attribute):
    kind = AttributeKind.INTEGER


class String(Attribute):
    kind = AttributeKind.STRING


class Float(Attribute):
    kind = AttributeKind.FLOAT


class BigDecimal(Attribute):
    kind = AttributeKind.NUMERIC


class Date(Attribute):
    kind = AttributeKind.DATE


class Time(Attribute):
    kind = AttributeKind.TIME


class IO(Attribute):
    """Binary payload, stored as bytes or a file-like object."""

    kind = AttributeKind.BLOB


# Attribute class used for each kind when a scheme is declared by kind
ATTRIBUTE_CLASSES: dict[AttributeKind, type[Attribute]] = {
    cls.kind: cls for cls in (Boolean, Integer, String, Float, BigDecimal, Date, Time, IO)
}


def attribute_class(kind: type[Attribute] | AttributeKind | str) -> type[Attribute]:
    """Resolve an attribute class from a class, kind, or kind name.

    Raises:
        ValueError: If a kind name is not recognized.
    """
    if isinstance(kind, type) and issubclass(kind, Attribute):
        return kind
    if isinstance(kind, str):
        resolved = ATTRIBUTE_KIND_NAMES.get(kind)
        if resolved is None:
            raise ValueError(f"Unknown attribute kind: {kind}")
        kind = resolved
    if isinstance(kind, AttributeKind):
        return ATTRIBUTE_CLASSES[kind]
    raise TypeError(f"Expected an Attribute subclass or AttributeKind, got {kind!r}")
