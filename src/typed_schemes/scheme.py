"""Scheme class for declaring record shapes."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from typed_schemes.attribute import Attribute, attribute_class
from typed_schemes.errors import (
    DuplicateAttributeError,
    SchemeSealedError,
    UnknownAttributeError,
)
from typed_schemes.record import Record
from typed_schemes.tuples import Tuple
from typed_schemes.types import AttributeKind

logger = logging.getLogger(__name__)


class Scheme:
    """Ordered collection of attributes describing one record shape.

    Every declared attribute installs an accessor property on
    ``record_type``, the Record subclass generated for this scheme. The
    attribute list is closed once the scheme is sealed, which happens when
    a ``with`` block around the declarations exits, on an explicit
    ``seal()``, or when the first record is created or loaded.
    """

    def __init__(
        self,
        name: str,
        store: str | None = None,
        record_base: type[Record] = Record,
    ) -> None:
        """Initialize a scheme.

        Args:
            name: Scheme name, also the name of the generated record type.
            store: Storage name (table). Defaults to ``name`` lowercased.
            record_base: Base class for the generated record type.
        """
        if not (isinstance(record_base, type) and issubclass(record_base, Record)):
            raise TypeError(f"record_base must be a Record subclass, got {record_base!r}")
        self.name = name
        self.store = store or name.lower()
        self._attributes: dict[str, Attribute] = {}
        self._sealed = False
        self.record_type: type[Record] = type(
            name,
            (record_base,),
            {"scheme": self, "__module__": record_base.__module__, "__qualname__": name},
        )

    @classmethod
    def parse(
        cls, definitions: str, producers: Mapping[str, Any] | None = None
    ) -> SchemeRegistry:
        """Parse scheme definitions written in the scheme DSL.

        Args:
            definitions: DSL text defining one or more schemes.
            producers: Extra named producers for computed defaults.

        Returns:
            A registry holding the parsed, sealed schemes.
        """
        from typed_schemes.parsing import SchemeParser

        return SchemeParser(producers=producers).parse(definitions)

    def attribute(
        self,
        name: str,
        kind: type[Attribute] | AttributeKind | str = Attribute,
        **options: Any,
    ) -> Attribute:
        """Declare an attribute and bind its accessors.

        Args:
            name: Attribute name, unique within this scheme.
            kind: Attribute class, AttributeKind, or kind name.
            **options: ``default``, ``field``, ``key`` and ``serial``.

        Returns:
            The new attribute.

        Raises:
            SchemeSealedError: If the scheme is sealed.
            DuplicateAttributeError: If ``name`` is already declared.
            ReservedAttributeError: If ``name`` collides with a Record member.
        """
        if self._sealed:
            raise SchemeSealedError(self.name, name)
        if name in self._attributes:
            raise DuplicateAttributeError(self.name, name)
        attr = attribute_class(kind)(self, name, **options)
        self._attributes[name] = attr
        return attr

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        """All attributes, in declaration order."""
        return tuple(self._attributes.values())

    @property
    def keys(self) -> tuple[Attribute, ...]:
        """Attributes flagged as key, in declaration order."""
        return tuple(a for a in self._attributes.values() if a.key)

    @property
    def serial(self) -> Attribute | None:
        """The serial attribute, or None if the scheme has none."""
        for attr in self._attributes.values():
            if attr.serial:
                return attr
        return None

    @property
    def header(self) -> list[str]:
        """Tuple field names, in declaration order."""
        return [a.field for a in self._attributes.values()]

    fields = header

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        """Close the attribute list. Sealing twice is a no-op."""
        if not self._sealed:
            self._sealed = True
            logger.debug(
                "Sealed scheme %s with %d attributes", self.name, len(self._attributes)
            )

    def get_attribute(self, name: str) -> Attribute:
        """Get an attribute by name.

        Raises:
            UnknownAttributeError: If the attribute is not declared.
        """
        attr = self._attributes.get(name)
        if attr is None:
            raise UnknownAttributeError(self.name, name)
        return attr

    def create(self, values: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Record:
        """Create a new record, applying defaults.

        Attributes are visited in declaration order. A supplied value is
        stored as given; otherwise an attribute with a default stores one
        freshly resolved value; otherwise the field is left unset. Errors
        raised by computed defaults propagate unchanged.

        Args:
            values: Attribute name to value.
            **kwargs: More attribute values, overriding ``values``.

        Raises:
            UnknownAttributeError: If a supplied name is not an attribute.
        """
        supplied = dict(values or {})
        supplied.update(kwargs)
        for name in supplied:
            if name not in self._attributes:
                raise UnknownAttributeError(self.name, name)

        self.seal()
        record = self.record_type(Tuple())
        for attr in self._attributes.values():
            if attr.name in supplied:
                attr.set(record, supplied[attr.name])
            elif attr.has_default:
                attr.set(record, attr.resolve_default())
        return record

    def load(self, tuple: Tuple | Mapping[str, Any]) -> Record:
        """Wrap an already populated tuple in a record. No defaults are applied.

        A plain mapping is copied into a new Tuple first.
        """
        if not isinstance(tuple, Tuple):
            tuple = Tuple(tuple)
        self.seal()
        return self.record_type(tuple)

    def materialize(
        self, fields: Iterable[str], rows: Iterable[Iterable[Any]]
    ) -> Iterator[Record]:
        """Load one record per result row.

        Args:
            fields: Column names of the result, matching attribute fields.
            rows: Row value sequences aligned with ``fields``.

        Yields:
            Loaded records, in row order.
        """
        fields = list(fields)
        count = 0
        for row in rows:
            yield self.load(Tuple.from_row(fields, row))
            count += 1
        logger.debug("Materialized %d %s records", count, self.name)

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._attributes.values())

    def __len__(self) -> int:
        return len(self._attributes)

    def __enter__(self) -> Scheme:
        return self

    def __exit__(self, *args: Any) -> None:
        self.seal()

    def __repr__(self) -> str:
        return f"Scheme({self.name!r}, store={self.store!r}, attributes={self.header!r})"


class SchemeRegistry:
    """Registry of schemes by name."""

    def __init__(self) -> None:
        self._schemes: dict[str, Scheme] = {}

    def register(self, scheme: Scheme) -> None:
        """Register a scheme."""
        if scheme.name in self._schemes:
            raise ValueError(f"Scheme '{scheme.name}' is already defined")
        self._schemes[scheme.name] = scheme
        logger.debug("Registered scheme %s (store %s)", scheme.name, scheme.store)

    def get(self, name: str) -> Scheme | None:
        """Get a scheme by name."""
        return self._schemes.get(name)

    def get_or_raise(self, name: str) -> Scheme:
        """Get a scheme by name, raising if not found."""
        scheme = self._schemes.get(name)
        if scheme is None:
            raise KeyError(f"Scheme '{name}' not found")
        return scheme

    def list_schemes(self) -> list[str]:
        """List all registered scheme names."""
        return list(self._schemes.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._schemes

    def __iter__(self) -> Iterator[Scheme]:
        return iter(self._schemes.values())

    def __len__(self) -> int:
        return len(self._schemes)
