"""Record base class for scheme instances."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from typed_schemes.errors import UnknownAttributeError
from typed_schemes.tuples import Tuple

if TYPE_CHECKING:
    from typed_schemes.scheme import Scheme


class Record:
    """A live instance of a scheme, backed by its own tuple.

    Each scheme generates a subclass of Record (or of the scheme's
    ``record_base``) carrying one property per attribute. Build records
    with ``Scheme.create`` or ``Scheme.load`` rather than directly.
    """

    __slots__ = ("_tuple",)

    scheme: ClassVar[Scheme]

    def __init__(self, tuple: Tuple | None = None) -> None:
        self._tuple = tuple if tuple is not None else Tuple()

    @property
    def tuple(self) -> Tuple:
        """The tuple holding this record's field values."""
        return self._tuple

    @property
    def key(self) -> tuple[Any, ...]:
        """Values of the key attributes, in declaration order."""
        return tuple(attr.get(self) for attr in self.scheme.keys)

    def update(self, **values: Any) -> None:
        """Assign several attributes through their accessors.

        Raises:
            UnknownAttributeError: If a name is not an attribute of the scheme.
        """
        for name in values:
            if name not in self.scheme:
                raise UnknownAttributeError(self.scheme.name, name)
        for name, value in values.items():
            setattr(self, name, value)

    def to_dict(self) -> dict[str, Any]:
        """Return attribute name to value for every attribute, None when unset."""
        return {attr.name: attr.get(self) for attr in self.scheme.attributes}

    def row(self, skip_unset_serial: bool = True) -> dict[str, Any]:
        """Return field to value in declaration order, for writing to storage.

        Args:
            skip_unset_serial: Leave out serial attributes that have no value
                yet, so storage can assign them.
        """
        result: dict[str, Any] = {}
        for attr in self.scheme.attributes:
            value = self._tuple.get(attr.field)
            if attr.serial and value is None and skip_unset_serial:
                continue
            result[attr.field] = value
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.scheme is other.scheme and self._tuple == other._tuple

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = ", ".join(
            f"{attr.name}={attr.get(self)!r}"
            for attr in self.scheme.attributes
            if attr.field in self._tuple
        )
        return f"{type(self).__name__}({values})"
