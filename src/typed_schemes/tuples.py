"""Key/value tuple backing a single record."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any


class Tuple:
    """Field-to-value mapping owned by exactly one record.

    Lookups never fail: a missing field yields the fallback. Values are
    opaque; nothing is type checked here.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values) if values else {}

    @classmethod
    def from_row(cls, fields: Iterable[str], values: Iterable[Any]) -> Tuple:
        """Build a tuple from a result row.

        Args:
            fields: Column names, in result order.
            values: Column values, aligned with ``fields``. A short row leaves
                the trailing fields set to None.

        Returns:
            A new Tuple holding one entry per field.
        """
        fields = list(fields)
        values = list(values)
        if len(values) > len(fields):
            raise ValueError(
                f"Row has {len(values)} values but only {len(fields)} fields"
            )
        values.extend([None] * (len(fields) - len(values)))
        return cls(dict(zip(fields, values)))

    def get(self, field: str, fallback: Any = None) -> Any:
        """Return the value stored under ``field``, or ``fallback``."""
        return self._values.get(field, fallback)

    def fetch(self, field: str) -> Any:
        """Return the value stored under ``field``.

        Raises:
            KeyError: If the field is not set.
        """
        try:
            return self._values[field]
        except KeyError:
            raise KeyError(f"Field '{field}' is not set") from None

    def store(self, field: str, value: Any) -> None:
        """Store ``value`` under ``field``, replacing any previous value."""
        self._values[field] = value

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter(self._values.items())

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the stored values."""
        return dict(self._values)

    def __contains__(self, field: object) -> bool:
        return field in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Tuple({self._values!r})"
