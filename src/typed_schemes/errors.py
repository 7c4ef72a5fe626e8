"""Exceptions raised by typed_schemes."""

from __future__ import annotations


class SchemeError(Exception):
    """Base class for scheme declaration and record errors."""


class DuplicateAttributeError(SchemeError, ValueError):
    """An attribute name is declared twice on the same scheme."""

    def __init__(self, scheme_name: str, attribute_name: str) -> None:
        super().__init__(
            f"Attribute '{attribute_name}' is already defined on scheme '{scheme_name}'"
        )
        self.scheme_name = scheme_name
        self.attribute_name = attribute_name


class ReservedAttributeError(SchemeError, ValueError):
    """An attribute name collides with a member of the record type."""

    def __init__(self, scheme_name: str, attribute_name: str) -> None:
        super().__init__(
            f"Attribute name '{attribute_name}' on scheme '{scheme_name}' is reserved"
        )
        self.scheme_name = scheme_name
        self.attribute_name = attribute_name


class SchemeSealedError(SchemeError, RuntimeError):
    """An attribute is declared after the scheme was sealed."""

    def __init__(self, scheme_name: str, attribute_name: str) -> None:
        super().__init__(
            f"Cannot declare attribute '{attribute_name}': scheme '{scheme_name}' is sealed"
        )
        self.scheme_name = scheme_name
        self.attribute_name = attribute_name


class UnknownAttributeError(SchemeError, KeyError):
    """A value was supplied for an attribute the scheme does not declare."""

    def __init__(self, scheme_name: str, attribute_name: str) -> None:
        super().__init__(
            f"Attribute '{attribute_name}' not found on scheme '{scheme_name}'"
        )
        self.scheme_name = scheme_name
        self.attribute_name = attribute_name

    def __str__(self) -> str:
        # KeyError repr()s its argument; keep the plain message
        return str(self.args[0])
