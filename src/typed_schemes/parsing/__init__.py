"""Parsing module for the scheme definition DSL."""

from typed_schemes.parsing.scheme_parser import BUILTIN_PRODUCERS, SchemeParser

__all__ = [
    "BUILTIN_PRODUCERS",
    "SchemeParser",
]
