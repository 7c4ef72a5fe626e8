"""Render schemes as scheme definition DSL text."""

from __future__ import annotations

import json
import math
import re
from typing import Any

from typed_schemes.attribute import Attribute
from typed_schemes.parsing.scheme_lexer import SchemeLexer
from typed_schemes.scheme import Scheme, SchemeRegistry
from typed_schemes.types import Computed, Static

_IDENTIFIER_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")
_FLOAT_RE = re.compile(r"-?\d+\.\d+([eE][-+]?\d+)?")


def dump_registry(registry: SchemeRegistry) -> str:
    """Render every scheme in a registry, separated by blank lines."""
    return "\n".join(dump_scheme(scheme) for scheme in registry)


def dump_scheme(scheme: Scheme) -> str:
    """Render one scheme as DSL text that parses back to an equivalent scheme.

    Raises:
        ValueError: If an attribute has no kind, or a default cannot be
            written in the DSL (unnamed producers, non-empty containers,
            values other than numbers, strings and booleans).
    """
    lines = [f"{_format_name(scheme.name)} store {_format_name(scheme.store)} {{"]
    for attr in scheme.attributes:
        lines.append(f"    {_format_attribute(scheme, attr)},")
    lines.append("}")
    return "\n".join(lines) + "\n"


def _format_attribute(scheme: Scheme, attr: Attribute) -> str:
    if attr.kind is None:
        raise ValueError(f"Attribute '{scheme.name}.{attr.name}' has no kind")

    parts = [f"{_format_name(attr.name)}: {attr.kind.value}"]
    if attr.serial:
        parts.append("serial")
    if attr.key:
        parts.append("key")
    if attr.field != attr.name:
        parts.append(f"field {_format_name(attr.field)}")

    spec = attr.default_spec
    if isinstance(spec, Computed):
        if spec.name is None or not _IDENTIFIER_RE.fullmatch(spec.name):
            raise ValueError(
                f"Computed default of '{scheme.name}.{attr.name}' has no producer name"
            )
        parts.append(f"= {spec.name}()")
    elif isinstance(spec, Static):
        parts.append(f"= {_format_value(scheme, attr, spec.value)}")
    return " ".join(parts)


def _format_value(scheme: Scheme, attr: Attribute, value: Any) -> str:
    # bool before int: bool is an int subclass
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        text = repr(value)
        if math.isfinite(value) and _FLOAT_RE.fullmatch(text):
            return text
    elif isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    elif value == [] and isinstance(value, list):
        return "[]"
    elif value == {} and isinstance(value, dict):
        return "{}"
    raise ValueError(
        f"Default {value!r} of '{scheme.name}.{attr.name}' cannot be written as a literal"
    )


def _format_name(name: str) -> str:
    if not name or "`" in name:
        raise ValueError(f"Name {name!r} cannot be written in the scheme DSL")
    if name in SchemeLexer.reserved or not _IDENTIFIER_RE.fullmatch(name):
        return f"`{name}`"
    return name
