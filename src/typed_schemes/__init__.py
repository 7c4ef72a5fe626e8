"""Typed Schemes - Declarative record shapes backed by key/value tuples."""

from typed_schemes.attribute import (
    IO,
    Attribute,
    BigDecimal,
    Boolean,
    Date,
    Float,
    Integer,
    String,
    Time,
)
from typed_schemes.dump import dump_registry, dump_scheme
from typed_schemes.errors import (
    DuplicateAttributeError,
    ReservedAttributeError,
    SchemeError,
    SchemeSealedError,
    UnknownAttributeError,
)
from typed_schemes.parsing import SchemeParser
from typed_schemes.record import Record
from typed_schemes.scheme import Scheme, SchemeRegistry
from typed_schemes.tuples import Tuple
from typed_schemes.types import (
    ABSENT,
    Absent,
    AttributeKind,
    Computed,
    DefaultSpec,
    Static,
)

__all__ = [
    # Main API
    "Scheme",
    "SchemeRegistry",
    "SchemeParser",
    "Record",
    "Tuple",
    # Attributes
    "Attribute",
    "AttributeKind",
    "Boolean",
    "Integer",
    "String",
    "Float",
    "BigDecimal",
    "Date",
    "Time",
    "IO",
    # Defaults
    "DefaultSpec",
    "Absent",
    "ABSENT",
    "Static",
    "Computed",
    # Dumping
    "dump_scheme",
    "dump_registry",
    # Errors
    "SchemeError",
    "DuplicateAttributeError",
    "ReservedAttributeError",
    "SchemeSealedError",
    "UnknownAttributeError",
]

__version__ = "0.1.0"
