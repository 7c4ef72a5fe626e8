"""Parser for the scheme definition DSL."""

from __future__ import annotations

import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

import ply.yacc as yacc

from typed_schemes.parsing.scheme_lexer import SchemeLexer
from typed_schemes.scheme import Scheme, SchemeRegistry
from typed_schemes.types import Computed, DefaultSpec, Static


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_uuid() -> str:
    """Random UUID in its canonical string form."""
    return str(uuid.uuid4())


# Producers available to computed defaults as `name()`
BUILTIN_PRODUCERS: dict[str, Callable[[], Any]] = {
    "now": datetime.now,
    "utcnow": utcnow,
    "today": date.today,
    "uuid": new_uuid,
}


@dataclass
class LiteralDefault:
    """A literal default value as written in the DSL."""

    value: Any


@dataclass
class ProducerDefault:
    """A call to a named producer, e.g. ``now()``."""

    name: str


@dataclass
class AttributeSpec:
    """Specification for an attribute before resolution."""

    name: str
    kind: str
    key: bool = False
    serial: bool = False
    field: str | None = None
    default: LiteralDefault | ProducerDefault | None = None


@dataclass
class SchemeSpec:
    """Specification for a scheme before resolution."""

    name: str
    store: str | None
    attributes: list[AttributeSpec] = field(default_factory=list)


class SchemeParser:
    """Parser for the scheme definition DSL.

    Example::

        User store users {
            id: integer serial key,
            name: string,
            created: time = now(),
        }
    """

    tokens = SchemeLexer.tokens

    def __init__(self, producers: Mapping[str, Callable[[], Any]] | None = None) -> None:
        self.lexer = SchemeLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore
        self.producers: dict[str, Callable[[], Any]] = dict(BUILTIN_PRODUCERS)
        if producers:
            self.producers.update(producers)

    def p_schemes(self, p: yacc.YaccProduction) -> None:
        """schemes : scheme_list"""
        p[0] = p[1]

    def p_schemes_empty(self, p: yacc.YaccProduction) -> None:
        """schemes : empty"""
        p[0] = []

    def p_scheme_list_single(self, p: yacc.YaccProduction) -> None:
        """scheme_list : scheme"""
        p[0] = [p[1]]

    def p_scheme_list_multiple(self, p: yacc.YaccProduction) -> None:
        """scheme_list : scheme_list scheme"""
        p[0] = p[1] + [p[2]]

    def p_scheme(self, p: yacc.YaccProduction) -> None:
        """scheme : IDENTIFIER store_clause LBRACE attribute_list RBRACE
                  | IDENTIFIER store_clause LBRACE attribute_list COMMA RBRACE"""
        p[0] = SchemeSpec(name=p[1], store=p[2], attributes=p[4])

    def p_scheme_empty(self, p: yacc.YaccProduction) -> None:
        """scheme : IDENTIFIER store_clause LBRACE RBRACE"""
        p[0] = SchemeSpec(name=p[1], store=p[2], attributes=[])

    def p_store_clause(self, p: yacc.YaccProduction) -> None:
        """store_clause : STORE IDENTIFIER"""
        p[0] = p[2]

    def p_store_clause_empty(self, p: yacc.YaccProduction) -> None:
        """store_clause : empty"""
        p[0] = None

    def p_attribute_list_single(self, p: yacc.YaccProduction) -> None:
        """attribute_list : attribute"""
        p[0] = [p[1]]

    def p_attribute_list_multiple(self, p: yacc.YaccProduction) -> None:
        """attribute_list : attribute_list COMMA attribute"""
        p[0] = p[1] + [p[3]]

    def p_attribute(self, p: yacc.YaccProduction) -> None:
        """attribute : IDENTIFIER COLON IDENTIFIER option_list default_clause"""
        spec = AttributeSpec(name=p[1], kind=p[3], default=p[5])
        for option, value in p[4]:
            setattr(spec, option, value)
        p[0] = spec

    def p_option_list_multiple(self, p: yacc.YaccProduction) -> None:
        """option_list : option_list option"""
        p[0] = p[1] + [p[2]]

    def p_option_list_empty(self, p: yacc.YaccProduction) -> None:
        """option_list : empty"""
        p[0] = []

    def p_option_key(self, p: yacc.YaccProduction) -> None:
        """option : KEY"""
        p[0] = ("key", True)

    def p_option_serial(self, p: yacc.YaccProduction) -> None:
        """option : SERIAL"""
        p[0] = ("serial", True)

    def p_option_field(self, p: yacc.YaccProduction) -> None:
        """option : FIELD IDENTIFIER"""
        p[0] = ("field", p[2])

    def p_default_clause(self, p: yacc.YaccProduction) -> None:
        """default_clause : EQUALS default_value"""
        p[0] = p[2]

    def p_default_clause_empty(self, p: yacc.YaccProduction) -> None:
        """default_clause : empty"""
        p[0] = None

    def p_default_value_literal(self, p: yacc.YaccProduction) -> None:
        """default_value : INTEGER
                         | FLOAT
                         | STRING"""
        p[0] = LiteralDefault(p[1])

    def p_default_value_true(self, p: yacc.YaccProduction) -> None:
        """default_value : TRUE"""
        p[0] = LiteralDefault(True)

    def p_default_value_false(self, p: yacc.YaccProduction) -> None:
        """default_value : FALSE"""
        p[0] = LiteralDefault(False)

    def p_default_value_list(self, p: yacc.YaccProduction) -> None:
        """default_value : LBRACKET RBRACKET"""
        p[0] = LiteralDefault([])

    def p_default_value_dict(self, p: yacc.YaccProduction) -> None:
        """default_value : LBRACE RBRACE"""
        p[0] = LiteralDefault({})

    def p_default_value_producer(self, p: yacc.YaccProduction) -> None:
        """default_value : IDENTIFIER LPAREN RPAREN"""
        p[0] = ProducerDefault(p[1])

    def p_empty(self, p: yacc.YaccProduction) -> None:
        """empty :"""
        pass

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (line {p.lineno})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse_specs(self, data: str) -> list[SchemeSpec]:
        """Parse scheme definitions into unresolved specs."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        self.lexer.input(data)
        specs = self.parser.parse(lexer=self.lexer.lexer)
        return specs or []

    def parse(self, data: str) -> SchemeRegistry:
        """Parse scheme definitions and return a registry of sealed schemes."""
        registry = SchemeRegistry()
        for spec in self.parse_specs(data):
            registry.register(self._resolve_scheme_spec(spec))
        return registry

    def _resolve_scheme_spec(self, spec: SchemeSpec) -> Scheme:
        """Declare a scheme and its attributes from a spec."""
        with Scheme(spec.name, store=spec.store) as scheme:
            for attr_spec in spec.attributes:
                scheme.attribute(
                    attr_spec.name,
                    attr_spec.kind,
                    default=self._resolve_default(attr_spec.default),
                    field=attr_spec.field,
                    key=attr_spec.key,
                    serial=attr_spec.serial,
                )
        return scheme

    def _resolve_default(
        self, default: LiteralDefault | ProducerDefault | None
    ) -> DefaultSpec | None:
        """Turn a parsed default into a DefaultSpec."""
        if default is None:
            return None
        if isinstance(default, ProducerDefault):
            producer = self.producers.get(default.name)
            if producer is None:
                raise ValueError(f"Unknown producer: {default.name}()")
            return Computed(producer=producer, name=default.name)
        return Static(value=default.value)
