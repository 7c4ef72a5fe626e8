"""Tests for attribute kinds and default specifications."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from typed_schemes.types import (
    ABSENT,
    ATTRIBUTE_KIND_NAMES,
    Absent,
    AttributeKind,
    Computed,
    Static,
    is_mutable_value,
    to_default_spec,
)


class TestAttributeKind:
    """Tests for AttributeKind enum."""

    def test_storage_type(self):
        """Test storage type names for all kinds."""
        assert AttributeKind.BOOLEAN.storage_type == "boolean"
        assert AttributeKind.INTEGER.storage_type == "integer"
        assert AttributeKind.STRING.storage_type == "text"
        assert AttributeKind.FLOAT.storage_type == "float"
        assert AttributeKind.NUMERIC.storage_type == "numeric"
        assert AttributeKind.DATE.storage_type == "date"
        assert AttributeKind.TIME.storage_type == "timestamp"
        assert AttributeKind.BLOB.storage_type == "blob"

    def test_kind_names_include_aliases(self):
        """Test that storage names resolve to kinds as well."""
        assert ATTRIBUTE_KIND_NAMES["string"] is AttributeKind.STRING
        assert ATTRIBUTE_KIND_NAMES["text"] is AttributeKind.STRING
        assert ATTRIBUTE_KIND_NAMES["decimal"] is AttributeKind.NUMERIC
        assert ATTRIBUTE_KIND_NAMES["timestamp"] is AttributeKind.TIME


class TestMutableValues:
    """Tests for mutable value tagging."""

    @pytest.mark.parametrize("value", [[], {}, set(), bytearray(b"x"), [1, 2]])
    def test_mutable(self, value):
        """Test container kinds are tagged mutable."""
        assert is_mutable_value(value)

    @pytest.mark.parametrize(
        "value",
        [None, True, 0, 1.5, Decimal("1.0"), "text", b"bytes", (1, 2), frozenset(), date.today()],
    )
    def test_immutable(self, value):
        """Test scalar and frozen kinds are not tagged mutable."""
        assert not is_mutable_value(value)


class TestDefaultSpec:
    """Tests for DefaultSpec variants."""

    def test_absent(self):
        """Test the absent default."""
        assert ABSENT.is_absent is True
        assert ABSENT.resolve() is None
        assert Absent() == ABSENT

    def test_static_immutable_is_shared(self):
        """Test immutable static values are returned as-is."""
        value = "woot"
        spec = Static(value)
        assert spec.is_absent is False
        assert spec.resolve() is value

    def test_static_mutable_is_copied(self):
        """Test mutable static values are copied on every resolution."""
        tags = ["a"]
        spec = Static(tags)

        first = spec.resolve()
        second = spec.resolve()

        assert first == ["a"]
        assert first is not tags
        assert first is not second
        first.append("b")
        assert second == ["a"]
        assert tags == ["a"]

    def test_computed_calls_producer_each_time(self):
        """Test computed defaults call the producer on every resolution."""
        calls = []

        def producer():
            calls.append(1)
            return len(calls)

        spec = Computed(producer)
        assert spec.resolve() == 1
        assert spec.resolve() == 2
        assert len(calls) == 2

    def test_computed_failure_propagates(self):
        """Test producer errors are not swallowed."""

        def producer():
            raise RuntimeError("clock unavailable")

        with pytest.raises(RuntimeError, match="clock unavailable"):
            Computed(producer).resolve()


class TestToDefaultSpec:
    """Tests for coercing the default option."""

    def test_none_is_absent(self):
        assert to_default_spec(None) is ABSENT

    def test_callable_is_computed(self):
        spec = to_default_spec(datetime.now)
        assert isinstance(spec, Computed)
        assert spec.producer == datetime.now
        assert spec.name == "now"

    def test_value_is_static(self):
        spec = to_default_spec(False)
        assert spec == Static(False)

    def test_spec_is_unchanged(self):
        spec = Static([1])
        assert to_default_spec(spec) is spec
