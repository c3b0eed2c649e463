"""
Tests for the Properties store.

These tests verify:
    - Overwrite-on-set and default-on-miss
    - Key validation
    - Removal
    - load/store dispatch on source and sink types
"""

import io
import pathlib

import pytest
from nprops.errors import InvalidKeyError, MissingDelimiterError
from nprops.model import Properties, is_valid_key, validate_key


class TestSetAndGet:
    """Test basic property access."""

    def test_set_property(self):
        props = Properties()
        props.set_property("key", "original value")
        assert props.get_property("key") == "original value"

    def test_set_property_overwrites(self):
        props = Properties()
        props.set_property("key", "original value")
        props.set_property("key", "new value")
        assert props.get_property("key") == "new value"
        assert len(props) == 1

    def test_overwrite_keeps_position(self):
        props = Properties()
        props.set_property("a", "1")
        props.set_property("b", "2")
        props.set_property("a", "3")
        assert list(props) == ["a", "b"]

    def test_missing_key_returns_none(self):
        assert Properties().get_property("missing") is None

    def test_missing_key_returns_default(self):
        assert Properties().get_property("missing", "fallback") == "fallback"

    def test_none_value_removes(self):
        props = Properties()
        props.set_property("key", "value")
        props.set_property("key", None)
        assert "key" not in props

    def test_remove_property(self):
        props = Properties()
        props.set_property("key", "value")
        assert props.remove_property("key") == "value"
        assert props.remove_property("key") is None

    def test_spaces_inside_key(self):
        props = Properties()
        props.set_property("natural language key", "v")
        assert props.get_property("natural language key") == "v"


class TestKeyValidation:
    """Test the key invariants."""

    def test_none_key(self):
        with pytest.raises(TypeError):
            Properties().set_property(None, "value")

    @pytest.mark.parametrize("key", [
        "",
        " key",
        "key ",
        "a\tb",
        "a\nb",
        "a\0b",
        "a\x7fb",
        "a\x85b",
        "#comment",
        "\u3000key",
        "key\u3000",
    ])
    def test_invalid_keys(self, key):
        assert not is_valid_key(key)
        with pytest.raises(InvalidKeyError):
            Properties().set_property(key, "value")

    def test_invalid_key_is_value_error(self):
        with pytest.raises(ValueError):
            validate_key("")

    def test_constructor_validates_entries(self):
        with pytest.raises(InvalidKeyError):
            Properties(entries={" bad": "x"})


class TestLoadAndStore:
    """Test the load/store convenience methods."""

    def test_load_text(self):
        props = Properties().load("foo = bar")
        assert props.to_dict() == {"foo": "bar"}

    def test_load_stream(self):
        props = Properties().load(io.BytesIO(b"foo = bar"))
        assert props.get_property("foo") == "bar"

    def test_load_path(self, tmp_path):
        path = tmp_path / "app.properties"
        path.write_text("foo = bar\n", encoding="utf-8")
        assert Properties().load(pathlib.Path(path)).get_property("foo") == "bar"

    def test_load_failure_keeps_earlier_properties(self):
        props = Properties()
        with pytest.raises(MissingDelimiterError):
            props.load("a = 1\nbroken")
        assert props.get_property("a") == "1"

    def test_store_stream(self):
        props = Properties()
        props.set_property("foo", "bar")
        out = io.StringIO()
        props.store(out, comments="comments")
        assert out.getvalue().splitlines() == ["# comments", "foo=bar"]

    def test_store_path(self, tmp_path):
        props = Properties()
        props.set_property("foo", " bar ")
        path = tmp_path / "out.properties"
        props.store(path)
        assert Properties().load(path).get_property("foo") == " bar "

    def test_store_none(self):
        with pytest.raises(TypeError):
            Properties().store(None)

    def test_store_str_path(self, tmp_path):
        props = Properties()
        props.set_property("foo", "bar")
        path = tmp_path / "out.properties"
        props.store(str(path))
        assert Properties().load(path).get_property("foo") == "bar"

    def test_store_unwritable_sink(self):
        with pytest.raises(TypeError):
            Properties().store(42)

    def test_dumps(self):
        props = Properties()
        props.set_property("a=b", "c")
        assert props.dumps().rstrip("\r\n") == "a\\=b=c"
