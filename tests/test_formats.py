"""Test the JSON, YAML and TOML codecs."""

import datetime

import pytest

from structconv.errors import EncodingFailure, ParseFailure, UnsupportedConversion
from structconv.formats import codec_names, get_codec
from structconv.formats.json_codec import dump_json, format_json, is_valid_json, minify_json
from structconv.formats.toml_codec import dump_toml, format_toml, is_valid_toml, load_toml, minify_toml
from structconv.formats.yaml_codec import format_yaml, is_valid_yaml, load_yaml, minify_yaml


def test_registered_codecs():
    assert codec_names() == ("json", "xml", "yaml", "toml")
    with pytest.raises(UnsupportedConversion):
        get_codec("ini")


# --- JSON ---


def test_format_json():
    assert format_json('{"a":1,"b":[1,2]}') == '{\n  "a": 1,\n  "b": [\n    1,\n    2\n  ]\n}'


def test_minify_json():
    assert minify_json('{ "a" : 1,\n "b": "ü" }') == '{"a":1,"b":"ü"}'


def test_is_valid_json():
    assert is_valid_json('{"a": 1}')
    assert not is_valid_json("{")
    assert not is_valid_json("")


def test_format_json_invalid_raises():
    with pytest.raises(ParseFailure) as excinfo:
        format_json("{'a': 1}")
    assert excinfo.value.fmt == "json"


def test_dump_json_dates_and_unsupported():
    assert dump_json({"d": datetime.date(2024, 1, 2)}, indent=None) == '{"d":"2024-01-02"}'
    with pytest.raises(EncodingFailure):
        dump_json({"s": {1, 2}})


# --- YAML ---


def test_format_yaml():
    assert format_yaml("a:   1\nb: [x, y]\n") == "a: 1\nb:\n- x\n- y\n"


def test_format_yaml_keeps_key_order():
    assert format_yaml("z: 1\na: 2\n") == "z: 1\na: 2\n"


def test_minify_yaml_is_single_line_flow():
    assert minify_yaml("a: 1\nb:\n  - x\n  - y\n") == "{a: 1, b: [x, y]}"


def test_is_valid_yaml():
    assert is_valid_yaml("a: 1")
    assert not is_valid_yaml("a: [1, 2")


def test_load_yaml_invalid_raises():
    with pytest.raises(ParseFailure):
        load_yaml("a: b: c")


# --- TOML ---


def test_format_toml_normalizes():
    text = 'a =   1\n[t]\nb="x"\n'
    formatted = format_toml(text)
    assert "a = 1" in formatted
    assert "[t]" in formatted
    assert 'b = "x"' in formatted
    assert load_toml(formatted) == load_toml(text)


def test_minify_toml_is_formatted_document():
    text = 'a =   1\n'
    assert minify_toml(text) == format_toml(text)


def test_is_valid_toml():
    assert is_valid_toml('a = "x"')
    assert not is_valid_toml("a = ")


def test_dump_toml_rejects_non_tables_and_null():
    with pytest.raises(EncodingFailure):
        dump_toml([1, 2])
    with pytest.raises(EncodingFailure):
        dump_toml({"a": None})
