import json

import pytest

from json_to_toon import (
    ToonConverter,
    ToonDecodeError,
    ToonDecoder,
    ToonEncoder,
    decode,
    encode,
)

SAMPLES = [
    {"name": "Alice", "age": 30, "active": True, "score": 19.99, "nickname": None},
    {"user": {"profile": {"city": "Berlin", "tags": ["a", "b"]}, "id": 7}},
    {"users": [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob, Jr."}]},
    {"mixed": [1, "two", {"three": 3}, [4, 5], [], {}]},
    {"matrix": [[1, 2], [3, 4]]},
    {"text": 'line1\nline2\t"quoted" \\ back', "padded": "  x  ", "empty": ""},
    {"weird keys": {"a:b": 1, "c,d": 2, "true": False, "[x]": "y", "": "blank key"}},
    [{"a": 1, "b": [1, 2]}, {"a": 2, "b": []}],
    [],
    {"deep": [[{"k": [{"x": 1}, {"y": 2}]}]]},
]


@pytest.mark.parametrize("value", SAMPLES)
def test_round_trip(value):
    assert decode(encode(value)) == value

@pytest.mark.parametrize("value", SAMPLES)
def test_encoding_is_idempotent(value):
    once = encode(value)
    assert encode(decode(once)) == once

@pytest.mark.parametrize("value", SAMPLES)
def test_round_trip_with_tab_indent(value):
    conv = ToonConverter("\t")
    assert conv.from_toon(conv.to_toon(value)) == value

@pytest.mark.parametrize("json_text,toon_text", [
    ('{"name":"Alice","age":30}', "name: Alice\nage: 30"),
    ('{"users":[{"id":1,"name":"Alice"},{"id":2,"name":"Bob"}]}', "users[2]{id,name}:\n  1,Alice\n  2,Bob"),
    ('{"message":"Hello, World!"}', 'message: "Hello, World!"'),
    ('{"value":null}', "value: null"),
    ('{"user":{"name":"Bob"}}', "user:\n  name: Bob"),
    ('{"colors":["red","green","blue"]}', "colors[3]: red,green,blue"),
])
def test_json_scenarios(json_text, toon_text):
    conv = ToonConverter()
    assert conv.json_to_toon(json_text) == toon_text
    assert conv.toon_to_json(toon_text) == json_text

def test_integral_json_floats_lose_fraction():
    assert ToonConverter().json_to_toon('{"price":30.0,"tax":19.99}') == "price: 30\ntax: 19.99"

def test_toon_to_json_keeps_unicode():
    assert ToonConverter().toon_to_json("city: Z\u00fcrich") == '{"city":"Z\u00fcrich"}'

def test_malformed_json_raises():
    with pytest.raises(json.JSONDecodeError):
        ToonConverter().json_to_toon('{"a":')

def test_strict_setting_reaches_decoder():
    assert ToonConverter().from_toon("junk\na: 1") == {"a": 1}
    with pytest.raises(ToonDecodeError):
        ToonConverter(strict=True).from_toon("junk\na: 1")

def test_indent_setting_reaches_encoder():
    conv = ToonConverter("\t")
    assert conv.to_toon({"u": {"n": 1}}) == "u:\n\tn: 1"

def test_exposes_encoder_and_decoder():
    conv = ToonConverter(max_depth=5)
    assert isinstance(conv.encoder, ToonEncoder)
    assert isinstance(conv.decoder, ToonDecoder)
    assert conv.encoder.max_depth == 5
    assert conv.decoder.max_depth == 5

# ---------------------------------------------------------------------------
# known lossy edges of the wire format
# ---------------------------------------------------------------------------
def test_literal_looking_string_values_decode_as_literals():
    assert encode({"flag": "true"}) == "flag: true"
    assert decode(encode({"flag": "true", "none": "null"})) == {"flag": True, "none": None}

def test_numeric_looking_string_values_decode_as_numbers():
    assert decode(encode({"code": "42"})) == {"code": 42}

@pytest.mark.parametrize("value", [
    {"tags": ['a"b', 'c"d']},
    {"t": [{"a": 'x"y', "b": 1}, {"a": "z", "b": 2}]},
    ["dir\\", "b"],
    {'say "hi"': "back\\slash", "k\\": ['"quoted"']},
])
def test_quote_and_backslash_strings_round_trip(value):
    assert decode(encode(value), strict=True) == value
