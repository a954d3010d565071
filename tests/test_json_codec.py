import json

import pytest

from xcl.json_codec import JsonParseError, parse, render, render_unformatted
from xcl.json_node import JsonType, create_array, create_double, create_object, create_string


def test_parse_object_members():
    node = parse('{"name": "xcl", "count": 42, "ratio": 1.5}')
    assert node.type is JsonType.OBJECT
    assert node.get_str("name") == "xcl"
    assert node.get_int("count") == 42
    assert node.get_double("ratio") == 1.5


def test_parse_negative_int_keeps_sign():
    node = parse('{"a": -5}')
    assert node.get_int("a") == -5
    assert node.get_item("a").sign == -1


def test_parse_int_type():
    node = parse("42")
    assert node.type is JsonType.INT
    assert node.value_int == 42


def test_parse_negative_fraction():
    node = parse("-2.5")
    assert node.type is JsonType.DOUBLE
    assert node.value_double * node.sign == -2.5


def test_parse_exponent():
    node = parse("1e2")
    assert node.type is JsonType.DOUBLE
    assert node.value_double == float("1e2")


def test_unformatted_round_trip():
    text = '{"a":1,"b":[true,false,null],"c":"x"}'
    assert render_unformatted(parse(text)) == text


def test_empty_containers_round_trip():
    assert render_unformatted(parse("[]")) == "[]"
    assert render_unformatted(parse("{}")) == "{}"


def test_formatted_object():
    assert render(parse('{"a":1}')) == '{\n\t"a":\t1\n}'


def test_formatted_array():
    assert render(parse("[1,2]")) == "[1, 2]"


def test_double_rendering():
    assert render_unformatted(parse("1.5")) == "1.5000000000000000"


def test_formatted_output_parses_back():
    text = '{"a":[1,{"b":null}],"c":{}}'
    assert render_unformatted(parse(render(parse(text)))) == text


def test_string_escapes_round_trip():
    s = 'q"\\\n\t\b\f\r\x01'
    assert parse(render(create_string(s))).value_string == s


def test_surrogate_pair_decoding():
    text = '"\\ud83d\\ude00"'
    assert parse(text).value_string == json.loads(text)


def test_simple_escape_decoding():
    text = '"a\\nb\\/c"'
    assert parse(text).value_string == json.loads(text)


def test_unterminated_string_is_accepted():
    assert parse('"abc').value_string == "abc"


def test_trailing_text_ignored():
    assert parse("nullx").type is JsonType.NULL


def test_negative_int_round_trip():
    obj = create_object()
    obj.add_int("n", -7)
    assert parse(render_unformatted(obj)).get_int("n") == -7


def test_double_round_trip():
    node = parse(render(create_double(2.25)))
    assert node.value_double == pytest.approx(2.25)


def test_reference_renders_like_original():
    inner = parse("[1,2,3]")
    outer = create_array()
    outer.add_reference_to_array(inner)
    assert render_unformatted(outer) == "[" + render_unformatted(inner) + "]"


@pytest.mark.parametrize("text", ["", "   "])
def test_empty_input_raises(text):
    with pytest.raises(JsonParseError) as info:
        parse(text)
    assert info.value.position == len(text)


def test_bad_character_position():
    text = "  @"
    with pytest.raises(JsonParseError) as info:
        parse(text)
    assert info.value.position == text.index("@")


def test_trailing_comma_in_array():
    text = "[1,]"
    with pytest.raises(JsonParseError) as info:
        parse(text)
    assert info.value.position == text.index("]")


def test_missing_colon_in_object():
    text = '{"a" 1}'
    with pytest.raises(JsonParseError) as info:
        parse(text)
    assert info.value.position == text.index("1")