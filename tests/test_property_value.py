import pytest

from enginekit.property_value import PropertyValue


def test_scalar_conversions():
    assert PropertyValue("2.5").as_float() == 2.5
    assert PropertyValue(" 42 ").as_int() == 42
    assert PropertyValue("hello").as_string() == "hello"


@pytest.mark.parametrize("text, expected", [("true", True), ("FALSE", False), ("1", True), ("0", False)])
def test_bool_conversion(text, expected):
    assert PropertyValue(text).as_bool() is expected


@pytest.mark.parametrize(
    "method, text",
    [("as_float", "abc"), ("as_int", "3.5"), ("as_bool", "maybe")],
)
def test_bad_text_raises(method, text):
    with pytest.raises(ValueError):
        getattr(PropertyValue(text), method)()


def test_vector_conversions():
    assert PropertyValue("(1, 2)").as_float2() == (1.0, 2.0)
    assert PropertyValue("[1.5, 2, 3];").as_float3() == (1.5, 2.0, 3.0)
    assert PropertyValue("(1,2,3,4)").as_float4() == (1.0, 2.0, 3.0, 4.0)
    assert PropertyValue("(4, 5)").as_int2() == (4, 5)
    assert PropertyValue("(4, 5, 6)").as_int3() == (4, 5, 6)
    assert PropertyValue("(4, 5, 6, 7)").as_int4() == (4, 5, 6, 7)
    assert PropertyValue("(true, false)").as_bool2() == (True, False)
    assert PropertyValue("(1, 0, 1)").as_bool3() == (True, False, True)
    assert PropertyValue("(0, 0, 0, 1)").as_bool4() == (False, False, False, True)


def test_too_few_components_gives_zeros():
    assert PropertyValue("(1, 2)").as_float3() == (0.0, 0.0, 0.0)
    assert PropertyValue("7").as_int2() == (0, 0)
    assert PropertyValue("").as_bool2() == (False, False)


def test_extra_components_ignored():
    assert PropertyValue("(1, 2, 3)").as_int2() == (1, 2)


def test_as_object():
    assert PropertyValue("Sprite(hero);").as_object() == ("Sprite", "hero")
    assert PropertyValue("Sprite").as_object() is None
    assert PropertyValue("a(b(c)").as_object() is None


def test_set_as_object_round_trip():
    pv = PropertyValue()
    pv.set_as_object("Animation", "walk")
    assert pv.value == "Animation(walk);"
    assert pv.as_object() == ("Animation", "walk")
    assert pv.matches_object("Animation", "walk")
    assert not pv.matches_object("Animation", "run")
    assert not pv.matches_object("Sprite", "walk")


def test_from_value_round_trips():
    assert PropertyValue.from_value(3).as_int() == 3
    assert PropertyValue.from_value(2.25).as_float() == 2.25
    assert PropertyValue.from_value(True).as_bool() is True
    assert PropertyValue.from_value(False).as_bool() is False
    assert PropertyValue.from_value((1.5, -2.0, 3.0)).as_float3() == (1.5, -2.0, 3.0)
    assert PropertyValue.from_value((1, 2, 3, 4)).as_int4() == (1, 2, 3, 4)
    assert PropertyValue.from_value("text").as_string() == "text"


def test_or_default():
    assert PropertyValue("").or_default(7, PropertyValue.as_int) == 7
    assert PropertyValue("12").or_default(7, PropertyValue.as_int) == 12
    assert PropertyValue("").or_default("fallback") == "fallback"
    assert PropertyValue("given").or_default("fallback") == "given"


def test_str_is_raw_value():
    assert str(PropertyValue("(1, 2)")) == "(1, 2)"