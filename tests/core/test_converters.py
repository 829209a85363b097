import math

import pytest

from xmlconfig_toolkit.core.converters import (
    DEFAULT_REGISTRY,
    ConverterRegistry,
    convert,
    convert_to,
)
from xmlconfig_toolkit.core.exceptions import ConversionError, UnknownConverterError


class TestBoolConversion:
    def test_literals(self):
        assert convert("true", bool) is True
        assert convert("false", bool) is False

    def test_integer_fallback(self):
        assert convert("1", bool) is True
        assert convert("0", bool) is False
        assert convert("-3", bool) is True

    def test_literals_are_case_sensitive(self):
        # "True" is not a literal, and has no integer prefix -> 0 -> False
        assert convert("True", bool) is False
        assert convert("TRUE", bool) is False

    def test_strict_rejects_non_literals(self):
        with pytest.raises(ConversionError) as exc_info:
            convert("yes", bool, strict=True)
        assert exc_info.value.target is bool
        assert convert("1", bool, strict=True) is True


class TestNumericConversion:
    def test_int_plain(self):
        assert convert("42", int) == 42
        assert convert("  -7", int) == -7

    def test_int_lenient_prefix(self):
        assert convert("12abc", int) == 12
        assert convert("1.9", int) == 1

    def test_int_without_prefix_is_zero(self):
        assert convert("abc", int) == 0
        assert convert("", int) == 0
        assert convert("<DNE/>", int) == 0

    def test_float_plain(self):
        assert convert("3.14", float) == pytest.approx(3.14)
        assert convert("-1e3", float) == -1000.0
        assert convert(".5", float) == 0.5

    def test_float_lenient_prefix(self):
        assert convert("2.5GeV", float) == 2.5
        assert convert("x", float) == 0.0

    def test_float_special_values(self):
        assert math.isinf(convert("inf", float))
        assert math.isnan(convert("nan", float))

    def test_strict_numeric_errors(self):
        with pytest.raises(ConversionError):
            convert("12abc", int, strict=True)
        with pytest.raises(ConversionError):
            convert("", float, strict=True)
        assert convert(" 12 ", int, strict=True) == 12

    @pytest.mark.parametrize("text, target", [
        ("1_000", int),
        ("1_0.5", float),
        ("\u0661\u0662", int),
        ("\u0661.5", float),
    ])
    def test_strict_accepts_only_what_lenient_reads(self, text, target):
        with pytest.raises(ConversionError):
            convert(text, target, strict=True)

    def test_lenient_stops_at_underscores_and_non_ascii_digits(self):
        assert convert("1_000", int) == 1
        assert convert("1_0.5", float) == 1.0
        assert convert("\u0661\u0662", int) == 0


class TestTextConversion:
    def test_str_is_verbatim(self):
        assert convert("  spaced  value ", str) == "  spaced  value "

    def test_convert_to(self):
        assert convert_to("text") == "text"
        assert convert_to(True) == "true"
        assert convert_to(False) == "false"
        assert convert_to(17) == "17"
        assert convert_to(2.5) == "2.5"
        assert convert_to(50.0) == "50"

    def test_float_text_round_trips(self):
        for value in (0.1, 1e-12, 123456.789, -2.0):
            assert convert(convert_to(value), float) == value


class Point:
    def __init__(self, x, y):
        self.x, self.y = x, y


class TestRegistry:
    def test_unknown_type(self):
        with pytest.raises(UnknownConverterError):
            convert("1", Point)

    def test_register_custom_type(self):
        registry = ConverterRegistry()

        def parse_point(text, *, strict=False):
            x, y = text.split(";")
            return Point(float(x), float(y))

        registry.register(Point, parse_point, lambda p: f"{p.x};{p.y}")
        point = registry.convert("1;2", Point)
        assert (point.x, point.y) == (1.0, 2.0)
        assert registry.convert_to(Point(3, 4)) == "3;4"
        assert not DEFAULT_REGISTRY.supports(Point)

    def test_subclass_resolves_through_mro(self):
        class Celsius(float):
            pass

        assert DEFAULT_REGISTRY.convert("21.5", Celsius) == 21.5

    def test_copy_is_independent(self):
        clone = DEFAULT_REGISTRY.copy()
        clone.unregister(int)
        assert not clone.supports(int)
        assert DEFAULT_REGISTRY.supports(int)


def test_words_starting_with_inf_are_not_numbers():
    assert convert("information", float) == 0.0
