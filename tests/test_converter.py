from __future__ import annotations

import re

import pytest

from heading_numbers.converter import (
    convert,
    get_serial_number_pattern,
    to_alpha,
    to_chinese,
    to_roman,
)
from heading_numbers.models import NumberStyle


@pytest.mark.parametrize(
    ("number", "expected"),
    [
        (1, "一"),
        (9, "九"),
        (10, "十"),
        (11, "十一"),
        (20, "二十"),
        (99, "九十九"),
        (100, "一百"),
        (105, "一百零五"),
        (110, "一百十"),
        (999, "九百九十九"),
        (1000, "一千"),
        (1005, "一千零五"),
        (1010, "一千零十"),
        (1234, "一千二百三十四"),
        (9999, "九千九百九十九"),
    ],
)
def test_to_chinese(number: int, expected: str):
    assert to_chinese(number) == expected


@pytest.mark.parametrize(
    ("number", "expected"),
    [(1, "壹"), (10, "拾"), (12, "拾贰"), (45, "肆拾伍"), (305, "叁佰零伍"), (2000, "贰仟")],
)
def test_to_chinese_capital(number: int, expected: str):
    assert to_chinese(number, capital=True) == expected


def test_to_chinese_falls_back_to_digits_from_ten_thousand():
    assert to_chinese(10000) == "10000"
    assert convert(12345, NumberStyle.CHINESE_CAPITAL) == "12345"


def test_to_chinese_is_empty_for_non_positive():
    assert to_chinese(0) == ""
    assert to_chinese(-3, capital=True) == ""


@pytest.mark.parametrize(
    ("number", "expected"),
    [
        (1, "I"),
        (4, "IV"),
        (9, "IX"),
        (14, "XIV"),
        (40, "XL"),
        (1994, "MCMXCIV"),
        (3999, "MMMCMXCIX"),
    ],
)
def test_to_roman(number: int, expected: str):
    assert to_roman(number) == expected
    assert to_roman(number, uppercase=False) == expected.lower()


@pytest.mark.parametrize("number", [0, -1, 4000])
def test_to_roman_falls_back_to_digits(number: int):
    assert to_roman(number) == str(number)
    assert convert(number, NumberStyle.ROMAN_LOWER) == str(number)


@pytest.mark.parametrize(
    ("number", "expected"),
    [(1, "A"), (2, "B"), (26, "Z"), (27, "AA"), (52, "AZ"), (53, "BA"), (702, "ZZ"), (703, "AAA")],
)
def test_to_alpha(number: int, expected: str):
    assert to_alpha(number) == expected
    assert to_alpha(number, uppercase=False) == expected.lower()


def test_to_alpha_is_empty_for_non_positive():
    assert to_alpha(0) == ""
    assert convert(-5, NumberStyle.ALPHA_LOWER) == ""


def test_arabic_renders_decimal_for_any_value():
    assert convert(42) == "42"
    assert convert(0, NumberStyle.ARABIC) == "0"


def test_convert_accepts_style_names():
    assert convert(3, "roman") == "III"
    assert convert(28, "alpha_lower") == "ab"
    assert convert(2, "chinese") == "二"


def test_convert_rejects_unknown_style():
    with pytest.raises(ValueError):
        convert(1, "hebrew")


@pytest.mark.parametrize(
    "serial",
    ["1", "1.2.3", "一.二", "1.一.A", "IV", "iv-2", "a/b", "十二、3", "壹拾", "1.", "1.2."],
)
def test_serial_number_pattern_matches_all_styles(serial: str):
    assert re.fullmatch(get_serial_number_pattern(), serial)


@pytest.mark.parametrize("text", ["", "Intro", "1..2", ".1", "1 2", "aB"])
def test_serial_number_pattern_rejects_non_numbers(text: str):
    assert re.fullmatch(get_serial_number_pattern(), text) is None


def test_serial_number_pattern_limited_to_styles():
    pattern = get_serial_number_pattern([NumberStyle.ROMAN])

    assert re.fullmatch(pattern, "XIV.2")
    assert re.fullmatch(pattern, "ABC") is None
    assert re.fullmatch(pattern, "一") is None


def test_serial_number_pattern_always_accepts_digits():
    pattern = get_serial_number_pattern([NumberStyle.CHINESE])

    assert re.fullmatch(pattern, "一.10000")


def test_serial_number_pattern_escapes_configured_separator():
    pattern = get_serial_number_pattern([NumberStyle.ARABIC], separator="+")

    assert re.fullmatch(pattern, "1+2+3")
    assert re.fullmatch(pattern, "1++2") is None


def test_serial_number_pattern_accepts_multi_character_separator():
    pattern = get_serial_number_pattern([NumberStyle.ARABIC], separator="::")

    assert re.fullmatch(pattern, "1::2")
    assert re.fullmatch(pattern, "1.2")
