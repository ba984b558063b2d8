"""Render heading counters as numerals in the supported styles."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from .constants import KNOWN_SEPARATORS
from .models import NumberStyle

CHINESE_DIGITS = "零一二三四五六七八九"
CHINESE_CAPITAL_DIGITS = "零壹贰叁肆伍陆柒捌玖"
CHINESE_UNITS = ("", "十", "百", "千", "万")
CHINESE_CAPITAL_UNITS = ("", "拾", "佰", "仟", "万")

ROMAN_NUMERALS = (
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)
MAX_ROMAN = 3999
MAX_CHINESE = 9999

# Character classes for every token a style can produce
STYLE_PATTERNS = {
    NumberStyle.ARABIC: "[0-9]+",
    NumberStyle.CHINESE: "[零一二三四五六七八九十百千万]+",
    NumberStyle.CHINESE_CAPITAL: "[零壹贰叁肆伍陆柒捌玖拾佰仟万]+",
    NumberStyle.ROMAN: "[IVXLCDM]+",
    NumberStyle.ROMAN_LOWER: "[ivxlcdm]+",
    NumberStyle.ALPHA: "[A-Z]+",
    NumberStyle.ALPHA_LOWER: "[a-z]+",
}


def to_chinese(number: int, capital: bool = False) -> str:
    """Render a number with Han numerals.

    Values from 1 to 9999 are spelled out band by band, inserting a zero
    digit where a band is skipped. Larger values fall back to decimal digits.

    Args:
        number: Value to render.
        capital: Use the financial (capital) digit and unit tables.

    Returns:
        str: Rendered numeral, or an empty string for non-positive values.

    Examples:
        to_chinese(105)  # "一百零五"
        to_chinese(12, capital=True)  # "拾贰"
    """
    if number <= 0:
        return ""

    digits = CHINESE_CAPITAL_DIGITS if capital else CHINESE_DIGITS
    units = CHINESE_CAPITAL_UNITS if capital else CHINESE_UNITS

    if number <= 10:
        return units[1] if number == 10 else digits[number]

    if number < 100:
        tens, ones = divmod(number, 10)
        result = units[1] if tens == 1 else digits[tens] + units[1]
        if ones:
            result += digits[ones]
        return result

    if number < 1000:
        hundreds, remainder = divmod(number, 100)
        result = digits[hundreds] + units[2]
        if remainder:
            if remainder < 10:
                result += digits[0] + digits[remainder]
            else:
                result += to_chinese(remainder, capital)
        return result

    if number <= MAX_CHINESE:
        thousands, remainder = divmod(number, 1000)
        result = digits[thousands] + units[3]
        if remainder:
            if remainder < 100:
                result += digits[0]
            result += to_chinese(remainder, capital)
        return result

    return str(number)


def to_roman(number: int, uppercase: bool = True) -> str:
    """Render a number as a Roman numeral, or as decimal digits outside 1-3999."""
    if number <= 0 or number > MAX_ROMAN:
        return str(number)

    result = []
    for value, numeral in ROMAN_NUMERALS:
        while number >= value:
            result.append(numeral)
            number -= value
    roman = "".join(result)
    return roman if uppercase else roman.lower()


def to_alpha(number: int, uppercase: bool = True) -> str:
    """Render a number as a spreadsheet-style column label (A..Z, AA, AB, ...)."""
    letters = []
    while number > 0:
        number, remainder = divmod(number - 1, 26)
        letters.append(chr(ord("A") + remainder))
    alpha = "".join(reversed(letters))
    return alpha if uppercase else alpha.lower()


_RENDERERS: dict[NumberStyle, Callable[[int], str]] = {
    NumberStyle.ARABIC: str,
    NumberStyle.CHINESE: lambda n: to_chinese(n, capital=False),
    NumberStyle.CHINESE_CAPITAL: lambda n: to_chinese(n, capital=True),
    NumberStyle.ROMAN: lambda n: to_roman(n, uppercase=True),
    NumberStyle.ROMAN_LOWER: lambda n: to_roman(n, uppercase=False),
    NumberStyle.ALPHA: lambda n: to_alpha(n, uppercase=True),
    NumberStyle.ALPHA_LOWER: lambda n: to_alpha(n, uppercase=False),
}


def convert(number: int, style: NumberStyle | str = NumberStyle.ARABIC) -> str:
    """Convert a one-based counter value into a numeral of the given style.

    Args:
        number: Counter value.
        style: Target style, as a `NumberStyle` or its string value.

    Returns:
        str: Rendered numeral. Values outside a style's natural range fall
            back to decimal digits (Roman, Chinese) or an empty string
            (Chinese and alphabetic styles for values below one).

    Raises:
        ValueError: If `style` is not a known style name.

    Examples:
        convert(3, NumberStyle.ROMAN)  # "III"
        convert(28, "alpha_lower")  # "ab"
    """
    return _RENDERERS[NumberStyle(style)](number)


def get_serial_number_pattern(
    styles: Iterable[NumberStyle | str] | None = None, separator: str | None = None
) -> str:
    """Build a regex fragment matching a serial number rendered by `convert`.

    The fragment matches one or more numeral parts joined by ``.``, ``、``,
    ``-``, ``/`` or the configured separator, with an optional trailing
    separator (``"1."``, ``"1.2."``). Arabic digits are always accepted since
    out-of-range values render as decimal digits in every style.

    Args:
        styles: Styles whose numerals should be recognized. Defaults to all.
        separator: Configured separator, escaped before use.

    Returns:
        str: Non-capturing regex fragment.

    Examples:
        re.fullmatch(get_serial_number_pattern(), "1.一.A")  # matches
        get_serial_number_pattern([NumberStyle.ROMAN], separator="|")
    """
    selected = list(NumberStyle) if styles is None else [NumberStyle(s) for s in styles]
    if NumberStyle.ARABIC not in selected:
        selected.insert(0, NumberStyle.ARABIC)

    # dict.fromkeys keeps first-seen order while dropping duplicates
    part_patterns = dict.fromkeys(STYLE_PATTERNS[style] for style in selected)
    single_part = f"(?:{'|'.join(part_patterns)})"

    separators = set(KNOWN_SEPARATORS)
    if separator:
        separators.add(separator)
    # Longest first so multi-character separators win over their prefixes
    escaped = [re.escape(sep) for sep in sorted(separators, key=lambda s: (-len(s), s))]
    separator_pattern = f"(?:{'|'.join(escaped)})"

    return f"(?:{single_part}(?:{separator_pattern}{single_part})*{separator_pattern}?)"
