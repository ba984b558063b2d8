"""Recognize ATX heading lines and any serial number they already carry."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from .config import NumberingConfig
from .constants import MAX_HEADING_LEVEL
from .converter import get_serial_number_pattern
from .models import HeadingMatch, NumberStyle
from .shield import line_body


class HeadingMatcher:
    """Line scanner producing `HeadingMatch` records.

    A heading line is 1-6 ``#`` characters, a space, an optional existing
    serial number followed by whitespace, then the title. Lines opening with
    seven or more ``#`` are not headings.

    The compiled pattern depends on the styles and separator in use, so a
    matcher is built for each document rather than shared.

    Args:
        styles: Numeral styles to recognize in existing numbers. Defaults to
            every style.
        separator: Configured separator, recognized in addition to the
            built-in ones.

    Examples:
        matcher = HeadingMatcher([NumberStyle.ARABIC])
        matcher.match_line("## 1.2 Usage").existing_number  # "1.2"
    """

    def __init__(
        self, styles: Iterable[NumberStyle | str] | None = None, separator: str | None = None
    ):
        self.number_pattern = get_serial_number_pattern(styles, separator)
        self.pattern = re.compile(
            rf"(?P<hashes>#{{1,{MAX_HEADING_LEVEL}}}) [ \t]*"
            rf"(?:(?P<number>{self.number_pattern})[ \t]+)?"
            r"(?P<title>.*)"
        )

    @classmethod
    def for_config(cls, config: NumberingConfig) -> HeadingMatcher:
        """Build a matcher for renumbering under `config`.

        Existing numbers are recognized in every style, not only the configured
        ones, so a document renumbered after a style change drops its old
        numerals. The configured separator is recognized as well.
        """
        return cls(None, config.separator)

    def match_line(
        self, line: str, position: int = 0, line_number: int = 0
    ) -> HeadingMatch | None:
        """Match a single line body (no terminator) against the heading grammar."""
        match = self.pattern.fullmatch(line)
        if match is None:
            return None
        return HeadingMatch(
            hash_count=len(match.group("hashes")),
            existing_number=match.group("number"),
            title=match.group("title"),
            position=position,
            length=len(line),
            line_number=line_number,
        )

    def scan(self, text: str) -> Iterator[HeadingMatch]:
        """Yield every heading in `text`, top to bottom."""
        position = 0
        for line_number, line in enumerate(text.splitlines(keepends=True)):
            heading = self.match_line(line_body(line), position, line_number)
            if heading is not None:
                yield heading
            position += len(line)
