"""Data models for heading-numbers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class NumberStyle(str, Enum):
    """Numeral styles a heading level can be rendered in.

    Values are the style names accepted in configuration files and on the
    command line.
    """

    ARABIC = "arabic"
    CHINESE = "chinese"
    CHINESE_CAPITAL = "chinese_capital"
    ROMAN = "roman"
    ROMAN_LOWER = "roman_lower"
    ALPHA = "alpha"
    ALPHA_LOWER = "alpha_lower"


class FenceState(Enum):
    """Scanner states used while looking for fenced code blocks.

    Attributes:
        NORMAL: Regular Markdown text.
        IN_FENCED_CODE: Inside a fenced code block.
    """

    NORMAL = auto()
    IN_FENCED_CODE = auto()


@dataclass
class FenceContext:
    """Track the fence that opened the current code block.

    Attributes:
        state: Current scanner state.
        fence_char: Fence character (backtick or tilde) of the open block, if any.
        fence_length: Number of fence characters on the opening line.
        start_line: Zero-based index of the opening fence line.
    """

    state: FenceState = FenceState.NORMAL
    fence_char: str | None = None
    fence_length: int = 0
    start_line: int | None = None


@dataclass(frozen=True)
class HeadingMatch:
    """An ATX heading line found while scanning a document.

    Attributes:
        hash_count: Number of leading ``#`` characters (1-6).
        existing_number: Serial number already present before the title, if any.
        title: Remaining heading text.
        position: Character offset of the line within the scanned text.
        length: Length of the line, excluding its terminator.
        line_number: Zero-based line index.
    """

    hash_count: int
    existing_number: str | None
    title: str
    position: int
    length: int
    line_number: int

    @property
    def level(self) -> int:
        return self.hash_count

    @property
    def hashes(self) -> str:
        return "#" * self.hash_count


@dataclass
class ShieldResult:
    """Text with fenced code blocks swapped out for placeholders.

    Attributes:
        text: Document text with each code block replaced by a placeholder.
        blocks: Original code blocks, indexed by placeholder number.
    """

    text: str
    blocks: list[str] = field(default_factory=list)
