"""Number and un-number the headings of a Markdown document."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from .config import ConfigError, NumberingConfig, normalize_config, validate_config
from .counter import CounterEngine
from .exceptions import ProcessFileError
from .filesystem import read_document
from .matcher import HeadingMatcher
from .models import HeadingMatch, NumberStyle
from .shield import protect, restore


def _format_heading(heading: HeadingMatch, serial_number: str) -> str:
    if serial_number:
        return f"{heading.hashes} {serial_number} {heading.title}"
    return f"{heading.hashes} {heading.title}"


def _rewrite_headings(
    content: str, matcher: HeadingMatcher, serial_for: Callable[[HeadingMatch], str]
) -> str:
    """Shield code blocks, rewrite each heading line, then restore the blocks."""
    shielded = protect(content)
    text = shielded.text

    parts = []
    offset = 0
    for heading in matcher.scan(text):
        parts.append(text[offset : heading.position])
        parts.append(_format_heading(heading, serial_for(heading)))
        offset = heading.position + heading.length
    parts.append(text[offset:])

    return restore("".join(parts), shielded.blocks)


def process_content(content: str, config: NumberingConfig | None = None) -> str:
    """Give every heading in range a hierarchical serial number.

    Existing serial numbers in any style are recognized and replaced, so
    numbering an already-numbered document renumbers it instead of stacking
    numbers, even when the styles have changed since it was last numbered.
    A leading all-capital or all-lowercase word followed by more text (such
    as "API" in "## API Guide") reads as a numeral and is replaced too.
    Headings inside fenced code blocks are left alone. The level range is not
    validated here; call `validate_config` first.

    Args:
        content: Complete Markdown document.
        config: Numbering configuration. Defaults to `NumberingConfig()`.

    Returns:
        str: The document with renumbered headings.

    Raises:
        ConfigError: If `level_styles` names an unknown level or style.

    Examples:
        process_content("# Intro\\n## Setup\\n")  # "# 1 Intro\\n## 1.1 Setup\\n"
    """
    config = normalize_config(config or NumberingConfig())
    engine = CounterEngine(config)
    matcher = HeadingMatcher.for_config(config)

    engine.reset()
    try:
        return _rewrite_headings(
            content, matcher, lambda heading: engine.generate_serial_number(heading.level)
        )
    finally:
        engine.reset()


def clear_serial_numbers(
    content: str,
    styles: Iterable[NumberStyle | str] | None = None,
    separator: str | None = None,
) -> str:
    """Strip serial numbers from every heading.

    Args:
        content: Complete Markdown document.
        styles: Numeral styles to recognize. Defaults to every style, which
            also treats a leading all-capital or all-lowercase word as a number.
        separator: Configured separator, recognized in addition to the
            built-in ones.

    Returns:
        str: The document with each heading reduced to ``<hashes> <title>``.

    Examples:
        clear_serial_numbers("# 1 Intro\\n## 1.1 Setup\\n")  # "# Intro\\n## Setup\\n"
    """
    matcher = HeadingMatcher(styles, separator)
    return _rewrite_headings(content, matcher, lambda heading: "")


def _read_document(filepath: Path) -> str:
    try:
        return read_document(filepath)
    except UnicodeDecodeError as error:
        raise ProcessFileError(filepath, f"Invalid UTF-8 sequence: {error}") from error
    except IOError as error:
        raise ProcessFileError(filepath, str(error)) from error


def process_file(filepath: Path, config: NumberingConfig | None = None) -> tuple[str, str]:
    """Read a Markdown file and number its headings.

    Args:
        filepath: Path to the Markdown file.
        config: Numbering configuration, validated before use.

    Returns:
        tuple[str, str]: Original and numbered content.

    Raises:
        ProcessFileError: If the configuration is invalid or the file cannot
            be read or decoded.
    """
    config = config or NumberingConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ProcessFileError(filepath, str(error)) from error

    original = _read_document(filepath)
    return original, process_content(original, config)


def clear_file(
    filepath: Path,
    styles: Iterable[NumberStyle | str] | None = None,
    separator: str | None = None,
) -> tuple[str, str]:
    """Read a Markdown file and strip its heading numbers.

    Returns:
        tuple[str, str]: Original and cleared content.

    Raises:
        ProcessFileError: If the file cannot be read or decoded.
    """
    original = _read_document(filepath)
    return original, clear_serial_numbers(original, styles, separator)
