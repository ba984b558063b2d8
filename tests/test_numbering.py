from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from heading_numbers.config import NumberingConfig
from heading_numbers.exceptions import ProcessFileError
from heading_numbers.models import NumberStyle
from heading_numbers.numbering import (
    clear_file,
    clear_serial_numbers,
    process_content,
    process_file,
)


def _doc(content: str) -> str:
    return textwrap.dedent(content).lstrip()


def test_process_content_numbers_headings():
    content = _doc(
        """
        # Intro
        Some text.
        ## Setup
        ## Usage
        ### Options
        # Reference
        ## API
        """
    )

    assert process_content(content) == _doc(
        """
        # 1 Intro
        Some text.
        ## 1.1 Setup
        ## 1.2 Usage
        ### 1.2.1 Options
        # 2 Reference
        ## 2.1 API
        """
    )


def test_process_content_replaces_existing_numbers():
    content = "# 3 Intro\n## 7.2 Setup\n## 1. Usage\n"

    assert process_content(content) == "# 1 Intro\n## 1.1 Setup\n## 1.2 Usage\n"


def test_process_content_is_idempotent():
    content = _doc(
        """
        ## Alpha
        ### Beta
        #### Gamma
        ## Delta
        """
    )
    config = NumberingConfig(
        start_level=2,
        separator="-",
        level_styles={2: NumberStyle.CHINESE_CAPITAL, 3: NumberStyle.ROMAN_LOWER},
    )

    once = process_content(content, config)
    twice = process_content(once, config)

    assert once == "## 壹 Alpha\n### 壹-i Beta\n#### 壹-i-1 Gamma\n## 贰 Delta\n"
    assert twice == once


def test_process_content_replaces_numbers_after_style_change():
    chinese = NumberingConfig(level_styles={1: NumberStyle.CHINESE})
    numbered = process_content("# Intro\n## Setup\n", chinese)

    assert numbered == "# 一 Intro\n## 一.1 Setup\n"
    assert process_content(numbered) == "# 1 Intro\n## 1.1 Setup\n"


def test_process_content_replaces_numbers_with_old_separator():
    slashed = process_content("# A1\n## B1\n", NumberingConfig(separator="/"))

    assert slashed == "# 1 A1\n## 1/1 B1\n"
    assert process_content(slashed) == "# 1 A1\n## 1.1 B1\n"


def test_process_content_accepts_heading_level_keys():
    config = NumberingConfig(level_styles={"h1": "roman", "2": "alpha_lower"})

    assert process_content("# Intro\n## Setup\n", config) == "# I Intro\n## I.a Setup\n"


def test_process_content_rejects_unknown_style():
    with pytest.raises(ValueError, match="Unknown numbering style"):
        process_content("# Intro\n", NumberingConfig(level_styles={1: "klingon"}))


def test_process_content_empty_title_is_stable():
    once = process_content("# \n## \n")

    assert once == "# 1 \n## 1.1 \n"
    assert process_content(once) == once


def test_process_content_skipped_level():
    assert process_content("### Deep\n") == "### 1.1.1 Deep\n"


def test_process_content_out_of_range_headings_lose_their_numbers():
    content = "# 1 Title\n## Part\n###### 9 Tiny\n"
    config = NumberingConfig(start_level=2, end_level=4)

    assert process_content(content, config) == "# Title\n## 1 Part\n###### Tiny\n"


def test_process_content_ignores_code_blocks():
    content = _doc(
        """
        # Title
        ```markdown
        ## 1 Fake Heading
        # Another
        ```
        ## Real
        ~~~
        ### not this
        ~~~
        """
    )

    result = process_content(content)

    assert "```markdown\n## 1 Fake Heading\n# Another\n```\n" in result
    assert "~~~\n### not this\n~~~\n" in result
    assert result.startswith("# 1 Title\n")
    assert "## 1.1 Real\n" in result


def test_process_content_leaves_seven_hashes_alone():
    content = "####### Not a heading\n# Heading\n"

    assert process_content(content) == "####### Not a heading\n# 1 Heading\n"


def test_process_content_preserves_line_endings_and_missing_final_newline():
    content = "# A\r\n## B\r\ntext\r\n# C"

    assert process_content(content) == "# 1 A\r\n## 1.1 B\r\ntext\r\n# 2 C"


def test_process_content_empty_document():
    assert process_content("") == ""


def test_process_content_with_string_style_values():
    config = NumberingConfig(level_styles={1: "alpha", 2: "roman"})

    assert process_content("# A\n## B\n", config) == "# A A\n## A.I B\n"


def test_process_content_calls_are_independent():
    config = NumberingConfig()

    first = process_content("# One\n# Two\n", config)
    second = process_content("# Three\n", config)

    assert first == "# 1 One\n# 2 Two\n"
    assert second == "# 1 Three\n"


def test_clear_serial_numbers_strips_numbers():
    content = "# 1 Intro\n## 1.1 Setup\n### 一.二.III Mixed\ntext\n"

    assert clear_serial_numbers(content) == "# Intro\n## Setup\n### Mixed\ntext\n"


def test_clear_serial_numbers_keeps_code_blocks():
    content = "## 2 Real\n```\n## 1 Fake Heading\n```\n"

    assert clear_serial_numbers(content) == "## Real\n```\n## 1 Fake Heading\n```\n"


def test_clear_serial_numbers_with_restricted_styles():
    content = "## A Tale\n## 2 Second\n"

    assert clear_serial_numbers(content, [NumberStyle.ARABIC]) == "## A Tale\n## Second\n"
    assert clear_serial_numbers(content) == "## Tale\n## Second\n"


def test_clear_serial_numbers_with_configured_separator():
    content = "# 1 Intro\n## 1|2 Setup\n"

    assert clear_serial_numbers(content, separator="|") == "# Intro\n## Setup\n"
    assert clear_serial_numbers(content) == "# Intro\n## 1|2 Setup\n"


def test_clear_after_process_matches_clear():
    content = _doc(
        """
        # Intro
        ## Setup
        #### Skipped
        """
    )
    config = NumberingConfig(level_styles={2: NumberStyle.CHINESE})

    assert clear_serial_numbers(process_content(content, config)) == clear_serial_numbers(content)


def _write_markdown(tmp_path: Path, content: str) -> Path:
    target = tmp_path / "sample.md"
    target.write_text(content, encoding="utf-8", newline="")
    return target


def test_process_file_returns_original_and_numbered(tmp_path: Path):
    target = _write_markdown(tmp_path, "# A\r\n## B\r\n")

    original, numbered = process_file(target, NumberingConfig(level_styles={"h2": "alpha"}))

    assert original == "# A\r\n## B\r\n"
    assert numbered == "# 1 A\r\n## 1.A B\r\n"


def test_process_file_rejects_inverted_levels(tmp_path: Path):
    target = _write_markdown(tmp_path, "# A\n")

    with pytest.raises(ProcessFileError, match="end_level"):
        process_file(target, NumberingConfig(start_level=4, end_level=2))


def test_process_file_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "binary.md"
    target.write_bytes(b"# \xff\xfe\n")

    with pytest.raises(ProcessFileError, match="Invalid UTF-8"):
        process_file(target)


def test_clear_file_missing(tmp_path: Path):
    with pytest.raises(ProcessFileError):
        clear_file(tmp_path / "missing.md")
