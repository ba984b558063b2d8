"""Constants used across the heading-numbers package."""

from __future__ import annotations

import re

from .config import NumberingConfig

DEFAULT_CONFIG = NumberingConfig()

# Markdown patterns
CODE_FENCE_PATTERN = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
MAX_HEADING_LEVEL = 6

# Code block placeholders
PLACEHOLDER_TEMPLATE = "<<<CODE_BLOCK_PLACEHOLDER_{index}_>>>"
PLACEHOLDER_PATTERN = re.compile(r"<<<CODE_BLOCK_PLACEHOLDER_(\d+)_>>>")

# Separators recognized between the parts of an existing serial number
KNOWN_SEPARATORS = (".", "、", "-", "/")

# Files and limits
MARKDOWN_EXTENSIONS = (".md", ".markdown")
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
