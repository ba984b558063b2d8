"""
heading-numbers: hierarchical serial numbers for Markdown headings.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    heading-numbers set README.md
    heading-numbers clear README.md

Library Usage:
    from heading_numbers import NumberingConfig, NumberStyle, process_content

    config = NumberingConfig(level_styles={1: NumberStyle.CHINESE})
    numbered = process_content("# Intro\\n## Setup\\n", config)
    # "# 一 Intro\\n## 一.1 Setup\\n"
"""

from .config import ConfigError, NumberingConfig, validate_config
from .converter import convert, get_serial_number_pattern
from .counter import CounterEngine
from .exceptions import NumberingError, ProcessFileError
from .matcher import HeadingMatcher
from .models import HeadingMatch, NumberStyle, ShieldResult
from .numbering import clear_file, clear_serial_numbers, process_content, process_file
from .shield import protect, restore

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "process_content",
    "clear_serial_numbers",
    "process_file",
    "clear_file",
    # Building blocks
    "convert",
    "get_serial_number_pattern",
    "protect",
    "restore",
    "HeadingMatcher",
    "CounterEngine",
    # Data models
    "NumberingConfig",
    "NumberStyle",
    "HeadingMatch",
    "ShieldResult",
    # Utilities
    "validate_config",
    # Exceptions
    "ConfigError",
    "NumberingError",
    "ProcessFileError",
    # Version
    "__version__",
]
