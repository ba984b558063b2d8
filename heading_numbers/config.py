"""Numbering settings and their lookup in TOML files."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import tomllib

from .models import NumberStyle

LEVELS = range(1, 7)


def _default_level_styles() -> dict[int, NumberStyle]:
    return {level: NumberStyle.ARABIC for level in LEVELS}


@dataclass
class NumberingConfig:
    """Configuration for numbering Markdown headings.

    Attributes:
        start_level: Shallowest heading level that receives a number.
        end_level: Deepest heading level that receives a number.
        separator: Text placed between the parts of a serial number.
        level_styles: Numeral style for each heading level (1-6). Levels
            missing from the mapping render as arabic numerals.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        NumberingConfig(start_level=2, end_level=4, separator="-")
        NumberingConfig(level_styles={1: NumberStyle.CHINESE, 2: NumberStyle.ARABIC})
    """

    # Heading levels
    start_level: int = 1
    end_level: int = 6

    # Formatting
    separator: str = "."
    level_styles: dict[int, NumberStyle] = field(default_factory=_default_level_styles)

    # Limits
    max_file_size: int = 10 * 1024 * 1024

    def style_for(self, level: int) -> NumberStyle:
        return NumberStyle(self.level_styles.get(level, NumberStyle.ARABIC))


class ConfigError(ValueError):
    """A config file or override holds a value that cannot be used."""


# Files checked in each directory, in order, with the tables each may hold
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", "heading-numbers"),)),
    (".heading-numbers.toml", (("heading-numbers",), ("tool", "heading-numbers"))),
)


def load_config(search_path: Path) -> NumberingConfig:
    """Load the configuration that applies to documents in `search_path`.

    `search_path` and then each of its parents are checked for the files in
    `CONFIG_SOURCES`. The first heading-numbers table found is used, even an
    empty one, so a nested project can opt out of a parent's settings. Files
    that cannot be read or are not valid TOML are skipped.

    Raises:
        ConfigError: If the table found is not a table, has unknown keys, or
            names unknown levels or styles.

    Examples:
        load_config(Path("docs"))
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for filename, table_paths in CONFIG_SOURCES:
            config = _read_config_file(directory / filename, table_paths)
            if config is not None:
                return normalize_config(config)
    return NumberingConfig()


def _read_config_file(
    config_file: Path, table_paths: tuple[tuple[str, ...], ...]
) -> NumberingConfig | None:
    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        table: object = data
        for key in table_path:
            table = table.get(key) if isinstance(table, dict) else None
        if table is None:
            continue

        label = ".".join(table_path)
        if not isinstance(table, dict):
            raise ConfigError(f"`[{label}]` in {config_file} must be a table")
        try:
            return NumberingConfig(**table)
        except TypeError as error:
            raise ConfigError(f"Unsupported setting in `[{label}]` of {config_file}") from error

    return None


def parse_level(key: object) -> int:
    """Turn a `level_styles` key (``2``, ``"2"`` or ``"h2"``) into a heading level.

    Raises:
        ConfigError: If the key does not name a level between 1 and 6.
    """
    raw = key
    if isinstance(key, str):
        raw = key.strip().lower().removeprefix("h")
        if not (raw.isascii() and raw.isdigit()):
            raise ConfigError(f"Invalid heading level in `level_styles`: {key!r}")
        raw = int(raw)
    if isinstance(raw, bool) or not isinstance(raw, int) or raw not in LEVELS:
        raise ConfigError(f"Invalid heading level in `level_styles`: {key!r}")
    return raw


def parse_style(value: object) -> NumberStyle:
    """Turn a style name into a `NumberStyle`.

    Raises:
        ConfigError: If the name is not a supported style.
    """
    try:
        return NumberStyle(value)
    except ValueError as error:
        choices = ", ".join(style.value for style in NumberStyle)
        error_message = f"Unknown numbering style {value!r} (expected one of: {choices})"
        raise ConfigError(error_message) from error


def normalize_config(config: NumberingConfig) -> NumberingConfig:
    """Return a copy whose `level_styles` covers every level with `NumberStyle` values.

    Raises:
        ConfigError: If `level_styles` is not a mapping or holds invalid entries.
    """
    if not isinstance(config.level_styles, dict):
        raise ConfigError("`level_styles` must be a table mapping levels to styles")

    level_styles = _default_level_styles()
    for key, value in config.level_styles.items():
        level_styles[parse_level(key)] = parse_style(value)

    return replace(config, level_styles=level_styles)


def validate_config(config: NumberingConfig) -> None:
    """Check that `config` describes a usable numbering scheme.

    The numbering functions trust the level range they are given, so
    anything built from user input goes through here first.

    Raises:
        ConfigError: On a level outside 1-6, a start level deeper than the
            end level, a non-string or multi-line separator, an unknown level
            or style in `level_styles`, or a size limit that is not a
            positive integer.

    Examples:
        validate_config(NumberingConfig(start_level=2, end_level=3))
    """
    config = normalize_config(config)

    _ensure_integers(
        {
            "start_level": config.start_level,
            "end_level": config.end_level,
            "max_file_size": config.max_file_size,
        }
    )

    if config.start_level < 1:
        raise ConfigError("`start_level` must be >= 1")
    if config.end_level > 6:
        raise ConfigError("`end_level` must be <= 6")
    if config.start_level > config.end_level:
        raise ConfigError("`end_level` must be >= `start_level`")

    if not isinstance(config.separator, str):
        raise ConfigError("`separator` must be a string")
    if "\n" in config.separator or "\r" in config.separator:
        raise ConfigError("`separator` must not contain line breaks")

    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: NumberingConfig, **overrides: object) -> NumberingConfig:
    """Return `config` with the command-line overrides that were given.

    Overrides set to None were not given and are skipped. `level_styles`
    overrides are layered over the configured styles level by level.

    Examples:
        apply_overrides(config, separator="-", level_styles={1: "roman"})
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    if "level_styles" in changes:
        changes["level_styles"] = {**config.level_styles, **changes["level_styles"]}
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> NumberingConfig:
    """Load the configuration for `search_path`, apply overrides, then validate it.

    Raises:
        ConfigError: If a config file or the resulting configuration is invalid.
    """
    config = apply_overrides(load_config(search_path), **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
