"""
Numbers the headings of a Markdown file, or strips their numbers.
The file is rewritten in place unless --stdout is given.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import click
from .config import ConfigError, NumberingConfig, build_config
from .exceptions import ProcessFileError
from .filesystem import (
    check_unchanged,
    get_max_file_size,
    resolve_markdown_path,
    stat_document,
    write_document,
)
from .models import NumberStyle
from .numbering import clear_file, process_file

__all__ = ["cli"]

STYLE_ORDER = list(NumberStyle)
STYLE_NAMES = [style.value for style in STYLE_ORDER]


def _parse_style_overrides(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str] | None:
    """Turn repeated ``LEVEL=STYLE`` options into a `level_styles` mapping."""
    if not values:
        return None

    styles = {}
    for value in values:
        level, sep, style = value.partition("=")
        if not sep or not level.strip() or not style.strip():
            raise click.BadParameter(f"expected LEVEL=STYLE, got {value!r}", ctx=ctx, param=param)
        if style.strip() not in STYLE_NAMES:
            raise click.BadParameter(
                f"unknown style {style.strip()!r} (choose from {', '.join(STYLE_NAMES)})",
                ctx=ctx,
                param=param,
            )
        styles[level.strip()] = style.strip()
    return styles


def _run(
    filepath: str,
    to_stdout: bool,
    transform: Callable[[Path, NumberingConfig], tuple[str, str]],
    **overrides: object,
) -> None:
    """Resolve the file and configuration, apply `transform`, then write or print."""
    base_dir = Path.cwd().resolve()
    try:
        path = resolve_markdown_path(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(path.parent, **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        initial_stat = stat_document(path, max_file_size)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        original, updated = transform(path, config)
    except ProcessFileError as error:
        raise click.ClickException(str(error)) from error

    try:
        check_unchanged(initial_stat, stat_document(path), path)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    if to_stdout:
        click.echo(updated, nl=False)
        return

    if updated == original:
        click.echo(f"{path.name}: headings already up to date", err=True)
        return

    try:
        write_document(
            path, updated, initial_stat, warn=lambda message: click.echo(message, err=True)
        )
    except IOError as error:
        raise click.ClickException(str(error)) from error


@click.group()
@click.version_option(package_name="heading-numbers")
def cli():
    """Add or remove hierarchical serial numbers on Markdown headings."""


@cli.command("set")
@click.option("--start-level", type=int, help="First heading level to number")
@click.option("--end-level", type=int, help="Last heading level to number")
@click.option("--separator", help="Text between the parts of a number (default: .)")
@click.option(
    "--style",
    "level_styles",
    multiple=True,
    metavar="LEVEL=STYLE",
    callback=_parse_style_overrides,
    help=f"Numeral style for a level; repeatable. Styles: {', '.join(STYLE_NAMES)}",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the result instead of saving")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def set_numbers(
    filepath: str,
    start_level: int | None = None,
    end_level: int | None = None,
    separator: str | None = None,
    level_styles: dict[str, str] | None = None,
    to_stdout: bool = False,
):
    """
    Number the headings of FILEPATH, replacing any numbers already there.

    Headings inside fenced code blocks are never touched.

    Raises:
        click.BadParameter: If the path or the configuration is invalid,
            for example when the start level is deeper than the end level.
        click.ClickException: If the file is too large, unreadable, or changes
            while it is being processed.

    Examples:
        heading-numbers set README.md --start-level 2 --style 2=roman
    """
    _run(
        filepath,
        to_stdout,
        process_file,
        start_level=start_level,
        end_level=end_level,
        separator=separator,
        level_styles=level_styles,
    )


@cli.command("clear")
@click.option(
    "--configured-styles",
    is_flag=True,
    help="Recognize only numbers in arabic or the configured styles",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the result instead of saving")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def clear_numbers(filepath: str, configured_styles: bool = False, to_stdout: bool = False):
    """
    Strip serial numbers in any style from the headings of FILEPATH.

    A leading all-caps or all-lowercase word followed by more text counts as
    a number too. Pass --configured-styles to keep such words when the
    document only uses arabic or the styles set in the configuration file.

    Examples:
        heading-numbers clear README.md --stdout
    """

    def _clear(path: Path, config: NumberingConfig) -> tuple[str, str]:
        styles = None
        if configured_styles:
            styles = sorted(set(config.level_styles.values()), key=STYLE_ORDER.index)
        return clear_file(path, styles, config.separator)

    _run(filepath, to_stdout, _clear)


if __name__ == "__main__":
    cli()
