"""Reading and rewriting the Markdown files handed to the CLI."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "HEADING_NUMBERS_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return ``HEADING_NUMBERS_MAX_FILE_SIZE`` as bytes, or `default` when unset.

    Raises:
        ValueError: If the variable does not hold a positive integer.
    """
    raw = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw is None:
        return default

    try:
        limit = int(raw)
    except ValueError:
        limit = 0
    if limit <= 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw!r}")
    return limit


def resolve_markdown_path(raw_path: str, base_dir: Path) -> Path:
    """Resolve the path given on the command line to a Markdown file under `base_dir`.

    Args:
        raw_path: Absolute or relative path to the document.
        base_dir: Resolved directory the document has to live under.

    Returns:
        Path: The resolved document path.

    Raises:
        ValueError: If the path goes through a symlink, does not exist, is not
            a regular file, lies outside `base_dir` or lacks a Markdown suffix.

    Examples:
        resolve_markdown_path("docs/guide.md", Path.cwd().resolve())
    """
    path = Path(raw_path).expanduser()

    for part in (path, *path.parents):
        try:
            is_link = part.is_symlink()
        except OSError:
            is_link = False
        if is_link:
            raise ValueError(f"Symlinks are not supported: {path}")

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Cannot resolve {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")
    if not resolved.is_relative_to(base_dir):
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.")
    if resolved.suffix.lower() not in MARKDOWN_EXTENSIONS:
        raise ValueError(
            f"{resolved} is not a Markdown file "
            f"(expected one of: {', '.join(MARKDOWN_EXTENSIONS)})"
        )

    return resolved


def stat_document(filepath: Path, max_size: int | None = None) -> os.stat_result:
    """Stat a document without following symlinks.

    Raises:
        IOError: If the file is inaccessible, not a regular file, or larger
            than `max_size` bytes.
    """
    try:
        info = os.lstat(filepath)
    except OSError as error:
        raise IOError(f"Cannot access {filepath}: {error}") from error

    if not stat.S_ISREG(info.st_mode):
        raise IOError(f"{filepath} is not a regular file.")
    if max_size is not None and info.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")
    return info


def _fingerprint(info: os.stat_result) -> tuple:
    return info.st_ino, info.st_dev, info.st_size, info.st_mtime_ns


def check_unchanged(before: os.stat_result, after: os.stat_result, filepath: Path) -> None:
    """Raise IOError if `filepath` was replaced or edited between two stats."""
    if _fingerprint(before) != _fingerprint(after):
        raise IOError(f"{filepath} changed during processing; refusing to overwrite.")


def read_document(filepath: Path) -> str:
    """Read a document as UTF-8 with its line endings untouched.

    Raises:
        IOError: If the file cannot be opened.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    try:
        with open(filepath, encoding="utf-8", newline="") as handle:
            return handle.read()
    except (FileNotFoundError, PermissionError, IsADirectoryError) as error:
        raise IOError(f"Cannot access {filepath}: {error}") from error


def write_document(
    filepath: Path,
    content: str,
    expected_stat: os.stat_result,
    warn: Callable[[str], None] | None = None,
) -> None:
    """Replace `filepath` with `content` through a temporary sibling file.

    The document keeps its permission bits and, where the process may
    change it, its owner. Failing to keep the owner is reported through
    `warn` rather than raised.

    Raises:
        IOError: If the file changed since `expected_stat` was taken.
    """
    check_unchanged(expected_stat, stat_document(filepath), filepath)

    staged: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", newline="", dir=filepath.parent, delete=False
        ) as handle:
            staged = Path(handle.name)
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(staged, stat.S_IMODE(expected_stat.st_mode))
        if hasattr(os, "chown"):
            try:
                os.chown(staged, expected_stat.st_uid, expected_stat.st_gid)
            except PermissionError:
                if warn is not None:
                    warn(f"Warning: could not keep the owner of {filepath.name}")
        os.replace(staged, filepath)
    finally:
        if staged is not None:
            staged.unlink(missing_ok=True)
