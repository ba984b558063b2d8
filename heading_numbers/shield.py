"""Protect fenced code blocks from heading rewrites."""

from __future__ import annotations

import re

from .constants import CODE_FENCE_PATTERN, PLACEHOLDER_PATTERN, PLACEHOLDER_TEMPLATE
from .models import FenceContext, FenceState, ShieldResult


def line_body(line: str) -> str:
    """Return `line` without its trailing line terminator."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


def _try_open_fence(ctx: FenceContext, line: str, line_number: int) -> bool:
    """Detect the start of a fenced code block.

    Args:
        ctx: Fence context to update when a fence opens.
        line: Line body, without terminator.
        line_number: Zero-based index of the line.

    Returns:
        bool: True when the line opens a fence and the context is updated.

    Examples:
        _try_open_fence(FenceContext(), "```python", 0)  # True
    """
    if ctx.state is not FenceState.NORMAL:
        return False

    fence_match = CODE_FENCE_PATTERN.match(line)
    if not fence_match:
        return False

    fence_sequence = fence_match.group("fence")
    # Backtick fences may not carry backticks in their info string
    if fence_sequence[0] == "`" and "`" in fence_match.group("info"):
        return False

    ctx.state = FenceState.IN_FENCED_CODE
    ctx.fence_char = fence_sequence[0]
    ctx.fence_length = len(fence_sequence)
    ctx.start_line = line_number
    return True


def _try_close_fence(ctx: FenceContext, line: str) -> bool:
    """Attempt to close the active fenced code block.

    A closing fence repeats the opening character at least as many times,
    indented by at most three spaces, with only whitespace after it.

    Args:
        ctx: Fence context describing the open block.
        line: Line body, without terminator.

    Returns:
        bool: True when the line closes the fence; otherwise False.
    """
    if ctx.state is not FenceState.IN_FENCED_CODE or ctx.fence_char is None:
        return False

    stripped_line = line.lstrip(" ")
    if len(line) - len(stripped_line) > 3:
        return False
    if not stripped_line.startswith(ctx.fence_char):
        return False

    fence_run_length = len(stripped_line) - len(stripped_line.lstrip(ctx.fence_char))
    if fence_run_length < ctx.fence_length:
        return False
    if stripped_line[fence_run_length:].strip():
        return False

    ctx.state = FenceState.NORMAL
    ctx.fence_char = None
    ctx.fence_length = 0
    ctx.start_line = None
    return True


def protect(text: str) -> ShieldResult:
    """Swap every fenced code block for a numbered placeholder.

    Each block, from its opening fence line through its closing fence line,
    is replaced by ``<<<CODE_BLOCK_PLACEHOLDER_<i>_>>>`` where ``i`` counts
    blocks in order of discovery. The line terminator after the closing fence
    stays in the text. A fence that is never closed runs to the end of the
    document.

    Args:
        text: Markdown document.

    Returns:
        ShieldResult: Shielded text and the original blocks.

    Examples:
        result = protect("# Title\\n```\\n# not a heading\\n```\\n")
        result.text  # "# Title\\n<<<CODE_BLOCK_PLACEHOLDER_0_>>>\\n"
    """
    lines = text.splitlines(keepends=True)
    blocks: list[str] = []
    output: list[str] = []
    ctx = FenceContext()

    def _emit_block(start: int, end: int) -> None:
        block = "".join(lines[start:end])
        body = line_body(block)
        blocks.append(body)
        output.append(PLACEHOLDER_TEMPLATE.format(index=len(blocks) - 1))
        output.append(block[len(body) :])

    def _capture_literal(match: re.Match[str]) -> str:
        blocks.append(match.group(0))
        return PLACEHOLDER_TEMPLATE.format(index=len(blocks) - 1)

    for line_number, line in enumerate(lines):
        body = line_body(line)

        if ctx.state is FenceState.IN_FENCED_CODE:
            start_line = ctx.start_line
            if _try_close_fence(ctx, body):
                _emit_block(start_line, line_number + 1)
            continue

        if _try_open_fence(ctx, body, line_number):
            continue

        # Literal placeholder text is captured too so restore() gives it back unchanged
        output.append(PLACEHOLDER_PATTERN.sub(_capture_literal, line))

    if ctx.state is FenceState.IN_FENCED_CODE and ctx.start_line is not None:
        _emit_block(ctx.start_line, len(lines))

    return ShieldResult(text="".join(output), blocks=blocks)


def restore(text: str, blocks: list[str]) -> str:
    """Put the original code blocks back in place of their placeholders.

    Placeholders whose index has no captured block are removed.

    Args:
        text: Shielded text, possibly rewritten.
        blocks: Blocks captured by `protect`.

    Returns:
        str: Text with every placeholder replaced.
    """

    def _replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        return blocks[index] if index < len(blocks) else ""

    return PLACEHOLDER_PATTERN.sub(_replace, text)
