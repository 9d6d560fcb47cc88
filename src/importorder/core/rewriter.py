"""Rebuild file content with sorted import blocks."""

import re
from typing import Collection, List, Optional, Sequence

from .classifier import DEFAULT_STDLIB_MODULES, sort_imports
from .extractor import find_import_blocks
from .types import ClassifiedImport, ImportCategory

LINE_TERMINATOR = re.compile(r"\r\n|\r|\n")


def split_lines(content: str) -> List[str]:
    """Split on line terminators only.

    Unlike ``str.splitlines`` this leaves form feeds, U+2028 and the other
    Unicode line boundaries inside their line.
    """
    lines = LINE_TERMINATOR.split(content)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _is_blank(line: str) -> bool:
    return not line.strip()


def _strip_blank_lines(lines: Sequence[str], leading: bool = True, trailing: bool = True) -> List[str]:
    """Drop blank lines from either end of a run of lines."""
    start, end = 0, len(lines)
    if leading:
        while start < end and _is_blank(lines[start]):
            start += 1
    if trailing:
        while end > start and _is_blank(lines[end - 1]):
            end -= 1
    return list(lines[start:end])


def render_block(classified: Sequence[ClassifiedImport]) -> str:
    """Render sorted imports, one per line, with a blank line between categories."""
    output: List[str] = []
    current: Optional[ImportCategory] = None
    for item in classified:
        if current is not None and item.category != current:
            output.append("\n")
        current = item.category
        output.append(item.line)
        output.append("\n")
    return "".join(output)


def rewrite_content(content: str, stdlib_modules: Collection[str] = DEFAULT_STDLIB_MODULES) -> str:
    """Return ``content`` with every import block sorted and re-spaced.

    Each block ends up with exactly one blank line before it (unless it opens
    the file) and is followed by two newlines. Everything outside the blocks
    keeps its order; only the blank lines around blocks are normalized.
    Content without imports is returned as is.
    """
    lines = split_lines(content)
    blocks = find_import_blocks(lines)
    if not blocks:
        return content

    output: List[str] = []
    cursor = 0
    for block in blocks:
        # After a block the separator is already written, so leading blanks go too.
        preceding = _strip_blank_lines(lines[cursor:block.start_line], leading=cursor > 0)
        if preceding:
            output.append("\n".join(preceding))
            output.append("\n\n")

        output.append(render_block(sort_imports(block.imports, stdlib_modules)))
        output.append("\n\n")

        cursor = block.end_line + 1

    remaining = _strip_blank_lines(lines[cursor:], trailing=False)
    if remaining:
        output.append("\n".join(remaining))
        if content.endswith(("\n", "\r")):
            output.append("\n")

    return "".join(output)
