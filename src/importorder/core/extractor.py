"""Locate runs of import statements in a file."""

import re
from typing import List, Optional, Sequence

from .types import ImportBlock

IMPORT_PATTERN = re.compile(r"^(from\s+\S+\s+import\s+\S+|import\s+\S+)")


def is_import_line(line: str) -> bool:
    """Check whether a line looks like an ``import`` or ``from ... import`` statement."""
    return IMPORT_PATTERN.match(line.strip()) is not None


def find_import_blocks(lines: Sequence[str]) -> List[ImportBlock]:
    """Group consecutive import lines into blocks.

    Blank lines between imports stay inside the block's span but are not
    recorded in its import list. Any other line closes the open block.

    Args:
        lines: The file's lines, without line terminators.

    Returns:
        Blocks in file order, with 0-based start and end line indices.
    """
    blocks: List[ImportBlock] = []
    current: Optional[ImportBlock] = None

    for index, line in enumerate(lines):
        trimmed = line.strip()
        if IMPORT_PATTERN.match(trimmed):
            if current is None:
                current = ImportBlock(imports=[], start_line=index, end_line=index)
            current.imports.append(trimmed)
            current.end_line = index
        elif not trimmed and current is not None:
            continue
        elif current is not None:
            blocks.append(current)
            current = None

    if current is not None:
        blocks.append(current)

    return blocks
