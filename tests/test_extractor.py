"""Tests for import block detection."""

import pytest

from importorder.core.extractor import find_import_blocks, is_import_line


@pytest.mark.parametrize(
    "line",
    [
        "import os",
        "import os.path",
        "from os import path",
        "from . import sibling",
        "    import json",
        "from __future__ import annotations",
    ],
)
def test_import_lines_match(line):
    """Test that import statements are recognized."""
    assert is_import_line(line)


@pytest.mark.parametrize(
    "line",
    [
        "important = True",
        "imports = []",
        "from_here = 1",
        "import",
        "from os",
        "# import os",
        "print('import os')",
        "",
    ],
)
def test_non_import_lines_do_not_match(line):
    """Test that lookalike lines are not treated as imports."""
    assert not is_import_line(line)


def test_no_imports_gives_no_blocks():
    """Test a file without imports."""
    assert find_import_blocks(["x = 1", "", "print(x)"]) == []
    assert find_import_blocks([]) == []


def test_single_block_records_span():
    """Test a single run of imports."""
    lines = ["import sys", "from __future__ import annotations", "import numpy", "", "print(1)"]
    blocks = find_import_blocks(lines)

    assert len(blocks) == 1
    assert blocks[0].imports == lines[:3]
    assert blocks[0].start_line == 0
    assert blocks[0].end_line == 2


def test_blank_lines_stay_inside_block():
    """Test that blank lines between imports do not split a block."""
    lines = ["import os", "", "", "", "import sys", "", "x = 1"]
    blocks = find_import_blocks(lines)

    assert len(blocks) == 1
    assert blocks[0].imports == ["import os", "import sys"]
    assert blocks[0].start_line == 0
    # Trailing blank lines are not part of the span
    assert blocks[0].end_line == 4


def test_non_import_line_splits_blocks():
    """Test that any other line closes the open block."""
    lines = ["import os", "# comment", "import sys"]
    blocks = find_import_blocks(lines)

    assert [(b.start_line, b.end_line) for b in blocks] == [(0, 0), (2, 2)]
    assert [b.imports for b in blocks] == [["import os"], ["import sys"]]


def test_imports_are_trimmed():
    """Test that recorded imports are stripped of surrounding whitespace."""
    blocks = find_import_blocks(["def f():", "    import os  ", "    return os"])

    assert len(blocks) == 1
    assert blocks[0].imports == ["import os"]
    assert blocks[0].start_line == blocks[0].end_line == 1


def test_block_open_at_end_of_file_is_closed():
    """Test that a block reaching the end of the input is returned."""
    blocks = find_import_blocks(["x = 1", "import os", "import re"])

    assert len(blocks) == 1
    assert blocks[0].start_line == 1
    assert blocks[0].end_line == 2


def test_leading_blank_lines_do_not_open_block():
    """Test that blank lines only matter inside an open block."""
    blocks = find_import_blocks(["", "", "import os"])

    assert blocks[0].start_line == 2
