# src/importorder/core/types.py

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import List, Optional


class ImportCategory(IntEnum):
    """Import categories, in the order they are emitted."""
    FUTURE = 0          # from __future__ import ...
    STANDARD_LIB = 1    # names on the standard-library list
    THIRD_PARTY = 2     # everything else
    LOCAL_LIB = 3       # relative imports

class FileStatus(Enum):
    """Result of running one file through the rewriter."""
    UPDATED = "updated"
    UNCHANGED = "unchanged"

@dataclass
class ImportBlock:
    """A run of import lines in a file."""
    imports: List[str]
    start_line: int
    end_line: int

@dataclass(frozen=True)
class ClassifiedImport:
    """An import line tagged with its category."""
    category: ImportCategory
    line: str

@dataclass
class FileOutcome:
    """What happened to one file."""
    path: Path
    status: FileStatus
    written: bool = False
    backup_path: Optional[Path] = None

@dataclass
class RunSummary:
    """Outcomes of a whole run."""
    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def modified(self) -> List[Path]:
        """Paths whose content changed (or would change in check mode)."""
        return [o.path for o in self.outcomes if o.status is FileStatus.UPDATED]

    @property
    def unchanged(self) -> List[Path]:
        return [o.path for o in self.outcomes if o.status is FileStatus.UNCHANGED]
