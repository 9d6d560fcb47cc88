# src/importorder/core/processor.py

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from .backup import create_backup
from .classifier import DEFAULT_STDLIB_MODULES
from .errors import BackupError, ProcessingError
from .logging import get_audit_logger, get_debug_logger
from .rewriter import rewrite_content
from .types import FileOutcome, FileStatus, RunSummary

audit_log = get_audit_logger()
debug_log = get_debug_logger()

DEFAULT_THREADS = 4


@dataclass
class ProcessOptions:
    """Per-file processing options, fixed for a whole run."""

    stdlib_modules: List[str] = field(default_factory=lambda: list(DEFAULT_STDLIB_MODULES))
    backup: bool = False
    backup_dir: Optional[Path] = None
    check: bool = False


def read_source(path: Path) -> str:
    """Read a whole file, keeping its line endings as they are."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_source(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def process_file(path: Path, options: Optional[ProcessOptions] = None) -> FileOutcome:
    """Sort the imports of a single file.

    The file is only written when the rewritten content differs from what is
    on disk, and never in check mode. A backup is taken right before writing
    when enabled.

    Raises:
        ProcessingError: If the file cannot be read, backed up or written.
    """
    options = options or ProcessOptions()
    path = Path(path)
    debug_log.debug(f"Processing: {path}")

    try:
        content = read_source(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ProcessingError(f"Failed to read {path}: {e}") from e

    new_content = rewrite_content(content, frozenset(options.stdlib_modules))
    if new_content == content:
        debug_log.debug(f"No changes needed: {path}")
        return FileOutcome(path=path, status=FileStatus.UNCHANGED)

    if options.check:
        debug_log.debug(f"Would update: {path}")
        return FileOutcome(path=path, status=FileStatus.UPDATED)

    backup_path = None
    if options.backup:
        try:
            backup_path = create_backup(path, options.backup_dir)
        except BackupError as e:
            raise ProcessingError(str(e)) from e

    try:
        write_source(path, new_content)
    except OSError as e:
        error_msg = f"Failed to write {path}: {e}"
        audit_log.error(error_msg)
        raise ProcessingError(error_msg) from e

    audit_log.info(f"Sorted imports in {path}")
    return FileOutcome(path=path, status=FileStatus.UPDATED, written=True, backup_path=backup_path)


def process_files(
    paths: Sequence[Path],
    options: Optional[ProcessOptions] = None,
    threads: int = DEFAULT_THREADS,
    on_outcome: Optional[Callable[[FileOutcome], None]] = None,
) -> RunSummary:
    """Process files in parallel and collect their outcomes.

    Workers share nothing; each returns a ``FileOutcome`` and the summary is
    built once all of them are done, in the order the paths were given. The
    first failure cancels the files not started yet and is re-raised.

    Args:
        paths: Files to process, already discovered.
        options: Processing options shared by every file.
        threads: Worker pool size.
        on_outcome: Called from the calling thread as each file completes.

    Raises:
        ProcessingError: If the pool size is invalid or any file fails.
    """
    if threads < 1:
        raise ProcessingError(f"Thread count must be at least 1, got {threads}")

    options = options or ProcessOptions()
    outcomes: Dict[Path, FileOutcome] = {}

    with ThreadPoolExecutor(max_workers=threads, thread_name_prefix="importorder") as executor:
        futures: Dict[Future, Path] = {executor.submit(process_file, path, options): path for path in paths}
        for future in as_completed(futures):
            try:
                outcome = future.result()
            except Exception:
                for pending in futures:
                    pending.cancel()
                raise
            outcomes[futures[future]] = outcome
            if on_outcome is not None:
                on_outcome(outcome)

    summary = RunSummary(outcomes=[outcomes[path] for path in paths if path in outcomes])
    debug_log.debug(
        f"Processed {len(summary.outcomes)} file(s), {len(summary.modified)} modified"
    )
    return summary
