"""Timestamped backup copies of files about to be rewritten."""

import shutil
import tempfile
import time
from pathlib import Path
from typing import Optional

from .errors import BackupError
from .logging import get_audit_logger, get_debug_logger

audit_log = get_audit_logger()
debug_log = get_debug_logger()


def backup_path_for(path: Path, backup_dir: Optional[Path] = None, timestamp: Optional[int] = None) -> Path:
    """Build the ``<name>.<unix-timestamp>.bak`` path for ``path``.

    The file's own directory is mirrored below the backup directory, so files
    sharing a name (every ``__init__.py``) never share a backup path.
    """
    directory = Path(backup_dir) if backup_dir else Path(tempfile.gettempdir())
    stamp = int(time.time()) if timestamp is None else timestamp
    source_dir = Path(path).resolve().parent
    mirrored = source_dir.relative_to(source_dir.anchor)
    return directory / mirrored / f"{Path(path).name}.{stamp}.bak"


def create_backup(path: Path, backup_dir: Optional[Path] = None, timestamp: Optional[int] = None) -> Path:
    """Copy a file into the backup directory before it is overwritten.

    Backups are never cleaned up by importorder.
    """
    dest = backup_path_for(path, backup_dir, timestamp)
    debug_log.debug(f"Backing up {path} to {dest}")

    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(path, dest)
    except OSError as e:
        error_msg = f"Failed to back up {path} to {dest}: {e}"
        debug_log.error(error_msg)
        audit_log.error(error_msg)
        raise BackupError(error_msg) from e

    audit_log.info(f"Backed up {path} to {dest}")
    return dest
