"""
Target file discovery.

Resolves the path given on the command line into the full list of files to
process before any of them is touched:
- Only files with the target extension are kept
- Virtual-environment directories are pruned wherever they appear
- Paths matched by .gitignore rules (root, nested, .git/info/exclude) are skipped
"""

import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from pathspec import PathSpec

from .errors import DiscoveryError
from .logging import get_debug_logger

debug_log = get_debug_logger()

DEFAULT_ENV_DIRS: Tuple[str, ...] = (
    "venv",
    ".venv",
    "env",
    ".env",
    "__pypackages__",
    "envs",
    ".virtualenvs",
)

ALWAYS_SKIPPED_DIRS = frozenset({".git"})


def _last_match(spec: Optional[PathSpec], rel_path: str) -> Optional[bool]:
    """Return whether the last pattern matching ``rel_path`` excludes it.

    None means no pattern in ``spec`` matched.
    """
    if spec is None:
        return None

    decision = None
    for pattern in spec.patterns:
        if pattern.include is not None and pattern.match_file(rel_path) is not None:
            decision = pattern.include
    return decision


class GitIgnoreMatcher:
    """
    Checks paths against the .gitignore files below a root directory.

    Each .gitignore applies to its own directory and everything beneath it,
    with patterns matched relative to that directory. Specs are loaded lazily
    and cached per directory.
    """

    def __init__(self, root: Path):
        self.root = Path(root).resolve()
        self._specs: Dict[str, Optional[PathSpec]] = {}
        self._load_root_ignores()

    def _load_root_ignores(self) -> None:
        patterns: List[str] = []

        exclude_path = self.root / ".git" / "info" / "exclude"
        if exclude_path.is_file():
            patterns.extend(self._read_gitignore_file(exclude_path))

        root_gitignore = self.root / ".gitignore"
        if root_gitignore.is_file():
            patterns.extend(self._read_gitignore_file(root_gitignore))

        self._specs[""] = PathSpec.from_lines("gitwildmatch", patterns) if patterns else None

    def _read_gitignore_file(self, path: Path) -> List[str]:
        """Read the non-empty, non-comment patterns of an ignore file."""
        try:
            content = path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            debug_log.warning(f"Failed to read {path}: {e}")
            return []

        patterns = []
        for line in content.splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                patterns.append(line)
        return patterns

    def _get_spec_for_dir(self, rel_dir: str) -> Optional[PathSpec]:
        if rel_dir in self._specs:
            return self._specs[rel_dir]

        gitignore_path = self.root / rel_dir / ".gitignore"
        spec = None
        if gitignore_path.is_file():
            patterns = self._read_gitignore_file(gitignore_path)
            if patterns:
                spec = PathSpec.from_lines("gitwildmatch", patterns)

        self._specs[rel_dir] = spec
        return spec

    @property
    def has_rules(self) -> bool:
        """Whether the root carries any ignore rules of its own."""
        return self._specs.get("") is not None

    def is_ignored(self, rel_path: str) -> bool:
        """Check a POSIX path relative to the root against all applicable rules."""
        rel_path = rel_path.strip("/") + ("/" if rel_path.endswith("/") else "")
        parts = rel_path.rstrip("/").split("/")

        ignored = _last_match(self._specs.get(""), rel_path)

        # Deeper .gitignore files see the remainder of the path and override
        # shallower ones, negations included.
        for i in range(len(parts) - 1):
            rel_dir = "/".join(parts[: i + 1])
            decision = _last_match(self._get_spec_for_dir(rel_dir), rel_path[len(rel_dir) + 1:])
            if decision is not None:
                ignored = decision

        return bool(ignored)

    def is_dir_ignored(self, rel_dir: str) -> bool:
        """Check a directory, matching both directory-only and plain patterns."""
        return self.is_ignored(rel_dir + "/") or self.is_ignored(rel_dir)


def has_extension(path: Path, extension: str) -> bool:
    """Check a file's suffix against the target extension (with or without the dot)."""
    wanted = extension if extension.startswith(".") else f".{extension}"
    return path.suffix == wanted


def collect_files(
    path: Path,
    extension: str = ".py",
    skip_env_dirs: bool = True,
    respect_gitignore: bool = True,
    env_dirs: Iterable[str] = DEFAULT_ENV_DIRS,
) -> List[Path]:
    """Resolve a file or directory into the sorted list of files to process.

    A single file is only checked against the extension and the .gitignore
    of its own directory; the virtual-environment filter applies to walks.

    Args:
        path: File or directory given by the user.
        extension: Target file extension, e.g. ``.py``.
        skip_env_dirs: Prune directories named in ``env_dirs``.
        respect_gitignore: Skip paths matched by .gitignore rules.
        env_dirs: Virtual-environment directory names.

    Returns:
        Matching file paths. Empty when a single file does not qualify.

    Raises:
        DiscoveryError: If the path does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise DiscoveryError(f"Path does not exist: {path}")

    env_dirs = tuple(env_dirs) if skip_env_dirs else ()

    if path.is_file():
        if not has_extension(path, extension):
            debug_log.debug(f"Skipping {path}: extension is not {extension}")
            return []
        if respect_gitignore and GitIgnoreMatcher(path.parent).is_ignored(path.name):
            debug_log.debug(f"Skipping {path}: ignored by .gitignore")
            return []
        return [path]

    matcher = GitIgnoreMatcher(path) if respect_gitignore else None
    files: List[Path] = []

    for dirpath, dirnames, filenames in os.walk(path):
        current = Path(dirpath)
        rel_dir = current.relative_to(path).as_posix()
        prefix = "" if rel_dir == "." else f"{rel_dir}/"

        kept_dirs = []
        for name in sorted(dirnames):
            if name in ALWAYS_SKIPPED_DIRS or name in env_dirs:
                debug_log.debug(f"Pruning {current / name}")
                continue
            if matcher is not None and matcher.is_dir_ignored(prefix + name):
                debug_log.debug(f"Pruning {current / name}: ignored by .gitignore")
                continue
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for name in filenames:
            file_path = current / name
            if not has_extension(file_path, extension):
                continue
            if matcher is not None and matcher.is_ignored(prefix + name):
                debug_log.debug(f"Skipping {file_path}: ignored by .gitignore")
                continue
            files.append(file_path)

    files.sort()
    debug_log.debug(f"Discovered {len(files)} file(s) under {path}")
    return files
