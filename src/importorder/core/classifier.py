"""Classify import lines and put them in order."""

from typing import Collection, Iterable, List, Tuple

from .types import ClassifiedImport, ImportCategory

# Static allow-list. Anything missing here is classified as third party.
DEFAULT_STDLIB_MODULES: Tuple[str, ...] = (
    "os",
    "sys",
    "time",
    "datetime",
    "collections",
    "random",
    "math",
    "json",
    "re",
    "pathlib",
    "typing",
)

FUTURE_MARKER = "__future__"


def module_root(line: str) -> str:
    """Return the top-level package named by an import line.

    ``from a.b import c`` and ``import a.b`` both give ``a``. Lines with no
    module token give an empty string.
    """
    tokens = line.split()
    if len(tokens) < 2:
        return ""
    return tokens[1].split(".")[0]


def determine_category(
    line: str, stdlib_modules: Collection[str] = DEFAULT_STDLIB_MODULES
) -> ImportCategory:
    """Pick the category of a single import line."""
    if FUTURE_MARKER in line:
        return ImportCategory.FUTURE

    if line.startswith("from ."):
        return ImportCategory.LOCAL_LIB

    if module_root(line) in stdlib_modules:
        return ImportCategory.STANDARD_LIB

    return ImportCategory.THIRD_PARTY


def sort_key(item: ClassifiedImport) -> Tuple[int, int, str]:
    # Plain imports go before from-imports within a category.
    keyword_rank = 0 if item.line.startswith("import") else 1
    return (item.category, keyword_rank, item.line.lower())


def sort_imports(
    imports: Iterable[str], stdlib_modules: Iterable[str] = DEFAULT_STDLIB_MODULES
) -> List[ClassifiedImport]:
    """Classify import lines and sort them by category, keyword and name.

    The lines themselves are returned untouched; only their order changes.
    """
    known = frozenset(stdlib_modules)
    classified = [
        ClassifiedImport(category=determine_category(line, known), line=line)
        for line in imports
    ]
    return sorted(classified, key=sort_key)
