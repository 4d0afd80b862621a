"""Leaf selection over dot-segmented account codes.

A synthetic account and its analytic children are frequently tagged with the
same report category. Summing both would double count, so only the codes that
are not a strict dot-prefix of another code in the same set are summed.

The stored ``level`` of an account is populated inconsistently by different
import formats, so the hierarchy is read from the code strings alone.
"""

from bisect import bisect_left
from typing import Any, Callable, Iterable, Sequence, TypeVar

T = TypeVar("T")

SEPARATOR = "."


def field_of(row: Any, name: str) -> Any:
    """Read a field from an ORM object, dataclass or plain dict row."""
    if isinstance(row, dict):
        return row.get(name)
    return getattr(row, name, None)


def code_of(row: Any) -> str:
    code = field_of(row, "code")
    return "" if code is None else str(code).strip()


def has_descendant(code: str, sorted_codes: Sequence[str]) -> bool:
    """Return True if any code in ``sorted_codes`` extends ``code`` by a segment.

    All codes starting with ``code + "."`` sort contiguously from the insertion
    point of that prefix, so a single bisect answers the question.
    """
    prefix = code + SEPARATOR
    index = bisect_left(sorted_codes, prefix)
    return index < len(sorted_codes) and sorted_codes[index].startswith(prefix)


def is_leaf_code(code: str, codes: Iterable[str]) -> bool:
    """Return True if ``code`` is not a strict dot-prefix of any of ``codes``."""
    return not has_descendant(code.strip(), sorted(c.strip() for c in codes))


def select_leaves(rows: Iterable[T], key: Callable[[T], str] = code_of) -> list[T]:
    """Return the rows whose code is not a strict dot-prefix of another row's code.

    Input order is preserved. Rows with duplicate codes are all kept, and codes
    without separators are leaves unless another code extends them.

    Args:
        rows: Objects or dicts exposing a ``code``
        key: Optional function extracting the code from a row

    Returns:
        Leaf rows
    """
    rows = list(rows)
    if len(rows) <= 1:
        return rows
    codes = [key(row).strip() for row in rows]
    sorted_codes = sorted(set(codes))
    return [row for row, code in zip(rows, codes) if not has_descendant(code, sorted_codes)]


def infer_level(code: str) -> int:
    """Infer hierarchy depth from the number of dot segments."""
    code = (code or "").strip()
    if not code:
        return 1
    return len([segment for segment in code.split(SEPARATOR) if segment]) or 1


def parent_code(code: str) -> str | None:
    """Return the code one segment up, or None for a root code."""
    code = code.strip()
    if SEPARATOR not in code:
        return None
    return code.rsplit(SEPARATOR, 1)[0]
