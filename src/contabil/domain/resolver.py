"""Category label resolution.

Reads are permissive: any known alias, in any case, with or without accents
(and even with Latin-1 mojibake from a mis-decoded export) resolves to its
canonical category. Writes are strict: only exact canonical names are
accepted, so persisted mappings never accumulate alias variants.
"""

import unicodedata
from typing import Any, Optional

from contabil.domain.catalog import CATEGORY_ALIASES, CanonicalCategory
from contabil.domain.errors import InvalidCategoryError

# Spreadsheet broken-reference markers exported in place of a category.
REF_SENTINELS = frozenset({"#REF!", "#REF"})


def is_ref_sentinel(raw: Any) -> bool:
    """Return True if a raw category cell is a broken spreadsheet reference."""
    return isinstance(raw, str) and raw.strip().upper() in REF_SENTINELS


def repair_mojibake(text: str) -> str:
    """Undo UTF-8 text that was decoded as Latin-1 (e.g. "DeduÃ§Ãµes").

    Text that does not round-trip is returned unchanged.
    """
    try:
        repaired = text.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return text
    return repaired


def normalize_label(text: str) -> str:
    """Normalize a label for alias lookup.

    Applies mojibake repair, NFD decomposition with diacritic stripping,
    case folding, trimming and whitespace collapsing.
    """
    text = repair_mojibake(text)
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(stripped.casefold().split())


def _build_lookup() -> dict[str, CanonicalCategory]:
    lookup = {normalize_label(category.value): category for category in CanonicalCategory}
    lookup.update(CATEGORY_ALIASES)
    return lookup


_LOOKUP = _build_lookup()


def resolve(raw: Any) -> Optional[CanonicalCategory]:
    """Resolve a raw category label to its canonical category.

    Never raises. Blank values, non-strings, ``#REF`` sentinels and unknown
    labels all resolve to None (unmapped).
    """
    if isinstance(raw, CanonicalCategory):
        return raw
    if not isinstance(raw, str) or not raw.strip() or is_ref_sentinel(raw):
        return None
    return _LOOKUP.get(normalize_label(raw))


def is_valid_canonical(name: Any) -> bool:
    """Return True only for an exact canonical category name."""
    if isinstance(name, CanonicalCategory):
        return True
    if not isinstance(name, str):
        return False
    try:
        CanonicalCategory(name.strip())
    except ValueError:
        return False
    return True


def require_canonical(name: Any) -> CanonicalCategory:
    """Return the canonical category for an exact name.

    Raises:
        InvalidCategoryError: If the name is an alias or unknown
    """
    if not is_valid_canonical(name):
        raise InvalidCategoryError(str(name))
    if isinstance(name, CanonicalCategory):
        return name
    return CanonicalCategory(name.strip())


def aliases_of(category: CanonicalCategory) -> list[str]:
    """Return every normalized alias that resolves to a category."""
    return sorted(key for key, value in _LOOKUP.items() if value == category)
