from typing import Iterable, Optional, TypeVar

T = TypeVar("T")


def search_matches(q: Optional[str], *fields: Optional[str]) -> bool:
    """Case-insensitive substring search across the given fields; a blank query matches."""
    s = (q or "").strip().lower()
    if not s:
        return True
    return any(f and s in f.lower() for f in fields)


def equals_or_any(value, wanted) -> bool:
    # A missing filter ("All" in the list pages) matches every row
    return wanted is None or value == wanted


def first(rows: Iterable[T], predicate) -> Optional[T]:
    return next((r for r in rows if predicate(r)), None)
