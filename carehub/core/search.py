"""Case-insensitive free-text matching used by list filters."""

from collections.abc import Iterable


def matches_term(term: str | None, *fields: str | Iterable[str] | None) -> bool:
    """Return True if ``term`` is empty or appears in any of ``fields``.

    A field may be a string, an iterable of strings (e.g. tags) or None.
    """
    if not term:
        return True

    needle = term.strip().lower()
    if not needle:
        return True

    for field in fields:
        if field is None:
            continue
        values = [field] if isinstance(field, str) else field
        if any(needle in value.lower() for value in values if value):
            return True
    return False
