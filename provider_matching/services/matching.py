"""Tag matching primitives shared by every category scorer."""

from __future__ import annotations

from typing import Any, FrozenSet, List, Optional

from provider_matching.synonyms import SynonymDomain, SynonymTables, get_synonym_tables


def normalize_tags(tags: Any) -> List[str]:
    """Lowercased, non-blank tags; anything that is not a collection of tags yields []."""
    if not tags or isinstance(tags, (str, bytes)):
        return []
    try:
        values = list(tags)
    except TypeError:
        return []
    lowered = []
    for tag in values:
        if not isinstance(tag, str):
            continue
        text = tag.strip().lower()
        if text:
            lowered.append(text)
    return lowered


def matches_synonyms(
    tags: Any,
    keyword: Optional[str],
    domain: SynonymDomain,
    tables: Optional[SynonymTables] = None,
) -> bool:
    """True when a tag contains, or is contained by, any expansion of ``keyword``.

    Containment runs both ways so "24 Hour Fitness" satisfies "gym" through the
    "24 hour" term, and a terse tag like "spa" satisfies the "day spa" term.
    """
    if not keyword:
        return False
    lowered = normalize_tags(tags)
    if not lowered:
        return False
    terms = (tables or get_synonym_tables()).lookup(domain, keyword)
    return any(term in tag or tag in term for term in terms if term for tag in lowered)


def tags_contain_any(tags: Any, terms: List[str]) -> bool:
    """One-directional variant: some tag equals or contains one of ``terms``."""
    lowered = normalize_tags(tags)
    return any(term in tag for term in terms if term for tag in lowered)


def contains_keyword(tags: Any, keyword: Optional[str]) -> bool:
    if not keyword:
        return False
    needle = keyword.strip().lower()
    if not needle:
        return False
    return any(needle in tag for tag in normalize_tags(tags))


def has_tag(tags: Any, value: Optional[str]) -> bool:
    """Verbatim tag equality, used where answers map one-to-one onto tags."""
    if not value:
        return False
    return value in tag_set(tags)


def has_tag_ignoring_case(tags: Any, value: Optional[str]) -> bool:
    if not value:
        return False
    return value.strip().lower() in normalize_tags(tags)


def tag_set(tags: Any) -> FrozenSet[str]:
    if not tags or isinstance(tags, (str, bytes)):
        return frozenset()
    try:
        return frozenset(tag for tag in tags if isinstance(tag, str))
    except TypeError:
        return frozenset()
