"""Domain records consumed and produced by the ranking engine."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional

from provider_matching.errors import ProviderRecordError

AnswerMap = Mapping[str, str]

_FEATURED_KEYS = ("isFeatured", "is_featured", "isMember")


class Category(str, Enum):
    REAL_ESTATE = "real-estate"
    HOME_SERVICES = "home-services"
    HEALTH_WELLNESS = "health-wellness"
    RESTAURANTS_CAFES = "restaurants-cafes"
    PROFESSIONAL_SERVICES = "professional-services"

    @classmethod
    def parse(cls, value: Category | str) -> Optional[Category]:
        """Return the matching member, or None for keys outside the enumeration."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


def category_key(value: Category | str) -> str:
    """Plain string key for a category given as a member or a raw string."""
    if isinstance(value, Category):
        return value.value
    return str(value).strip().lower()


@dataclass(frozen=True)
class Provider:
    id: str
    name: str
    category: str
    tags: FrozenSet[str] = field(default_factory=frozenset)
    rating: Optional[float] = None
    is_featured: bool = False

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Provider:
        """Build a provider from a data-layer row, tolerating sloppy optional fields."""
        try:
            provider_id = record["id"]
            name = record["name"]
        except KeyError as exc:
            raise ProviderRecordError(f"Provider record missing {exc.args[0]!r}: {dict(record)}") from exc
        if provider_id is None or name is None:
            raise ProviderRecordError(f"Provider record has empty id or name: {dict(record)}")

        category = record.get("category_key") or record.get("category") or ""
        return cls(
            id=str(provider_id),
            name=str(name),
            category=category_key(category),
            tags=_coerce_tags(record.get("tags")),
            rating=_coerce_rating(record.get("rating")),
            is_featured=any(bool(record.get(key)) for key in _FEATURED_KEYS),
        )


@dataclass(frozen=True)
class ScoredProvider:
    provider: Provider
    score: int
    featured_match: bool = False


def _coerce_tags(raw: Any) -> FrozenSet[str]:
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        raw = raw.split(",")
    try:
        values = list(raw)
    except TypeError:
        return frozenset()
    return frozenset(str(tag).strip() for tag in values if tag is not None and str(tag).strip())


def _coerce_rating(raw: Any) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        rating = float(raw)
    except (TypeError, ValueError):
        return None
    return rating if math.isfinite(rating) else None


def group_by_category(providers: Iterable[Provider]) -> Dict[str, List[Provider]]:
    """Bucket providers by category key, keeping input order within each bucket."""
    grouped: Dict[str, List[Provider]] = {category.value: [] for category in Category}
    for provider in providers:
        grouped.setdefault(category_key(provider.category), []).append(provider)
    return grouped
