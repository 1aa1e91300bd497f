"""Featured boost resolution and the final deterministic ordering."""

from __future__ import annotations

import math
import unicodedata
from typing import Iterable, List, Tuple

from provider_matching.models import Provider, ScoredProvider


def rating_of(provider: Provider) -> float:
    rating = provider.rating
    if rating is None or isinstance(rating, bool):
        return 0.0
    try:
        value = float(rating)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def name_sort_key(name: str) -> Tuple[str, str, str]:
    """Collation key close to a locale-aware compare, independent of the process locale.

    Accents and case are ignored first, then case, and the raw name settles the rest.
    """
    text = name if isinstance(name, str) else str(name)
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), text.casefold(), text)


def _tail_key(item: ScoredProvider) -> Tuple[float, float, Tuple[str, str, str]]:
    return (-item.score, -rating_of(item.provider), name_sort_key(item.provider.name))


def order_with_featured_match(
    scored: Iterable[ScoredProvider],
    criteria_selected: bool,
) -> List[ScoredProvider]:
    """Order for every category except restaurants.

    Featured providers that satisfied a selected criterion lead. Without any
    selected criteria every featured provider leads instead. A featured
    provider that matched nothing competes on score alone.
    """

    def key(item: ScoredProvider):
        boosted = item.featured_match and criteria_selected
        fallback = item.provider.is_featured and not criteria_selected
        return (not boosted, not fallback) + _tail_key(item)

    return sorted(scored, key=key)


def order_restaurants(scored: Iterable[ScoredProvider]) -> List[ScoredProvider]:
    """Score first; featured only breaks exact score ties, relevant or not."""

    def key(item: ScoredProvider):
        return (-item.score, not item.provider.is_featured, -rating_of(item.provider),
                name_sort_key(item.provider.name))

    return sorted(scored, key=key)
