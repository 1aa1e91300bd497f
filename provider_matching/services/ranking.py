"""Entry point that ranks one category's providers against funnel answers."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

from provider_matching.models import AnswerMap, Category, Provider, ScoredProvider, category_key
from provider_matching.services.ordering import order_restaurants, order_with_featured_match
from provider_matching.services.scorers import FeaturedRule, strategy_for
from provider_matching.synonyms import SynonymTables, get_synonym_tables

logger = logging.getLogger(__name__)


def _providers_for(
    category: Category | str,
    providers_by_category: Optional[Mapping[Any, Sequence[Provider]]],
) -> List[Provider]:
    if not providers_by_category:
        return []
    wanted = category_key(category)
    for key, providers in providers_by_category.items():
        if category_key(key) == wanted:
            return list(providers or [])
    return []


def rank_scored(
    category: Category | str,
    answers: Optional[AnswerMap],
    providers_by_category: Optional[Mapping[Any, Sequence[Provider]]],
    tables: Optional[SynonymTables] = None,
) -> List[ScoredProvider]:
    """Score and order providers, keeping the scores alongside each provider."""
    providers = _providers_for(category, providers_by_category)
    strategy = strategy_for(category)
    result = strategy.score(providers, answers or {}, tables or get_synonym_tables())

    if strategy.featured_rule is FeaturedRule.SCORE_TIES:
        ordered = order_restaurants(result.scored)
    else:
        ordered = order_with_featured_match(result.scored, result.criteria_selected)

    logger.debug(
        "providers_ranked",
        extra={
            "category": category_key(category),
            "scorer": strategy.name,
            "candidates": len(providers),
            "returned": len(ordered),
            "criteria_selected": result.criteria_selected,
        },
    )
    return ordered


def score_providers(
    category: Category | str,
    answers: Optional[AnswerMap],
    providers_by_category: Optional[Mapping[Any, Sequence[Provider]]],
    tables: Optional[SynonymTables] = None,
) -> List[Provider]:
    """Return the category's providers, best match first.

    Unknown categories fall back to generic tag matching and a missing category
    yields an empty list. Inputs are never mutated.
    """
    return [item.provider for item in rank_scored(category, answers, providers_by_category, tables)]
