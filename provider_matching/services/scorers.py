"""Category scorers and the registry that maps categories onto them.

Every scorer reads the funnel answers it understands, sums weighted criterion
hits per provider and records whether a featured provider satisfied at least
one selected criterion. Ordering happens afterwards in ``ordering``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from provider_matching.models import AnswerMap, Category, Provider, ScoredProvider
from provider_matching.services.matching import (
    contains_keyword,
    has_tag,
    has_tag_ignoring_case,
    matches_synonyms,
    normalize_tags,
    tag_set,
    tags_contain_any,
)
from provider_matching.synonyms import SynonymDomain, SynonymTables

STAGER_TAGS = ("stager", "staging")
NO_PREFERENCE = frozenset({"none", "any"})

# (weight, hit) pairs for one provider
Hits = List[Tuple[int, bool]]


class ScoringResult(NamedTuple):
    scored: List[ScoredProvider]
    criteria_selected: bool


class FeaturedRule(str, Enum):
    # featured providers lead only when they satisfied a selected criterion
    MATCHED_CRITERIA = "matched-criteria"
    # featured providers win exact score ties regardless of relevance
    SCORE_TIES = "score-ties"


Scorer = Callable[[Sequence[Provider], AnswerMap, SynonymTables], ScoringResult]


@dataclass(frozen=True)
class ScoringStrategy:
    name: str
    score: Scorer
    featured_rule: FeaturedRule = FeaturedRule.MATCHED_CRITERIA


def _answer(answers: AnswerMap, *keys: str) -> Optional[str]:
    """First non-blank string answer among ``keys``."""
    for key in keys:
        value = answers.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _lowered_answer(answers: AnswerMap, *keys: str) -> Optional[str]:
    value = _answer(answers, *keys)
    return value.lower() if value else None


def _tally(provider: Provider, hits: Hits, criteria_selected: bool) -> ScoredProvider:
    if not criteria_selected:
        return ScoredProvider(provider=provider, score=1, featured_match=False)
    score = sum(weight for weight, hit in hits if hit)
    matched = any(hit for _, hit in hits)
    return ScoredProvider(provider=provider, score=score, featured_match=provider.is_featured and matched)


def score_health_wellness(
    providers: Sequence[Provider],
    answers: AnswerMap,
    tables: SynonymTables,
) -> ScoringResult:
    provider_type = _answer(answers, "type")
    goal = _answer(answers, "goal", "salon_kind")
    when = _answer(answers, "when")
    payment = _answer(answers, "payment")
    selected = any((provider_type, goal, when, payment))

    scored = []
    for provider in providers:
        hits: Hits = [
            (5, matches_synonyms(provider.tags, provider_type, SynonymDomain.HEALTH_WELLNESS, tables)),
            (3, matches_synonyms(provider.tags, goal, SynonymDomain.HEALTH_WELLNESS, tables)),
            (1, contains_keyword(provider.tags, when)),
            (1, contains_keyword(provider.tags, payment)),
        ]
        scored.append(_tally(provider, hits, selected))
    return ScoringResult(scored, selected)


def score_home_services(
    providers: Sequence[Provider],
    answers: AnswerMap,
    tables: SynonymTables,
) -> ScoringResult:
    service_type = _answer(answers, "type")
    goal = _answer(answers, "goal", "urgency")
    urgency = _answer(answers, "urgency")
    budget = _answer(answers, "budget")
    selected = any((service_type, goal, urgency, budget))

    scored = []
    for provider in providers:
        hits: Hits = [
            (5, matches_synonyms(provider.tags, service_type, SynonymDomain.HOME_SERVICES, tables)),
            (3, matches_synonyms(provider.tags, goal, SynonymDomain.HOME_SERVICES, tables)),
            (1, contains_keyword(provider.tags, urgency)),
            (1, contains_keyword(provider.tags, budget)),
        ]
        scored.append(_tally(provider, hits, selected))
    return ScoringResult(scored, selected)


def is_stager(provider: Provider) -> bool:
    return any(has_tag_ignoring_case(provider.tags, tag) for tag in STAGER_TAGS)


def score_real_estate(
    providers: Sequence[Provider],
    answers: AnswerMap,
    tables: SynonymTables,
) -> ScoringResult:
    """Staging specialists are dropped unless the user asked for staging."""
    need = _answer(answers, "need")
    property_type = _answer(answers, "property_type")
    secondary = [_answer(answers, key) for key in ("timeline", "move_when", "budget", "beds")]
    wants_staging = _lowered_answer(answers, "staging") == "yes"
    selected = any((need, property_type, wants_staging, *secondary))

    scored = []
    for provider in providers:
        stager = is_stager(provider)
        if stager and not wants_staging:
            continue
        hits: Hits = [
            (2, has_tag(provider.tags, need)),
            (2, has_tag(provider.tags, property_type)),
        ]
        hits.extend((1, has_tag(provider.tags, value)) for value in secondary)
        hits.append((1, wants_staging and stager))
        scored.append(_tally(provider, hits, selected))
    return ScoringResult(scored, selected)


def score_restaurants(
    providers: Sequence[Provider],
    answers: AnswerMap,
    tables: SynonymTables,
) -> ScoringResult:
    """Every restaurant starts at 1 so none drop out of the listing."""
    cuisine = _lowered_answer(answers, "cuisine")
    if cuisine in NO_PREFERENCE:
        cuisine = None
    occasion = _lowered_answer(answers, "occasion")
    price_range = _lowered_answer(answers, "price-range", "price")
    service = _lowered_answer(answers, "service")
    dietary = _lowered_answer(answers, "dietary")
    if dietary in NO_PREFERENCE:
        dietary = None
    selected = any((cuisine, occasion, price_range, service, dietary))

    price_terms = tables.lookup(SynonymDomain.PRICE_RANGE, price_range) if price_range else []
    dietary_terms = tables.lookup(SynonymDomain.DIETARY, dietary) if dietary else []

    scored = []
    for provider in providers:
        tags = normalize_tags(provider.tags)
        score = 1
        matched = False

        if cuisine:
            if cuisine in tags:
                score += 8
                matched = True
            elif matches_synonyms(tags, cuisine, SynonymDomain.CUISINE, tables):
                score += 6
                matched = True

        if occasion and contains_keyword(tags, occasion):
            score += 4
            matched = True

        if price_range:
            if price_range in tags:
                score += 4
                matched = True
            elif tags_contain_any(tags, price_terms):
                score += 3
                matched = True

        if service and contains_keyword(tags, service):
            score += 3
            matched = True

        if dietary:
            if dietary in tags:
                score += 3
                matched = True
            elif tags_contain_any(tags, dietary_terms):
                score += 2
                matched = True

        scored.append(ScoredProvider(provider=provider, score=score, featured_match=provider.is_featured and matched))
    return ScoringResult(scored, selected)


def score_generic(
    providers: Sequence[Provider],
    answers: AnswerMap,
    tables: SynonymTables,
) -> ScoringResult:
    """One point per tag that equals any answer value verbatim."""
    values = frozenset(value for value in answers.values() if isinstance(value, str) and value)
    selected = bool(values)

    scored = []
    for provider in providers:
        if not selected:
            scored.append(ScoredProvider(provider=provider, score=1))
            continue
        matches = len(tag_set(provider.tags) & values)
        scored.append(
            ScoredProvider(provider=provider, score=matches, featured_match=provider.is_featured and matches > 0)
        )
    return ScoringResult(scored, selected)


GENERIC = ScoringStrategy("generic", score_generic)

SCORERS: Dict[Category, ScoringStrategy] = {
    Category.HEALTH_WELLNESS: ScoringStrategy("health-wellness", score_health_wellness),
    Category.HOME_SERVICES: ScoringStrategy("home-services", score_home_services),
    Category.REAL_ESTATE: ScoringStrategy("real-estate", score_real_estate),
    Category.RESTAURANTS_CAFES: ScoringStrategy(
        "restaurants-cafes", score_restaurants, featured_rule=FeaturedRule.SCORE_TIES
    ),
    Category.PROFESSIONAL_SERVICES: GENERIC,
}


def strategy_for(category: Category | str) -> ScoringStrategy:
    """Registered strategy, or the generic one for anything unrecognised."""
    member = Category.parse(category)
    if member is None:
        return GENERIC
    return SCORERS.get(member, GENERIC)
