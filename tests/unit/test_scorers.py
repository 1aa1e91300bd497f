from provider_matching.models import Category, Provider
from provider_matching.services.scorers import (
    GENERIC,
    SCORERS,
    FeaturedRule,
    score_generic,
    score_health_wellness,
    score_home_services,
    score_real_estate,
    score_restaurants,
    strategy_for,
)
from provider_matching.synonyms import get_synonym_tables


def _provider(name, tags=(), rating=None, featured=False, category="health-wellness"):
    return Provider(
        id=name.lower(),
        name=name,
        category=category,
        tags=frozenset(tags),
        rating=rating,
        is_featured=featured,
    )


def _scores(result):
    return {item.provider.name: item.score for item in result.scored}


def test_health_weights():
    tables = get_synonym_tables()
    providers = [
        _provider("Gym", ["24 Hour Fitness", "evenings", "accepts insurance"]),
        _provider("Salon", ["Hair Salon"]),
        _provider("Dentist", ["dds"]),
    ]
    answers = {"type": "gym", "salon_kind": "salon", "when": "Evenings", "payment": "insurance"}
    result = score_health_wellness(providers, answers, tables)
    assert result.criteria_selected is True
    assert _scores(result) == {"Gym": 5 + 1 + 1, "Salon": 3, "Dentist": 0}


def test_health_goal_takes_precedence_over_salon_kind():
    tables = get_synonym_tables()
    providers = [_provider("Spa", ["day spa"]), _provider("Salon", ["salon"])]
    result = score_health_wellness(providers, {"goal": "spa", "salon_kind": "salon"}, tables)
    assert _scores(result) == {"Spa": 3, "Salon": 0}


def test_no_answers_gives_every_provider_one_point():
    tables = get_synonym_tables()
    providers = [_provider("A", ["gym"]), _provider("B")]
    for scorer in (score_health_wellness, score_home_services, score_real_estate, score_generic):
        result = scorer(providers, {}, tables)
        assert result.criteria_selected is False
        assert [item.score for item in result.scored] == [1, 1]
        assert not any(item.featured_match for item in result.scored)


def test_unknown_answer_keys_are_ignored():
    tables = get_synonym_tables()
    providers = [_provider("A", ["gym"])]
    result = score_health_wellness(providers, {"favourite_colour": "gym"}, tables)
    assert result.criteria_selected is False
    assert _scores(result) == {"A": 1}


def test_home_services_urgency_counts_as_goal_and_keyword():
    tables = get_synonym_tables()
    providers = [
        _provider("Pipes", ["Licensed Plumber", "emergency service"], category="home-services"),
        _provider("Sun", ["solar panels", "under-1k"], category="home-services", featured=True),
    ]
    answers = {"type": "plumbing", "urgency": "emergency", "budget": "under-1k"}
    result = score_home_services(providers, answers, tables)
    assert _scores(result) == {"Pipes": 5 + 3 + 1, "Sun": 1}
    sun = next(item for item in result.scored if item.provider.name == "Sun")
    assert sun.featured_match is True


def test_real_estate_excludes_stagers_unless_requested():
    tables = get_synonym_tables()
    providers = [
        _provider("Agent", ["buy", "condo", "0-3"], category="real-estate"),
        _provider("Stage Co", ["staging"], category="real-estate"),
        _provider("Stager Pro", ["Stager", "sell"], category="real-estate"),
    ]
    answers = {"need": "buy", "property_type": "condo", "timeline": "0-3"}
    result = score_real_estate(providers, answers, tables)
    assert _scores(result) == {"Agent": 2 + 2 + 1}

    result = score_real_estate(providers, {**answers, "staging": "yes"}, tables)
    assert _scores(result) == {"Agent": 5, "Stage Co": 1, "Stager Pro": 1}


def test_real_estate_uses_exact_equality():
    tables = get_synonym_tables()
    providers = [_provider("Agent", ["Buy", "buyers"], category="real-estate")]
    result = score_real_estate(providers, {"need": "buy", "beds": "3"}, tables)
    assert _scores(result) == {"Agent": 0}


def test_restaurant_weights():
    tables = get_synonym_tables()
    providers = [
        _provider("Exact", ["Mexican", "date-night", "budget", "takeout", "vegan"], category="restaurants-cafes"),
        _provider("Synonym", ["Tacos", "$", "plant-based options"], category="restaurants-cafes"),
        _provider("Nothing", ["bakery"], category="restaurants-cafes"),
    ]
    answers = {
        "cuisine": "Mexican",
        "occasion": "date-night",
        "price-range": "budget",
        "service": "takeout",
        "dietary": "vegan",
    }
    result = score_restaurants(providers, answers, tables)
    assert _scores(result) == {
        "Exact": 1 + 8 + 4 + 4 + 3 + 3,
        "Synonym": 1 + 6 + 3 + 2,
        "Nothing": 1,
    }


def test_restaurant_legacy_price_key_and_no_preference_values():
    tables = get_synonym_tables()
    providers = [_provider("Diner", ["$$", "none", "any"], category="restaurants-cafes")]
    result = score_restaurants(providers, {"price": "moderate", "dietary": "none", "cuisine": "any"}, tables)
    assert _scores(result) == {"Diner": 1 + 3}


def test_restaurants_always_keep_base_score():
    tables = get_synonym_tables()
    providers = [_provider("A", category="restaurants-cafes"), _provider("B", ["thai"], category="restaurants-cafes")]
    result = score_restaurants(providers, {"cuisine": "italian"}, tables)
    assert _scores(result) == {"A": 1, "B": 1}


def test_generic_counts_verbatim_tag_matches():
    tables = get_synonym_tables()
    providers = [
        _provider("Both", ["tax", "small-business"], category="professional-services"),
        _provider("One", ["tax", "Small-Business"], category="professional-services"),
        _provider("None", [], category="professional-services", featured=True),
    ]
    result = score_generic(providers, {"service": "tax", "size": "small-business"}, tables)
    assert _scores(result) == {"Both": 2, "One": 1, "None": 0}
    assert not any(item.featured_match for item in result.scored)


def test_registry_routes_categories():
    assert strategy_for(Category.HEALTH_WELLNESS).score is score_health_wellness
    assert strategy_for("real-estate").score is score_real_estate
    assert strategy_for("restaurants-cafes").featured_rule is FeaturedRule.SCORE_TIES
    assert strategy_for("professional-services") is GENERIC
    assert strategy_for("unknown-category-key") is GENERIC
    assert set(SCORERS) == set(Category)
