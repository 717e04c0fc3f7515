from datetime import date
from decimal import Decimal

import pytest

from tests.conftest import line
from tourdesk.schemas.recommendation import RecommendationOptions
from tourdesk.services.recommendation.config import RecommendationConfig
from tourdesk.services.recommendation.engine import RecommendationEngine


def _by_id(recommendations):
    return {r.service.id: r for r in recommendations}


def test_recommendations_exclude_cart_and_respect_limits(engine, catalog):
    cart = [line(catalog["hotel-std"], participants=2), line(catalog["coast-tour"], participants=2)]

    recs = engine.get_recommendations(cart, RecommendationOptions(participants=2, budget=1000))

    assert recs
    assert len(recs) <= 8
    assert {"hotel-std", "coast-tour"}.isdisjoint(r.service.id for r in recs)
    assert all(0 <= r.confidence <= 1 for r in recs)
    assert len({r.service.id for r in recs}) == len(recs)


def test_recommendations_are_ranked_by_score(engine, catalog):
    recs = engine.get_recommendations([line(catalog["hotel-std"])], RecommendationOptions(participants=2))

    scores = [r.confidence + (r.potential_savings or 0) / 100 for r in recs]
    assert scores == sorted(scores, reverse=True)


def test_accommodation_cart_gets_transport_and_meal_complements(engine, catalog):
    recs = engine.get_recommendations([line(catalog["hotel-std"])], RecommendationOptions(participants=2))

    complementary = [r for r in recs if r.type == "complementary"]
    assert {r.service.category for r in complementary} == {"transport", "meal"}
    assert all(r.confidence >= 0.5 for r in complementary)
    assert all(r.reason == "Complements your accommodation selection perfectly" for r in complementary)
    assert all(r.bundle_discount == 0 for r in complementary)


def test_complementary_confidence_heuristic(engine, catalog):
    recs = _by_id(engine.get_recommendations([line(catalog["hotel-std"])], RecommendationOptions(participants=2)))

    # base 0.5 + rating (3.5 - 3) / 5 * 0.2 + same location 0.2; price 25 is not within 50% of 100
    assert recs["bus"].type == "complementary"
    assert recs["bus"].confidence == pytest.approx(0.72)


def test_best_scored_suggestion_wins_for_duplicate_services(engine, catalog):
    recs = _by_id(engine.get_recommendations([line(catalog["hotel-std"])], RecommendationOptions(participants=2)))

    # car is both a complement (0.76) and popular (0.75 * 0.8 + 4.5 / 5 * 0.2)
    assert recs["car"].type == "popular"
    assert recs["car"].confidence == pytest.approx(0.78)


def test_bundle_discount_grows_with_cart_size(engine, catalog):
    two = engine.get_recommendations([line(catalog["hotel-std"]), line(catalog["coast-tour"])])
    three = engine.get_recommendations(
        [line(catalog["hotel-std"]), line(catalog["coast-tour"]), line(catalog["bus"])]
    )

    assert {r.bundle_discount for r in two if r.type == "complementary"} == {0.05}
    assert {r.bundle_discount for r in three if r.type == "complementary"} == {0.10}


def test_services_too_small_for_group_are_skipped(engine, catalog):
    recs = engine.get_recommendations([line(catalog["hotel-std"])], RecommendationOptions(participants=6))

    assert "car" not in _by_id(recs)


def test_upgrade_follows_style_path(engine, catalog):
    recs = _by_id(engine.get_recommendations([line(catalog["hotel-std"])], RecommendationOptions(participants=2)))

    upgrade = recs["hotel-lux"]
    assert upgrade.type == "upgrade"
    assert upgrade.reason == "Upgrade from Hotel Std to luxury accommodation for enhanced experience"
    # 0.4 + rating gain 0.6 / 5 * 0.3
    assert upgrade.confidence == pytest.approx(0.436)
    # rating gain 0.6 * 20 + two extra highlights * 5
    assert upgrade.potential_savings == pytest.approx(22.0)


def test_upgrade_confidence_uses_budget_headroom(engine, catalog):
    roomy = _by_id(engine.get_recommendations([line(catalog["hotel-std"])], RecommendationOptions(budget=1000)))
    tight = _by_id(engine.get_recommendations([line(catalog["hotel-std"])], RecommendationOptions(budget=300)))

    assert roomy["hotel-lux"].confidence == pytest.approx(0.736)
    # 80 more is above 20% of a 300 budget
    assert "hotel-lux" not in tight


def test_cheaper_alternative_reports_savings(engine, catalog):
    recs = _by_id(engine.get_recommendations([line(catalog["hotel-std"])]))

    alternative = recs["hostel"]
    assert alternative.type == "alternative"
    assert alternative.confidence == 0.5
    assert alternative.potential_savings == pytest.approx(40.0)
    assert alternative.reason == "Similar experience at lower cost than Hotel Std"


def test_popular_services_from_other_categories(engine, catalog):
    recs = _by_id(engine.get_recommendations([line(catalog["hotel-std"])], RecommendationOptions(participants=2)))

    tour = recs["coast-tour"]
    assert tour.type == "popular"
    assert tour.reason == "Highly rated by 120+ customers"
    assert tour.confidence == pytest.approx(0.9 * 0.8 + 4.5 / 5 * 0.2)


def test_seasonal_suggestions_need_a_trip_date(catalog):
    engine = RecommendationEngine([catalog["hotel-std"], catalog["feast"]])
    cart = [line(catalog["hotel-std"])]

    summer = _by_id(engine.get_recommendations(cart, RecommendationOptions(trip_start_date=date(2026, 7, 4))))
    undated = _by_id(engine.get_recommendations(cart, RecommendationOptions()))

    assert summer["feast"].type == "seasonal"
    assert summer["feast"].reason == "Perfect for summer season travel"
    assert summer["feast"].confidence == 0.6
    assert undated["feast"].type == "complementary"


def test_result_count_is_capped_by_config(catalog):
    engine = RecommendationEngine(list(catalog.values()), config=RecommendationConfig(max_results=2))

    assert len(engine.get_recommendations([line(catalog["hotel-std"])])) == 2


def test_empty_catalog_recommends_nothing(catalog):
    assert RecommendationEngine().get_recommendations([line(catalog["hotel-std"])]) == []


def test_package_upgrade_fills_missing_categories(engine, catalog):
    cart = [line(catalog["hotel-std"]), line(catalog["bus"])]

    packages = engine.get_package_upgrades(cart, RecommendationOptions())

    assert len(packages) == 1
    package = packages[0]
    assert package.name == "Complete Experience Package"
    assert [s.id for s in package.services] == ["coast-tour", "dinner", "guide"]
    assert package.original_price == Decimal("315")
    assert package.package_price == Decimal("267.75")
    assert package.savings == Decimal("47.25")


@pytest.mark.parametrize("ids", [["hotel-std"], ["hotel-std", "bus", "coast-tour", "dinner", "guide"]])
def test_package_upgrade_needs_two_to_four_items(engine, catalog, ids):
    assert engine.get_package_upgrades([line(catalog[i]) for i in ids]) == []


def test_package_upgrade_skips_categories_missing_from_catalog(catalog):
    engine = RecommendationEngine([catalog["hotel-std"], catalog["bus"]])

    assert engine.get_package_upgrades([line(catalog["hotel-std"]), line(catalog["bus"])]) == []


def test_update_services_returns_new_engine(engine, catalog):
    smaller = engine.update_services([catalog["bus"]])

    assert [s.id for s in smaller.services] == ["bus"]
    assert len(engine.services) == len(catalog)
    assert smaller.business_rules == engine.business_rules
