"""Advisory business rules — conflicts, dependencies and upgrade hints for a cart.

Rules are plain data (tourdesk.schemas.recommendation.BusinessRule). Each one
names a condition in CONDITION_MAP and carries that condition's params, so
new rules can be registered at runtime without code changes.
"""

import logging
from collections.abc import Callable, Sequence

from tourdesk.schemas.catalog import SelectedService
from tourdesk.schemas.recommendation import BusinessRule, RecommendationOptions, RuleViolation
from tourdesk.services.recommendation.config import CONFLICTING_STYLES
from tourdesk.services.recommendation.scoring import style_keys

logger = logging.getLogger(__name__)

Condition = Callable[[dict, Sequence[SelectedService], RecommendationOptions], bool]


def _categories(selected: Sequence[SelectedService]) -> set[str]:
    return {s.service.category for s in selected}


def categories_present(params, selected, options) -> bool:
    """All of params["categories"] are in the cart."""
    return set(params.get("categories", [])).issubset(_categories(selected))


def category_without(params, selected, options) -> bool:
    """params["category"] is booked, params["missing_category"] is not,
    and the group has at least params["min_participants"] people."""
    categories = _categories(selected)
    return (
        params.get("category") in categories
        and params.get("missing_category") not in categories
        and options.participants >= params.get("min_participants", 0)
    )


def category_keyword_without(params, selected, options) -> bool:
    keyword = params.get("keyword", "").lower()
    has_match = any(
        s.service.category == params.get("category") and keyword in s.service.name.lower()
        for s in selected
    )
    return has_match and params.get("missing_category") not in _categories(selected)


def budget_category_below(params, selected, options) -> bool:
    """A service of params["category"] under params["max_price"] while budget exceeds params["min_budget"]."""
    has_cheap = any(
        s.service.category == params.get("category") and s.service.base_price < params.get("max_price", 0)
        for s in selected
    )
    return has_cheap and (options.budget or 0) > params.get("min_budget", 0)


def style_conflict(params, selected, options) -> bool:
    conflicts = params.get("conflicts", CONFLICTING_STYLES)
    keys = set()
    for s in selected:
        keys |= style_keys(s.service)
    return any(keys.intersection(conflicts.get(key, ())) for key in keys)


CONDITION_MAP: dict[str, Condition] = {
    "categories_present": categories_present,
    "category_without": category_without,
    "category_keyword_without": category_keyword_without,
    "budget_category_below": budget_category_below,
    "style_conflict": style_conflict,
}


DEFAULT_BUSINESS_RULES: tuple[BusinessRule, ...] = (
    BusinessRule(
        id="accommodation_transport_conflict",
        name="Accommodation and Transport Timing",
        type="conflict",
        service_ids=["accommodation"],
        target_service_ids=["transport"],
        condition="categories_present",
        params={"categories": ["accommodation", "transport"]},
        message="Consider transport timing with your accommodation check-in/out times",
        severity="warning",
    ),
    BusinessRule(
        id="meal_activity_timing",
        name="Meal and Activity Scheduling",
        type="dependency",
        service_ids=["activity"],
        target_service_ids=["meal"],
        condition="category_keyword_without",
        params={"category": "activity", "keyword": "full day", "missing_category": "meal"},
        message="Full day activities work better with meal arrangements",
        severity="info",
    ),
    BusinessRule(
        id="group_size_guide_requirement",
        name="Large Group Guide Requirement",
        type="dependency",
        service_ids=["activity"],
        target_service_ids=["guide"],
        condition="category_without",
        params={"category": "activity", "missing_category": "guide", "min_participants": 7},
        message="Groups of 7+ people require a dedicated guide for activities",
        severity="warning",
    ),
    BusinessRule(
        id="budget_accommodation_upgrade",
        name="Budget Accommodation Upgrade",
        type="upgrade",
        service_ids=["accommodation"],
        condition="budget_category_below",
        params={"category": "accommodation", "max_price": 100, "min_budget": 500},
        message="Consider upgrading to premium accommodation within your budget",
        severity="info",
    ),
)

# Opt-in: register with RecommendationEngine.add_business_rule
STYLE_CONFLICT_RULE = BusinessRule(
    id="style_conflict",
    name="Mismatched Travel Styles",
    type="conflict",
    condition="style_conflict",
    message="Some selected services mix budget and luxury styles; check they suit each other",
    severity="warning",
)


def evaluate_business_rules(
    rules: Sequence[BusinessRule],
    selected: Sequence[SelectedService],
    options: RecommendationOptions,
) -> list[RuleViolation]:
    """Return every rule whose condition fires, in rule order."""
    fired = []
    for rule in rules:
        condition = CONDITION_MAP.get(rule.condition)
        if condition is None:
            logger.warning(f"Business rule {rule.id} has unknown condition '{rule.condition}' — skipped")
            continue
        if condition(rule.params, selected, options):
            fired.append(RuleViolation(rule=rule, message=rule.message, severity=rule.severity))
    return fired
