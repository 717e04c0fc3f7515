"""Pricing rules — rule-type conditions and the default discount table."""

import calendar
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from tourdesk.schemas.catalog import SelectedService
from tourdesk.schemas.pricing import PricingOptions, PricingRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule condition may look at for one pricing call."""
    selected: tuple[SelectedService, ...]
    options: PricingOptions
    advance_booking_days: int

    @property
    def service_count(self) -> int:
        return len(self.selected)

    @property
    def trip_month(self) -> int | None:
        if self.options.trip_start_date is None:
            return None
        return self.options.trip_start_date.month


class RuleCondition(ABC):
    @abstractmethod
    def applies(self, rule: PricingRule, ctx: RuleContext) -> bool:
        ...

    def describe(self, rule: PricingRule, ctx: RuleContext) -> str:
        return rule.name


class EarlyBirdCondition(RuleCondition):
    def applies(self, rule, ctx) -> bool:
        return ctx.advance_booking_days >= rule.conditions.get("daysInAdvance", 0)

    def describe(self, rule, ctx) -> str:
        return f"Book {rule.conditions.get('daysInAdvance', 0)}+ days in advance"


class GroupDiscountCondition(RuleCondition):
    def applies(self, rule, ctx) -> bool:
        return ctx.options.participants >= rule.conditions.get("minParticipants", 0)

    def describe(self, rule, ctx) -> str:
        return f"{ctx.options.participants} participants qualify for group pricing"


class MultiServiceCondition(RuleCondition):
    def applies(self, rule, ctx) -> bool:
        return ctx.service_count >= rule.conditions.get("minServices", 0)

    def describe(self, rule, ctx) -> str:
        return f"{ctx.service_count} services selected"


class LoyaltyCondition(RuleCondition):
    def applies(self, rule, ctx) -> bool:
        return (
            ctx.options.customer_type == rule.conditions.get("customerType")
            and ctx.options.total_previous_bookings >= rule.conditions.get("minPreviousBookings", 0)
        )

    def describe(self, rule, ctx) -> str:
        return f"Returning customer with {ctx.options.total_previous_bookings} previous bookings"


class LastMinuteCondition(RuleCondition):
    def applies(self, rule, ctx) -> bool:
        return ctx.advance_booking_days <= rule.conditions.get("maxDaysInAdvance", 0)

    def describe(self, rule, ctx) -> str:
        return "Last minute booking discount"


class SeasonalCondition(RuleCondition):
    """Applies when the trip starts in one of conditions["months"] (1-12)."""

    def applies(self, rule, ctx) -> bool:
        month = ctx.trip_month
        return month is not None and month in rule.conditions.get("months", [])

    def describe(self, rule, ctx) -> str:
        return f"Seasonal offer for {calendar.month_name[ctx.trip_month]} departures"


RULE_CONDITIONS: dict[str, type[RuleCondition]] = {
    "early_bird": EarlyBirdCondition,
    "group_discount": GroupDiscountCondition,
    "multi_service": MultiServiceCondition,
    "loyalty": LoyaltyCondition,
    "last_minute": LastMinuteCondition,
    "seasonal": SeasonalCondition,
}


def rule_applies(rule: PricingRule, ctx: RuleContext, unknown_applies: bool = False) -> bool:
    """Evaluate the rule-type condition. Unknown rule types fall back to `unknown_applies`."""
    condition_cls = RULE_CONDITIONS.get(rule.rule_type)
    if condition_cls is None:
        logger.warning(
            f"Pricing rule {rule.id} has unknown rule type '{rule.rule_type}' — "
            f"treated as {'applicable' if unknown_applies else 'not applicable'}"
        )
        return unknown_applies
    return condition_cls().applies(rule, ctx)


def describe_rule(rule: PricingRule, ctx: RuleContext) -> str:
    condition_cls = RULE_CONDITIONS.get(rule.rule_type)
    if condition_cls is None:
        return rule.name
    return condition_cls().describe(rule, ctx)


def _pct(rule_id: str, name: str, rule_type: str, conditions: dict, value: str, priority: int) -> PricingRule:
    return PricingRule(
        id=rule_id,
        name=name,
        rule_type=rule_type,
        conditions=conditions,
        discount_type="percentage",
        discount_value=Decimal(value),
        priority=priority,
    )


DEFAULT_PRICING_RULES: tuple[PricingRule, ...] = (
    _pct("early_bird_30", "Early Bird Discount (30+ days)", "early_bird", {"daysInAdvance": 30}, "15", 3),
    _pct("early_bird_14", "Early Bird Discount (14+ days)", "early_bird", {"daysInAdvance": 14}, "8", 2),
    _pct("group_large", "Large Group Discount (8+ people)", "group_discount", {"minParticipants": 8}, "20", 4),
    _pct("group_medium", "Group Discount (4+ people)", "group_discount", {"minParticipants": 4}, "12", 3),
    _pct("multi_service_5", "Multi-Service Package (5+ services)", "multi_service", {"minServices": 5}, "18", 4),
    _pct("multi_service_3", "Multi-Service Discount (3+ services)", "multi_service", {"minServices": 3}, "10", 3),
    _pct(
        "loyalty_returning",
        "Returning Customer Discount",
        "loyalty",
        {"customerType": "returning", "minPreviousBookings": 1},
        "5",
        2,
    ),
    _pct("last_minute", "Last Minute Deal", "last_minute", {"maxDaysInAdvance": 3}, "8", 1),
)

# Month (1-12) -> price multiplier applied before discounting
SEASONAL_MULTIPLIERS: dict[int, Decimal] = {
    1: Decimal("1.0"),   # low season
    2: Decimal("1.0"),
    3: Decimal("1.1"),   # shoulder
    4: Decimal("1.2"),   # high
    5: Decimal("1.2"),
    6: Decimal("1.3"),   # peak
    7: Decimal("1.3"),
    8: Decimal("1.3"),
    9: Decimal("1.2"),
    10: Decimal("1.1"),
    11: Decimal("1.0"),
    12: Decimal("1.1"),  # holidays
}
