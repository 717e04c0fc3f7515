"""Pricing calculator — subtotal, seasonal adjustment, stacked discounts and tax for a cart."""

import logging
import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timezone
from decimal import Decimal
from functools import reduce
from typing import NamedTuple

from tourdesk.config import settings
from tourdesk.data.currency import format_currency
from tourdesk.schemas.catalog import SelectedService
from tourdesk.schemas.pricing import (
    DiscountLine,
    PricingBreakdown,
    PricingOptions,
    PricingRule,
    ServiceCombination,
    TaxLine,
)
from tourdesk.services.pricing_rules import (
    DEFAULT_PRICING_RULES,
    SEASONAL_MULTIPLIERS,
    RuleContext,
    describe_rule,
    rule_applies,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class PricingConfig:
    """Static pricing tables. Treated as read-only; use the calculator's mutators to derive new ones."""
    rules: tuple[PricingRule, ...] = DEFAULT_PRICING_RULES
    combinations: tuple[ServiceCombination, ...] = ()
    seasonal_multipliers: dict[int, Decimal] = field(default_factory=lambda: dict(SEASONAL_MULTIPLIERS))
    tax_rate: Decimal = Decimal("0.08")
    currency: str = "USD"
    stack_same_type_rules: bool = False  # False: only the top-priority rule of each type fires
    unknown_rule_types_apply: bool = False

    @classmethod
    def from_settings(cls) -> "PricingConfig":
        return cls(
            tax_rate=Decimal(str(settings.default_tax_rate)),
            currency=settings.default_currency,
        )


class _DiscountState(NamedTuple):
    base: Decimal
    lines: tuple[DiscountLine, ...]


def line_subtotal(selected: SelectedService, trip_days: int = 1) -> Decimal:
    """Price of one cart line before seasonal adjustment and discounts."""
    service = selected.service
    amount = service.base_price
    if service.price_type == "per_person":
        amount *= selected.participants
    elif service.price_type == "per_day":
        amount *= trip_days
    # per_group and fixed are flat
    return amount * selected.quantity


def rule_discount_amount(rule: PricingRule, base: Decimal) -> Decimal:
    """Discount a single rule grants against the running base."""
    if rule.discount_type == "percentage":
        return base * rule.discount_value / HUNDRED
    return min(rule.discount_value, base)


def trip_duration_days(trip_start_date: date | None) -> int:
    # Bookings carry no end date yet, so per-day services bill a single day
    return 1


class PricingCalculator:
    """Computes a PricingBreakdown for a cart. Pure per call; mutators return new calculators."""

    def __init__(self, config: PricingConfig | None = None, clock: Clock = utc_now):
        self.config = config or PricingConfig.from_settings()
        self._clock = clock

    def calculate_price(
        self,
        selected_services: Sequence[SelectedService],
        options: PricingOptions | None = None,
    ) -> PricingBreakdown:
        options = options or PricingOptions()
        if not selected_services:
            return self._empty_breakdown()

        selected = tuple(selected_services)
        subtotal = self.calculate_subtotal(selected, options)
        adjusted = self.apply_seasonal_pricing(subtotal, options.trip_start_date)

        ctx = RuleContext(
            selected=selected,
            options=options,
            advance_booking_days=self.advance_booking_days(options),
        )
        discounts = self._rule_discounts(ctx, adjusted) + self._combination_discounts(selected, options)
        savings = min(sum((d.amount for d in discounts), ZERO), adjusted)

        taxable = adjusted - savings
        taxes = self._taxes(taxable, options.tax_rate)
        total = taxable + sum((t.amount for t in taxes), ZERO)

        logger.debug(
            f"Priced {len(selected)} line(s): subtotal={adjusted} savings={savings} "
            f"taxable={taxable} total={total}"
        )
        return PricingBreakdown(
            subtotal=adjusted,
            discounts=list(discounts),
            taxes=taxes,
            total=total,
            savings=savings,
            currency=options.currency or self.config.currency,
        )

    def calculate_subtotal(self, selected: Iterable[SelectedService], options: PricingOptions) -> Decimal:
        days = trip_duration_days(options.trip_start_date)
        return sum((line_subtotal(s, days) for s in selected), ZERO)

    def apply_seasonal_pricing(self, subtotal: Decimal, trip_start_date: date | None) -> Decimal:
        if trip_start_date is None:
            return subtotal
        multiplier = self.config.seasonal_multipliers.get(trip_start_date.month, Decimal("1"))
        return subtotal * multiplier

    def advance_booking_days(self, options: PricingOptions) -> int:
        """Days between now and the trip start, rounded up and floored at 0.

        An explicit non-zero `advance_booking_days` on the options wins.
        """
        if options.advance_booking_days:
            return options.advance_booking_days
        if options.trip_start_date is None:
            return 0
        now = _as_utc(self._clock())
        trip_start = datetime.combine(options.trip_start_date, time.min, tzinfo=timezone.utc)
        days = math.ceil((trip_start - now).total_seconds() / 86400)
        return max(0, days)

    def applicable_rules(self, ctx: RuleContext) -> list[PricingRule]:
        """Active, in-window, in-scope rules whose condition holds, highest priority first."""
        now = _as_utc(self._clock())
        selected_ids = {s.service.id for s in ctx.selected}

        matches = []
        for rule in self.config.rules:
            if not rule.is_active:
                continue
            if rule.valid_from and _as_utc(rule.valid_from) > now:
                continue
            if rule.valid_until and _as_utc(rule.valid_until) < now:
                continue
            if rule.service_ids and not selected_ids.intersection(rule.service_ids):
                continue
            if rule_applies(rule, ctx, self.config.unknown_rule_types_apply):
                matches.append(rule)

        # sorted() is stable, so equal priorities keep declaration order
        ordered = sorted(matches, key=lambda r: r.priority, reverse=True)
        if self.config.stack_same_type_rules:
            return ordered

        seen_types: set[str] = set()
        tiered = []
        for rule in ordered:
            if rule.rule_type in seen_types:
                continue
            seen_types.add(rule.rule_type)
            tiered.append(rule)
        return tiered

    def _rule_discounts(self, ctx: RuleContext, adjusted_subtotal: Decimal) -> tuple[DiscountLine, ...]:
        """Fold the ordered rules over a running base.

        Percentage discounts shrink the base for the rules after them;
        fixed amounts are capped by the base but leave it unchanged.
        """

        def step(state: _DiscountState, rule: PricingRule) -> _DiscountState:
            amount = rule_discount_amount(rule, state.base)
            if amount <= 0:
                return state
            logger.debug(f"Rule {rule.id} ({rule.rule_type}) discounts {amount} from base {state.base}")
            line = DiscountLine(
                name=rule.name,
                type=rule.rule_type,
                amount=amount,
                description=describe_rule(rule, ctx),
            )
            base = state.base - amount if rule.discount_type == "percentage" else state.base
            return _DiscountState(base, state.lines + (line,))

        rules = self.applicable_rules(ctx)
        return reduce(step, rules, _DiscountState(adjusted_subtotal, ())).lines

    def _combination_discounts(
        self,
        selected: tuple[SelectedService, ...],
        options: PricingOptions,
    ) -> tuple[DiscountLine, ...]:
        selected_ids = {s.service.id for s in selected}
        lines = []
        for combo in self.config.combinations:
            if not combo.is_active:
                continue
            if not set(combo.service_ids).issubset(selected_ids):
                continue
            if combo.min_participants and options.participants < combo.min_participants:
                continue
            if combo.max_participants and options.participants > combo.max_participants:
                continue

            # Each bundle is priced on its own lines only, independent of rule stacking
            basis = sum(
                (s.service.base_price * s.quantity for s in selected if s.service.id in combo.service_ids),
                ZERO,
            )
            if combo.discount_type == "percentage":
                amount = basis * combo.discount_value / HUNDRED
            else:
                amount = combo.discount_value

            logger.debug(f"Combination {combo.id} discounts {amount} from bundle basis {basis}")
            lines.append(DiscountLine(
                name=combo.name,
                type="combination",
                amount=amount,
                description=f"Package discount for {combo.name}",
            ))
        return tuple(lines)

    def _taxes(self, taxable: Decimal, custom_rate: Decimal | None) -> list[TaxLine]:
        rate = custom_rate if custom_rate is not None else self.config.tax_rate
        return [TaxLine(name="Service Tax", rate=rate, amount=taxable * rate)]

    def _empty_breakdown(self) -> PricingBreakdown:
        return PricingBreakdown(
            subtotal=ZERO,
            discounts=[],
            taxes=[],
            total=ZERO,
            savings=ZERO,
            currency=self.config.currency,
        )

    def format_currency(self, amount: float | Decimal, currency: str | None = None) -> str:
        return format_currency(amount, currency or self.config.currency)

    # --- Derivation: each returns a new calculator sharing the clock ---

    def _derive(self, **changes) -> "PricingCalculator":
        return PricingCalculator(replace(self.config, **changes), clock=self._clock)

    def add_pricing_rule(self, rule: PricingRule) -> "PricingCalculator":
        return self._derive(rules=self.config.rules + (rule,))

    def add_service_combination(self, combination: ServiceCombination) -> "PricingCalculator":
        return self._derive(combinations=self.config.combinations + (combination,))

    def set_tax_rate(self, rate: Decimal | float) -> "PricingCalculator":
        return self._derive(tax_rate=Decimal(str(rate)))

    def set_currency(self, currency: str) -> "PricingCalculator":
        return self._derive(currency=currency)
