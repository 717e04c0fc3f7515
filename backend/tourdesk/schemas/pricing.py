from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, Field

RuleType = Literal["early_bird", "group_discount", "seasonal", "last_minute", "multi_service", "loyalty"]
DiscountType = Literal["percentage", "fixed_amount"]


class PricingOptions(BaseModel):
    trip_start_date: date | None = None
    participants: int = Field(default=1, gt=0)
    customer_type: Literal["new", "returning"] | None = None
    total_previous_bookings: int = Field(default=0, ge=0)
    advance_booking_days: int | None = Field(default=None, ge=0)
    currency: str | None = None
    tax_rate: Decimal | None = Field(default=None, ge=0)


class PricingRule(BaseModel):
    id: str
    name: str
    # Kept open so custom rule types can be registered; see pricing_rules.RULE_CONDITIONS
    rule_type: str
    service_ids: list[str] = []
    conditions: dict[str, Any] = {}
    discount_type: DiscountType
    discount_value: Decimal = Field(ge=0)
    priority: int = 0
    is_active: bool = True
    valid_from: datetime | None = None
    valid_until: datetime | None = None

    model_config = {"frozen": True}


class ServiceCombination(BaseModel):
    id: str
    name: str
    service_ids: list[str] = Field(min_length=1)
    discount_type: DiscountType
    discount_value: Decimal = Field(ge=0)
    min_participants: int | None = Field(default=None, gt=0)
    max_participants: int | None = Field(default=None, gt=0)
    is_active: bool = True

    model_config = {"frozen": True}


class DiscountLine(BaseModel):
    name: str
    type: str  # rule type, or "combination"
    amount: Decimal
    description: str

    model_config = {"frozen": True}


class TaxLine(BaseModel):
    name: str
    rate: Decimal
    amount: Decimal

    model_config = {"frozen": True}


class PricingBreakdown(BaseModel):
    subtotal: Decimal
    discounts: list[DiscountLine] = []
    taxes: list[TaxLine] = []
    total: Decimal
    savings: Decimal
    currency: str

    model_config = {"frozen": True}

    @property
    def taxable_amount(self) -> Decimal:
        return max(Decimal("0"), self.subtotal - self.savings)
