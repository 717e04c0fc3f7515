from datetime import date
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, Field

from tourdesk.schemas.catalog import Service

RecommendationType = Literal["complementary", "upgrade", "alternative", "popular", "seasonal"]
Severity = Literal["error", "warning", "info"]


class RecommendationOptions(BaseModel):
    participants: int = Field(default=1, gt=0)
    trip_start_date: date | None = None
    budget: float | None = Field(default=None, ge=0)


class Recommendation(BaseModel):
    service: Service
    reason: str
    type: RecommendationType
    confidence: float = Field(ge=0, le=1)
    potential_savings: float | None = None
    bundle_discount: float | None = None

    model_config = {"frozen": True}

    @property
    def score(self) -> float:
        return self.confidence + (self.potential_savings or 0) / 100


class BusinessRule(BaseModel):
    """Advisory rule evaluated against a cart.

    `condition` names a predicate in business_rules.CONDITION_MAP;
    `params` is that predicate's payload.
    """

    id: str
    name: str
    type: Literal["conflict", "dependency", "upgrade", "complement"]
    service_ids: list[str] = []
    target_service_ids: list[str] = []
    condition: str
    params: dict[str, Any] = {}
    message: str
    severity: Severity = "info"

    model_config = {"frozen": True}


class RuleViolation(BaseModel):
    rule: BusinessRule
    message: str
    severity: Severity

    model_config = {"frozen": True}


class PackageUpgrade(BaseModel):
    name: str
    services: list[Service]
    original_price: Decimal
    package_price: Decimal
    savings: Decimal
    description: str

    model_config = {"frozen": True}
