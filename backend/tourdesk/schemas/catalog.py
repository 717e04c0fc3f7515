from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

ServiceCategory = Literal["accommodation", "transport", "activity", "guide", "meal"]
PriceType = Literal["per_person", "per_group", "per_day", "fixed"]

CORE_CATEGORIES: tuple[str, ...] = ("accommodation", "transport", "activity", "meal", "guide")


class Service(BaseModel):
    id: str
    name: str
    description: str = ""
    category: ServiceCategory
    base_price: Decimal = Field(ge=0)
    price_type: PriceType
    location: str = ""
    highlights: list[str] = []
    rating: float | None = Field(default=None, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)
    popularity: float = Field(default=0.0, ge=0, le=1)
    tags: list[str] = []
    max_group_size: int | None = Field(default=None, gt=0)

    model_config = {"frozen": True}

    def suits_group(self, participants: int) -> bool:
        return self.max_group_size is None or participants <= self.max_group_size


class SelectedService(BaseModel):
    """One cart line: a catalog service with quantity and head count."""

    service: Service
    quantity: int = Field(default=1, gt=0)
    participants: int = Field(default=1, gt=0)
    service_date: date | None = None

    model_config = {"frozen": True}


class CartLine(BaseModel):
    """Cart line as submitted over HTTP, referencing the catalog by id."""

    service_id: str
    quantity: int = Field(default=1, gt=0)
    participants: int = Field(default=1, gt=0)
    service_date: date | None = None
