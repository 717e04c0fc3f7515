from datetime import datetime, timezone
from decimal import Decimal

import pytest

from tourdesk.schemas.catalog import SelectedService, Service
from tourdesk.services.pricing_calculator import PricingCalculator, PricingConfig
from tourdesk.services.recommendation.engine import RecommendationEngine

FIXED_NOW = datetime(2026, 1, 1, 0, 0, tzinfo=timezone.utc)


def make_service(id, category="accommodation", base_price="100", price_type="per_person", **kwargs) -> Service:
    return Service(
        id=id,
        name=kwargs.pop("name", id.replace("-", " ").title()),
        category=category,
        base_price=Decimal(base_price),
        price_type=price_type,
        **kwargs,
    )


def line(service: Service, quantity: int = 1, participants: int = 1) -> SelectedService:
    return SelectedService(service=service, quantity=quantity, participants=participants)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def calculator(clock):
    return PricingCalculator(PricingConfig(), clock=clock)


@pytest.fixture
def catalog() -> dict[str, Service]:
    services = [
        make_service("hotel-std", "accommodation", "100", location="Garowe", rating=4.0,
                     highlights=["Breakfast", "Wi-Fi"], popularity=0.5, tags=["standard"]),
        make_service("hotel-lux", "accommodation", "180", location="Garowe", rating=4.6,
                     highlights=["Sea view", "Pool", "Spa", "Breakfast"], popularity=0.8, tags=["luxury"]),
        make_service("hostel", "accommodation", "60", location="Garowe", rating=3.8,
                     popularity=0.3, tags=["budget"]),
        make_service("bus", "transport", "25", location="Garowe", rating=3.5,
                     popularity=0.4, tags=["shared", "budget"]),
        make_service("car", "transport", "150", "per_group", location="Garowe", rating=4.5,
                     popularity=0.75, tags=["private", "luxury"], max_group_size=4),
        make_service("coast-tour", "activity", "80", name="Eyl Coast Full Day Tour", location="Eyl",
                     rating=4.5, popularity=0.9, review_count=120, tags=["winter"]),
        make_service("guide", "guide", "90", "per_group", location="Garowe", rating=4.8,
                     popularity=0.85, review_count=140, tags=["year-round"]),
        make_service("dinner", "meal", "20", location="Garowe", rating=4.4,
                     popularity=0.72, tags=["basic"]),
        make_service("feast", "meal", "35", location="Bosaso", rating=4.6,
                     popularity=0.6, tags=["premium", "summer"]),
    ]
    return {svc.id: svc for svc in services}


@pytest.fixture
def engine(catalog):
    return RecommendationEngine(list(catalog.values()))
