from fastapi import HTTPException, Request

from tourdesk.schemas.catalog import CartLine, SelectedService, Service
from tourdesk.services.pricing_calculator import PricingCalculator
from tourdesk.services.recommendation.engine import RecommendationEngine


def get_pricing_calculator(request: Request) -> PricingCalculator:
    return request.app.state.pricing_calculator


def get_recommendation_engine(request: Request) -> RecommendationEngine:
    return request.app.state.recommendation_engine


def resolve_cart(lines: list[CartLine], services: tuple[Service, ...]) -> list[SelectedService]:
    """Turn id-based cart lines into SelectedService values; 404 on unknown ids."""
    by_id = {svc.id: svc for svc in services}
    selected = []
    for line in lines:
        service = by_id.get(line.service_id)
        if not service:
            raise HTTPException(status_code=404, detail=f"Service {line.service_id} not found")
        selected.append(SelectedService(
            service=service,
            quantity=line.quantity,
            participants=line.participants,
            service_date=line.service_date,
        ))
    return selected
