"""Catalog router — read and replace the service catalog used for recommendations."""

import logging

from fastapi import APIRouter, Depends, Request

from tourdesk.dependencies import get_recommendation_engine
from tourdesk.schemas.catalog import Service
from tourdesk.services.recommendation.engine import RecommendationEngine

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/services")
async def list_services(engine: RecommendationEngine = Depends(get_recommendation_engine)):
    return {"services": list(engine.services)}


@router.put("/services")
async def replace_services(
    services: list[Service],
    request: Request,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Replace the whole catalog."""
    request.app.state.recommendation_engine = engine.update_services(services)
    logger.info(f"Catalog replaced with {len(services)} services")
    return {"count": len(services)}
