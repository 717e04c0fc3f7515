"""Recommendations router — suggestions, advisory checks and package offers for a cart."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from tourdesk.dependencies import get_recommendation_engine, resolve_cart
from tourdesk.schemas.catalog import CartLine
from tourdesk.schemas.recommendation import BusinessRule, RecommendationOptions
from tourdesk.services.recommendation.business_rules import CONDITION_MAP
from tourdesk.services.recommendation.engine import RecommendationEngine

logger = logging.getLogger(__name__)

router = APIRouter()


class CartRequest(BaseModel):
    items: list[CartLine] = []
    options: RecommendationOptions = RecommendationOptions()


@router.post("")
async def recommend(
    req: CartRequest,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    selected = resolve_cart(req.items, engine.services)
    recommendations = engine.get_recommendations(selected, req.options)
    logger.info(f"{len(recommendations)} recommendation(s) for {len(selected)} item(s)")
    return {"recommendations": recommendations}


@router.post("/validate")
async def validate(
    req: CartRequest,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Advisory rule checks. Never blocks a booking."""
    selected = resolve_cart(req.items, engine.services)
    return {"violations": engine.validate_service_combination(selected, req.options)}


@router.post("/packages")
async def packages(
    req: CartRequest,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    selected = resolve_cart(req.items, engine.services)
    return {"packages": engine.get_package_upgrades(selected, req.options)}


@router.post("/rules", status_code=201)
async def add_rule(
    rule: BusinessRule,
    request: Request,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    if rule.condition not in CONDITION_MAP:
        raise HTTPException(status_code=400, detail=f"Unknown condition {rule.condition}")
    request.app.state.recommendation_engine = engine.add_business_rule(rule)
    logger.info(f"Business rule {rule.id} added")
    return rule
