"""Pricing router — quotes and pricing rule administration."""

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from tourdesk.data.currency import CURRENCY_SYMBOLS
from tourdesk.dependencies import get_pricing_calculator, get_recommendation_engine, resolve_cart
from tourdesk.schemas.catalog import CartLine
from tourdesk.schemas.pricing import PricingOptions, PricingRule, ServiceCombination
from tourdesk.services.pricing_calculator import PricingCalculator
from tourdesk.services.recommendation.engine import RecommendationEngine

logger = logging.getLogger(__name__)

router = APIRouter()


class QuoteRequest(BaseModel):
    items: list[CartLine] = []
    options: PricingOptions = PricingOptions()


class PricingSettingsUpdate(BaseModel):
    tax_rate: Decimal | None = Field(default=None, ge=0, le=1)
    currency: str | None = None


@router.post("/quote")
async def quote(
    req: QuoteRequest,
    calculator: PricingCalculator = Depends(get_pricing_calculator),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Price a cart: subtotal, seasonal adjustment, discounts, tax and total."""
    selected = resolve_cart(req.items, engine.services)
    breakdown = calculator.calculate_price(selected, req.options)
    logger.info(f"Quoted {len(selected)} item(s): total {breakdown.total} {breakdown.currency}")
    return {
        "breakdown": breakdown,
        "formatted_total": calculator.format_currency(breakdown.total, breakdown.currency),
        "formatted_savings": calculator.format_currency(breakdown.savings, breakdown.currency),
    }


@router.get("/rules")
async def list_rules(calculator: PricingCalculator = Depends(get_pricing_calculator)):
    return {
        "rules": list(calculator.config.rules),
        "combinations": list(calculator.config.combinations),
        "tax_rate": calculator.config.tax_rate,
        "currency": calculator.config.currency,
    }


@router.post("/rules", status_code=201)
async def add_rule(
    rule: PricingRule,
    request: Request,
    calculator: PricingCalculator = Depends(get_pricing_calculator),
):
    if any(r.id == rule.id for r in calculator.config.rules):
        raise HTTPException(status_code=409, detail=f"Pricing rule {rule.id} already exists")
    request.app.state.pricing_calculator = calculator.add_pricing_rule(rule)
    logger.info(f"Pricing rule {rule.id} ({rule.rule_type}) added")
    return rule


@router.post("/combinations", status_code=201)
async def add_combination(
    combination: ServiceCombination,
    request: Request,
    calculator: PricingCalculator = Depends(get_pricing_calculator),
):
    request.app.state.pricing_calculator = calculator.add_service_combination(combination)
    logger.info(f"Service combination {combination.id} added")
    return combination


@router.put("/settings")
async def update_settings(
    req: PricingSettingsUpdate,
    request: Request,
    calculator: PricingCalculator = Depends(get_pricing_calculator),
):
    """Change the default tax rate and/or currency."""
    if req.currency is not None and req.currency.upper() not in CURRENCY_SYMBOLS:
        raise HTTPException(status_code=400, detail=f"Unsupported currency {req.currency}")

    if req.tax_rate is not None:
        calculator = calculator.set_tax_rate(req.tax_rate)
    if req.currency is not None:
        calculator = calculator.set_currency(req.currency.upper())
    request.app.state.pricing_calculator = calculator

    return {"tax_rate": calculator.config.tax_rate, "currency": calculator.config.currency}
