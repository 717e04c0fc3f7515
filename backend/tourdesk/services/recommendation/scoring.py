"""Confidence heuristics shared by the recommendation passes."""

from collections.abc import Sequence

from tourdesk.schemas.catalog import SelectedService, Service
from tourdesk.services.recommendation.config import (
    BundleDiscounts,
    ComplementaryThresholds,
    PopularThresholds,
    UpgradeThresholds,
)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(value, high))


def complementary_confidence(
    service: Service,
    selected: Sequence[SelectedService],
    cfg: ComplementaryThresholds,
) -> float:
    """Base 0.5, nudged by rating, shared location and price compatibility."""
    confidence = cfg.base_confidence

    if service.rating:
        confidence += (service.rating - cfg.rating_pivot) / 5 * cfg.rating_weight

    if any(s.service.location == service.location for s in selected):
        confidence += cfg.same_location_boost

    if selected:
        avg_price = sum(float(s.service.base_price) for s in selected) / len(selected)
        if avg_price > 0 and abs(float(service.base_price) - avg_price) / avg_price < cfg.price_band:
            confidence += cfg.price_band_boost

    return clamp(confidence)


def upgrade_confidence(
    upgrade: Service,
    original: Service,
    budget: float | None,
    cfg: UpgradeThresholds,
) -> float:
    confidence = cfg.base_confidence

    if budget:
        share = float(upgrade.base_price - original.base_price) / budget
        if share < cfg.budget_small_share:
            confidence += cfg.budget_small_boost
        elif share < cfg.budget_medium_share:
            confidence += cfg.budget_medium_boost
        elif share > cfg.budget_large_share:
            confidence -= cfg.budget_large_penalty

    if upgrade.rating and original.rating and upgrade.rating > original.rating:
        confidence += (upgrade.rating - original.rating) / 5 * cfg.rating_weight

    return clamp(confidence)


def upgrade_value(upgrade: Service, original: Service, cfg: UpgradeThresholds) -> float:
    """Perceived value of an upgrade from rating gain and extra highlights. May be negative."""
    rating_gain = (upgrade.rating or 0) - (original.rating or 0)
    highlight_gain = len(upgrade.highlights) - len(original.highlights)
    return rating_gain * cfg.rating_value + highlight_gain * cfg.highlight_value


def popular_confidence(service: Service, cfg: PopularThresholds) -> float:
    return clamp(service.popularity * cfg.popularity_weight + (service.rating or 0) / 5 * cfg.rating_weight)


def bundle_discount(cart_size: int, cfg: BundleDiscounts) -> float:
    if cart_size >= 3:
        return cfg.three_plus
    if cart_size >= 2:
        return cfg.two_plus
    return 0.0


def season_for_month(month: int) -> str:
    if 3 <= month <= 5:
        return "spring"
    if 6 <= month <= 8:
        return "summer"
    if 9 <= month <= 11:
        return "autumn"
    return "winter"


def style_keys(service: Service) -> set[str]:
    """Style identifiers for a service: each tag alone and as '<tag>_<category>'."""
    keys = set(service.tags)
    keys.update(f"{tag}_{service.category}" for tag in service.tags)
    return keys
