"""Recommendation engine configuration — single source for all thresholds."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class ComplementaryThresholds:
    """Confidence heuristic for services from complementary categories."""
    base_confidence: float = 0.5
    rating_pivot: float = 3.0          # ratings above this add confidence
    rating_weight: float = 0.2
    same_location_boost: float = 0.2
    price_band: float = 0.5            # within 50% of the average selected price
    price_band_boost: float = 0.1
    min_confidence: float = 0.3
    per_category: int = 2


@dataclass(frozen=True)
class UpgradeThresholds:
    """When a pricier same-category service is worth suggesting."""
    base_confidence: float = 0.4
    max_price_ratio: float = 2.0       # never more than 2x the current price
    budget_small_share: float = 0.1    # delta under 10% of budget → +0.3
    budget_small_boost: float = 0.3
    budget_medium_share: float = 0.2   # delta under 20% of budget → +0.2
    budget_medium_boost: float = 0.2
    budget_large_share: float = 0.3    # delta over 30% of budget → -0.2
    budget_large_penalty: float = 0.2
    rating_weight: float = 0.3
    min_confidence: float = 0.4
    max_budget_share: float = 0.2      # hard cap on delta relative to budget
    rating_value: float = 20.0         # upgrade value per rating point
    highlight_value: float = 5.0       # upgrade value per extra highlight


@dataclass(frozen=True)
class PopularThresholds:
    min_popularity: float = 0.7
    min_rating: float = 4.0
    limit: int = 3
    popularity_weight: float = 0.8
    rating_weight: float = 0.2


@dataclass(frozen=True)
class SeasonalSettings:
    confidence: float = 0.6
    limit: int = 2
    all_season_tag: str = "year-round"


@dataclass(frozen=True)
class AlternativeSettings:
    confidence: float = 0.5
    max_rating_drop: float = 0.5


@dataclass(frozen=True)
class BundleDiscounts:
    """Indicative bundle discount attached to complementary suggestions."""
    three_plus: float = 0.10
    two_plus: float = 0.05


@dataclass(frozen=True)
class PackageSettings:
    min_items: int = 2                 # inclusive
    max_items: int = 5                 # exclusive
    discount: Decimal = Decimal("0.15")
    name: str = "Complete Experience Package"
    description: str = "Add these services for a complete travel experience with 15% package discount"


# Categories that pair well with a selected category
COMPLEMENTARY_CATEGORIES: dict[str, tuple[str, ...]] = {
    "accommodation": ("transport", "meal"),
    "transport": ("accommodation", "guide"),
    "activity": ("guide", "meal", "transport"),
    "guide": ("activity", "transport"),
    "meal": ("activity", "accommodation"),
}

# Style keys that clash when booked together
CONFLICTING_STYLES: dict[str, tuple[str, ...]] = {
    "budget_accommodation": ("luxury_transport",),
    "luxury_accommodation": ("budget_transport",),
    "camping": ("luxury_meal",),
}

# Style upgrade paths
UPGRADE_PATHS: dict[str, tuple[str, ...]] = {
    "standard_accommodation": ("luxury_accommodation",),
    "shared_transport": ("private_transport",),
    "basic_meal": ("premium_meal",),
}


@dataclass(frozen=True)
class RecommendationConfig:
    """Top-level config aggregating all sub-configs."""
    complementary: ComplementaryThresholds = field(default_factory=ComplementaryThresholds)
    upgrades: UpgradeThresholds = field(default_factory=UpgradeThresholds)
    popular: PopularThresholds = field(default_factory=PopularThresholds)
    seasonal: SeasonalSettings = field(default_factory=SeasonalSettings)
    alternatives: AlternativeSettings = field(default_factory=AlternativeSettings)
    bundles: BundleDiscounts = field(default_factory=BundleDiscounts)
    packages: PackageSettings = field(default_factory=PackageSettings)
    max_results: int = 8


recommendation_config = RecommendationConfig()
