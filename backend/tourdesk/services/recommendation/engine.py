"""Recommendation engine — ranks catalog services to add to, upgrade or replace in a cart."""

import logging
from collections.abc import Sequence
from decimal import Decimal

from tourdesk.schemas.catalog import CORE_CATEGORIES, SelectedService, Service
from tourdesk.schemas.recommendation import (
    BusinessRule,
    PackageUpgrade,
    Recommendation,
    RecommendationOptions,
    RuleViolation,
)
from tourdesk.services.recommendation.business_rules import (
    DEFAULT_BUSINESS_RULES,
    evaluate_business_rules,
)
from tourdesk.services.recommendation.config import (
    COMPLEMENTARY_CATEGORIES,
    UPGRADE_PATHS,
    RecommendationConfig,
    recommendation_config,
)
from tourdesk.services.recommendation.scoring import (
    bundle_discount,
    complementary_confidence,
    popular_confidence,
    season_for_month,
    style_keys,
    upgrade_confidence,
    upgrade_value,
)

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """Suggests services for a cart from an injected catalog.

    Holds no per-call state; update_services/add_business_rule return new engines.
    """

    def __init__(
        self,
        services: Sequence[Service] = (),
        business_rules: Sequence[BusinessRule] = DEFAULT_BUSINESS_RULES,
        config: RecommendationConfig = recommendation_config,
    ):
        self.services: tuple[Service, ...] = tuple(services)
        self.business_rules: tuple[BusinessRule, ...] = tuple(business_rules)
        self.config = config

    def get_recommendations(
        self,
        selected: Sequence[SelectedService],
        options: RecommendationOptions | None = None,
    ) -> list[Recommendation]:
        options = options or RecommendationOptions()
        candidates = [
            *self._complementary(selected, options),
            *self._upgrades(selected, options),
            *self._popular(selected, options),
            *self._seasonal(selected, options),
            *self._alternatives(selected, options),
        ]

        selected_ids = {s.service.id for s in selected}
        ranked = sorted(
            (r for r in candidates if r.service.id not in selected_ids),
            key=lambda r: r.score,
            reverse=True,
        )

        # One suggestion per service: the best-scored one wins
        seen: set[str] = set()
        results = []
        for rec in ranked:
            if rec.service.id in seen:
                continue
            seen.add(rec.service.id)
            results.append(rec)

        logger.debug(f"{len(candidates)} candidate(s), {len(results)} after filtering for {len(selected)} line(s)")
        return results[: self.config.max_results]

    def _complementary(self, selected, options) -> list[Recommendation]:
        cfg = self.config.complementary
        selected_ids = {s.service.id for s in selected}
        # dict keeps first-seen category order
        categories = list(dict.fromkeys(s.service.category for s in selected))
        discount = bundle_discount(len(selected), self.config.bundles)

        recs = []
        for category in categories:
            for comp_category in COMPLEMENTARY_CATEGORIES.get(category, ()):
                if comp_category in categories:
                    continue
                matches = [
                    svc for svc in self.services
                    if svc.category == comp_category
                    and svc.id not in selected_ids
                    and svc.suits_group(options.participants)
                ]
                for svc in matches[: cfg.per_category]:
                    confidence = complementary_confidence(svc, selected, cfg)
                    if confidence <= cfg.min_confidence:
                        continue
                    recs.append(Recommendation(
                        service=svc,
                        reason=f"Complements your {category} selection perfectly",
                        type="complementary",
                        confidence=confidence,
                        bundle_discount=discount,
                    ))
        return recs

    def _upgrades(self, selected, options) -> list[Recommendation]:
        cfg = self.config.upgrades
        recs = []
        for line in selected:
            original = line.service
            for svc in self._upgrade_options(original, options):
                price_delta = float(svc.base_price - original.base_price)
                confidence = upgrade_confidence(svc, original, options.budget, cfg)
                if confidence <= cfg.min_confidence:
                    continue
                if options.budget and price_delta > options.budget * cfg.max_budget_share:
                    continue
                recs.append(Recommendation(
                    service=svc,
                    reason=self._upgrade_reason(svc, original),
                    type="upgrade",
                    confidence=confidence,
                    potential_savings=upgrade_value(svc, original, cfg),
                ))
        return recs

    def _upgrade_options(self, original: Service, options) -> list[Service]:
        ceiling = original.base_price * Decimal(str(self.config.upgrades.max_price_ratio))
        return [
            svc for svc in self.services
            if svc.category == original.category
            and svc.id != original.id
            and original.base_price < svc.base_price <= ceiling
            and (svc.rating or 0) >= (original.rating or 0)
            and svc.suits_group(options.participants)
        ]

    @staticmethod
    def _upgrade_reason(upgrade: Service, original: Service) -> str:
        upgrade_styles = style_keys(upgrade)
        for key in style_keys(original):
            for target in UPGRADE_PATHS.get(key, ()):
                if target in upgrade_styles:
                    label = target.replace("_", " ")
                    return f"Upgrade from {original.name} to {label} for enhanced experience"
        return f"Upgrade from {original.name} for enhanced experience"

    def _popular(self, selected, options) -> list[Recommendation]:
        cfg = self.config.popular
        selected_ids = {s.service.id for s in selected}
        categories = {s.service.category for s in selected}

        popular = [
            svc for svc in self.services
            if svc.id not in selected_ids
            and svc.category not in categories
            and svc.popularity > cfg.min_popularity
            and (svc.rating or 0) > cfg.min_rating
            and svc.suits_group(options.participants)
        ]
        popular.sort(key=lambda svc: svc.popularity, reverse=True)

        return [
            Recommendation(
                service=svc,
                reason=f"Highly rated by {svc.review_count}+ customers",
                type="popular",
                confidence=popular_confidence(svc, cfg),
            )
            for svc in popular[: cfg.limit]
        ]

    def _seasonal(self, selected, options) -> list[Recommendation]:
        if options.trip_start_date is None:
            return []
        cfg = self.config.seasonal
        season = season_for_month(options.trip_start_date.month)
        selected_ids = {s.service.id for s in selected}

        seasonal = [
            svc for svc in self.services
            if svc.id not in selected_ids
            and (season in svc.tags or cfg.all_season_tag in svc.tags)
        ]
        return [
            Recommendation(
                service=svc,
                reason=f"Perfect for {season} season travel",
                type="seasonal",
                confidence=cfg.confidence,
            )
            for svc in seasonal[: cfg.limit]
        ]

    def _alternatives(self, selected, options) -> list[Recommendation]:
        cfg = self.config.alternatives
        recs = []
        for line in selected:
            original = line.service
            floor_rating = (original.rating or 0) - cfg.max_rating_drop
            for svc in self.services:
                if (
                    svc.category != original.category
                    or svc.id == original.id
                    or svc.base_price >= original.base_price
                    or (svc.rating or 0) < floor_rating
                    or not svc.suits_group(options.participants)
                ):
                    continue
                recs.append(Recommendation(
                    service=svc,
                    reason=f"Similar experience at lower cost than {original.name}",
                    type="alternative",
                    confidence=cfg.confidence,
                    potential_savings=float(original.base_price - svc.base_price),
                ))
        return recs

    def validate_service_combination(
        self,
        selected: Sequence[SelectedService],
        options: RecommendationOptions | None = None,
    ) -> list[RuleViolation]:
        """Advisory pass: every business rule that fires for this cart. Never blocks."""
        return evaluate_business_rules(self.business_rules, selected, options or RecommendationOptions())

    def get_package_upgrades(
        self,
        selected: Sequence[SelectedService],
        options: RecommendationOptions | None = None,
    ) -> list[PackageUpgrade]:
        """Offer one discounted package filling the cart's missing core categories."""
        cfg = self.config.packages
        if not cfg.min_items <= len(selected) < cfg.max_items:
            return []

        categories = {s.service.category for s in selected}
        missing = [c for c in CORE_CATEGORIES if c not in categories]
        additions = [
            svc
            for svc in (next((s for s in self.services if s.category == c), None) for c in missing)
            if svc is not None
        ]
        if not additions:
            return []

        original_price = sum((s.service.base_price for s in selected), Decimal("0")) + sum(
            (svc.base_price for svc in additions), Decimal("0")
        )
        package_price = original_price * (1 - cfg.discount)
        return [PackageUpgrade(
            name=cfg.name,
            services=additions,
            original_price=original_price,
            package_price=package_price,
            savings=original_price - package_price,
            description=cfg.description,
        )]

    def update_services(self, services: Sequence[Service]) -> "RecommendationEngine":
        return RecommendationEngine(services, self.business_rules, self.config)

    def add_business_rule(self, rule: BusinessRule) -> "RecommendationEngine":
        return RecommendationEngine(self.services, self.business_rules + (rule,), self.config)
