"""Recommendation engine — suggestions and advisory checks for a booking cart.

Modules:
    config          Centralized thresholds and category relationship tables
    scoring         Confidence heuristics and style/season helpers
    business_rules  Data-driven advisory rules and their condition map
    engine          RecommendationEngine: recommendation passes, validation, packages

Pipeline:
    complementary + upgrade + popular + seasonal + alternative passes
    → drop selected ids → rank by confidence + savings/100 → top N
"""
