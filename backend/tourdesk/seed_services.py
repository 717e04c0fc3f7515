"""Seed demo catalog — services offered across Puntland destinations."""

import logging

from tourdesk.schemas.catalog import Service

logger = logging.getLogger(__name__)


SEED_SERVICES = [
    {
        "id": "acc-garowe-guesthouse",
        "name": "Garowe Guesthouse",
        "description": "Family-run guesthouse near the city centre",
        "category": "accommodation",
        "base_price": "65",
        "price_type": "per_person",
        "location": "Garowe",
        "highlights": ["Breakfast included", "Wi-Fi"],
        "rating": 3.9,
        "review_count": 84,
        "popularity": 0.55,
        "tags": ["budget", "year-round"],
    },
    {
        "id": "acc-garowe-hotel",
        "name": "Garowe Central Hotel",
        "description": "Standard rooms with air conditioning",
        "category": "accommodation",
        "base_price": "110",
        "price_type": "per_person",
        "location": "Garowe",
        "highlights": ["Breakfast included", "Wi-Fi", "Airport pickup"],
        "rating": 4.2,
        "review_count": 152,
        "popularity": 0.68,
        "tags": ["standard"],
    },
    {
        "id": "acc-bosaso-seaview",
        "name": "Bosaso Seaview Resort",
        "description": "Beachfront suites overlooking the Gulf of Aden",
        "category": "accommodation",
        "base_price": "190",
        "price_type": "per_person",
        "location": "Bosaso",
        "highlights": ["Sea view", "Pool", "Spa", "Breakfast included"],
        "rating": 4.7,
        "review_count": 231,
        "popularity": 0.82,
        "tags": ["luxury", "summer"],
    },
    {
        "id": "trn-shared-minibus",
        "name": "Shared Minibus Transfer",
        "description": "Scheduled intercity minibus between Garowe and Bosaso",
        "category": "transport",
        "base_price": "25",
        "price_type": "per_person",
        "location": "Garowe",
        "highlights": ["Daily departures"],
        "rating": 3.6,
        "review_count": 60,
        "popularity": 0.4,
        "tags": ["shared", "budget"],
    },
    {
        "id": "trn-private-4x4",
        "name": "Private 4x4 with Driver",
        "description": "Full-day private vehicle for off-road routes",
        "category": "transport",
        "base_price": "150",
        "price_type": "per_group",
        "location": "Garowe",
        "highlights": ["Air conditioning", "Experienced driver", "Flexible stops"],
        "rating": 4.6,
        "review_count": 97,
        "popularity": 0.78,
        "tags": ["private", "luxury", "year-round"],
        "max_group_size": 6,
    },
    {
        "id": "act-eyl-coast-full-day",
        "name": "Eyl Coast Full Day Excursion",
        "description": "Historic fishing town, cliffs and beaches",
        "category": "activity",
        "base_price": "80",
        "price_type": "per_person",
        "location": "Eyl",
        "highlights": ["Beach time", "Old town walk", "Photography stops"],
        "rating": 4.5,
        "review_count": 118,
        "popularity": 0.74,
        "tags": ["autumn", "winter"],
    },
    {
        "id": "act-bosaso-snorkel",
        "name": "Bosaso Snorkelling Trip",
        "description": "Half-day boat trip to coral reefs",
        "category": "activity",
        "base_price": "60",
        "price_type": "per_person",
        "location": "Bosaso",
        "highlights": ["Boat ride", "Equipment included"],
        "rating": 4.3,
        "review_count": 75,
        "popularity": 0.66,
        "tags": ["summer"],
        "max_group_size": 10,
    },
    {
        "id": "gde-cultural-guide",
        "name": "Cultural Heritage Guide",
        "description": "Licensed guide for history and culture tours",
        "category": "guide",
        "base_price": "90",
        "price_type": "per_group",
        "location": "Garowe",
        "highlights": ["English and Somali", "Local history"],
        "rating": 4.8,
        "review_count": 140,
        "popularity": 0.85,
        "tags": ["year-round"],
    },
    {
        "id": "meal-local-cuisine",
        "name": "Local Cuisine Dinner",
        "description": "Traditional Somali dinner with camel meat and rice",
        "category": "meal",
        "base_price": "20",
        "price_type": "per_person",
        "location": "Garowe",
        "highlights": ["Traditional dishes"],
        "rating": 4.4,
        "review_count": 102,
        "popularity": 0.72,
        "tags": ["basic"],
    },
    {
        "id": "meal-seafood-feast",
        "name": "Bosaso Seafood Feast",
        "description": "Fresh catch of the day at a beachside restaurant",
        "category": "meal",
        "base_price": "35",
        "price_type": "per_person",
        "location": "Bosaso",
        "highlights": ["Fresh seafood", "Beach setting"],
        "rating": 4.6,
        "review_count": 88,
        "popularity": 0.7,
        "tags": ["premium", "summer"],
    },
]


def load_catalog() -> list[Service]:
    """Build Service models from SEED_SERVICES."""
    services = [Service.model_validate(data) for data in SEED_SERVICES]
    logger.info(f"Loaded {len(services)} seed services")
    return services
