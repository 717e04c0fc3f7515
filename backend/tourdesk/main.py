import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tourdesk.config import settings

# ─── Logging setup (console, plus file when log_dir is set) ───
_handlers: list[logging.Handler] = [logging.StreamHandler()]
if settings.log_dir:
    _log_dir = Path(settings.log_dir)
    _log_dir.mkdir(parents=True, exist_ok=True)
    _handlers.append(
        RotatingFileHandler(
            _log_dir / "tourdesk.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
    )

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=_handlers,
)

# Quiet noisy libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from tourdesk.routers import catalog, pricing, recommendations
from tourdesk.seed_services import load_catalog
from tourdesk.services.pricing_calculator import PricingCalculator, PricingConfig
from tourdesk.services.recommendation.config import RecommendationConfig
from tourdesk.services.recommendation.engine import RecommendationEngine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    services = load_catalog() if settings.seed_catalog else []
    app.state.pricing_calculator = PricingCalculator(PricingConfig.from_settings())
    app.state.recommendation_engine = RecommendationEngine(
        services, config=RecommendationConfig(max_results=settings.max_recommendations)
    )
    logger.info(
        f"TourDesk ready: {len(services)} services, "
        f"currency {settings.default_currency}, tax rate {settings.default_tax_rate}"
    )

    yield

    logger.info("TourDesk shutting down")


app = FastAPI(
    title="TourDesk",
    description="Tour booking pricing and recommendations",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog.router, prefix="/api/catalog", tags=["catalog"])
app.include_router(pricing.router, prefix="/api/pricing", tags=["pricing"])
app.include_router(recommendations.router, prefix="/api/recommendations", tags=["recommendations"])


@app.get("/api/health")
async def health():
    return {"status": "ok"}
