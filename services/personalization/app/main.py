import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings
from app.feed_weights.router import router as feed_weights_router
from shared.database import close_redis_client, get_redis_client
from shared.middleware import error_envelope_middleware, request_id_middleware

# Swagger tag groups displayed in the OpenAPI docs sidebar
_OPENAPI_TAGS = [
    {
        "name": "Feed Weights",
        "description": (
            "Per-user feed distribution across family, communities, trending and "
            "chronological content. Quick adjustments boost one category by 10 points "
            "(max 70) and rebalance the others proportionally (min 5), always totalling 100. "
            "Stored in Redis; unreadable records fall back to 40/30/20/10."
        ),
    },
    {
        "name": "Health",
        "description": "Liveness probe.",
    },
]


def get_settings() -> Settings:
    return Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    redis_client = get_redis_client(settings.redis_url)
    app.state.redis = redis_client

    yield

    await close_redis_client(redis_client)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # API docs are not served in production
    is_production = settings.env_name == "production"
    app = FastAPI(
        title="Personalization Service",
        description=(
            "Microservice owning each user's feed-weight preferences: how much of their "
            "feed comes from family, communities, trending and chronological sources."
        ),
        version="0.1.0",
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
        openapi_tags=_OPENAPI_TAGS,
        lifespan=lifespan,
    )

    # CORS must be registered first (runs last in middleware stack)
    # so that preflight OPTIONS requests get CORS headers before any auth check.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(error_envelope_middleware)

    app.include_router(feed_weights_router, prefix="/api/v1")

    @app.get("/health", tags=["Health"])
    async def health() -> dict:
        """Lightweight liveness probe. Does not hit Redis."""
        return {"status": "ok", "service": "personalization"}

    return app


app = create_app()
