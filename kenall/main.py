from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kenall.config import settings
from kenall.logging_config import configure_logging
from kenall.services.lookup_service import PostalCodeIndex, load_index

logger = structlog.get_logger()


def create_app(index: PostalCodeIndex | None = None) -> FastAPI:
    """
    Build the lookup API.

    With `index` given the app serves it as-is; otherwise the lifespan
    loads settings.registry_path (or starts empty when unset).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        configure_logging(settings.log_level, settings.log_json)
        logger.info("Starting postal code API", env=settings.app_env)
        if app.state.index is None:
            if settings.registry_path:
                app.state.index = load_index(settings.registry_path, settings.registry_encoding)
            else:
                logger.warning("REGISTRY_PATH not set, serving an empty index")
                app.state.index = PostalCodeIndex()
        logger.info("Index ready", postal_codes=len(app.state.index))
        yield
        logger.info("Shutting down postal code API")

    app = FastAPI(
        title="KEN_ALL Postal Code API",
        description="Normalized Japan Post postal code registry lookup.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.index = index

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from kenall.api.v1.router import api_router

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check():
        index = app.state.index
        return {
            "status": "healthy" if index is not None and len(index) else "degraded",
            "version": "1.0.0",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "postal_codes": len(index) if index is not None else 0,
        }

    return app


app = create_app()
