"""FastAPI application factory for the qanda REST API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from qanda import __version__

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from qanda.config.schema import QandaConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan handler: open the store on startup, release it on shutdown."""
    from qanda.store.database import create_db

    config: QandaConfig = app.state.config
    factory, engine = await create_db(config.database)

    app.state.db_factory = factory
    app.state.engine = engine

    yield

    await engine.dispose()


def create_app(config: QandaConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    from qanda.config.loader import load_config
    from qanda.core.logging import setup_logging

    if config is None:
        config = load_config()

    setup_logging(config.logging)

    app = FastAPI(
        title="qanda",
        description="Questions, answers, and votes",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config

    from fastapi.middleware.cors import CORSMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from qanda.api.errors import register_error_handlers

    register_error_handlers(app)

    # Routes
    from qanda.api.health import router as health_router
    from qanda.api.routes.answers import router as answers_router
    from qanda.api.routes.questions import router as questions_router

    app.include_router(questions_router)
    app.include_router(answers_router)
    app.include_router(health_router)

    return app
