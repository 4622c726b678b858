import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.database import engine, initialize_database
from app.infrastructure.notifications import build_realtime_from_settings
from app.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and heartbeat on startup, release them on shutdown."""

    initialize_database()
    realtime = app.state.realtime
    realtime.start()
    try:
        yield
    finally:
        realtime.shutdown()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    logging.getLogger("app").setLevel(settings.log_level.upper())

    app = FastAPI(title="Realtime Notifications API", lifespan=lifespan)
    app.state.realtime = build_realtime_from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
