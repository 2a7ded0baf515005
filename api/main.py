"""FastAPI application for the tee sheet API."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.sessions import SessionStore
from database.connection import db
from database.db_manager import DatabaseManager
from teesheet import config
from teesheet.logging_config import setup_logging
from teesheet.saver import TeeSheetSaver


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize DB pool on startup, close on shutdown."""
    setup_logging(config.LOG_LEVEL)
    await db.initialize(dsn=config.DATABASE_URL)
    app.state.db_manager = DatabaseManager(db.pool)
    app.state.sessions = SessionStore()
    app.state.saver = TeeSheetSaver(app.state.db_manager.events)
    yield
    await db.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Tee Sheet API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import handicaps, tee_sheets
    app.include_router(handicaps.router, prefix="/api/handicaps", tags=["handicaps"])
    app.include_router(tee_sheets.router, prefix="/api/events", tags=["tee-sheets"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
