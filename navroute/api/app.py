"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

# Load .env file from project root (must be before other imports)
load_dotenv()
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from navroute import __version__  # noqa: E402
from navroute.api.routes import planning  # noqa: E402
from navroute.api.sessions import SessionRegistry  # noqa: E402
from navroute.config import get_settings  # noqa: E402
from navroute.services.flight_client import FlightClient  # noqa: E402
from navroute.services.navlog_client import NavlogClient  # noqa: E402

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the session registry and the upstream API clients."""
    app.state.sessions = SessionRegistry(settings.drag_debounce_seconds)
    app.state.navlog_client = NavlogClient(settings.api_base_url)
    app.state.flight_client = FlightClient(settings.api_base_url)
    logger.info("Nav-log API at %s", settings.api_base_url)
    yield
    await app.state.navlog_client.aclose()
    await app.state.flight_client.aclose()


app = FastAPI(
    title="navroute API",
    description="Interactive flight route planning",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(planning.router, prefix="/api")


@app.get("/api/health")
async def health():
    sessions = getattr(app.state, "sessions", None)
    return {
        "status": "ok",
        "version": __version__,
        "api_base_url": settings.api_base_url,
        "sessions": len(sessions) if sessions is not None else 0,
    }
