"""
LMS resource viewer API server.

Usage:
    python main.py --dev --port 8100
"""

import argparse
import logging
import os
from contextlib import asynccontextmanager

import httpx
import sentry_sdk
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import Settings, get_settings
from web_api.auth import ViewerRegistry
from web_api.routes.modules import router as modules_router
from web_api.routes.resources import router as resources_router
from web_api.routes.session import router as session_router
from web_api.routes.view_mode import router as view_mode_router

logger = logging.getLogger(__name__)


def configure_observability(settings: Settings) -> None:
    """
    Set up logging and Sentry for the process serving the app.

    Runs from create_app so uvicorn's reload worker, which imports main:app
    without calling main(), is configured too.
    """
    logging.basicConfig(format="[%(asctime)s] %(levelname)s %(name)s - %(message)s")
    logging.getLogger().setLevel(settings.log_level.upper())

    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn, traces_sample_rate=0.1)
        logger.info("Sentry error reporting enabled")


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the API app. transport replaces the LMS backend connection in tests."""
    settings = settings or get_settings()
    configure_observability(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.viewers.aclose()

    app = FastAPI(title="LMS Resource Viewer", lifespan=lifespan)
    app.state.settings = settings
    app.state.viewers = ViewerRegistry(settings, transport=transport)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(resources_router)
    app.include_router(modules_router)
    app.include_router(view_mode_router)
    app.include_router(session_router)

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


def main():
    parser = argparse.ArgumentParser(description="LMS resource viewer API")
    parser.add_argument("--dev", action="store_true", help="Enable auto-reload and debug logging")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    if args.dev:
        # Inherited by the reload worker process
        os.environ.setdefault("LOG_LEVEL", "DEBUG")

    uvicorn.run("main:app", host=args.host, port=args.port, reload=args.dev)


if __name__ == "__main__":
    main()
