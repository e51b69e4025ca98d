"""Etsy Affiliate Hub FastAPI application entrypoint.

This module wires the web application, configures CORS, loads the read-only
creator store, mounts the HTML and JSON routers, and serves static assets.

Run with: uvicorn main:app --reload
"""
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

import config
from routes.api import router as api_router
from routes.web import router as web_router
from store import CreatorStore, load_store


def create_app(store: CreatorStore | None = None) -> FastAPI:
    """Build the application around a store, loading the bundled data by default."""
    application = FastAPI(title=config.SITE_NAME)

    # Origins come from CORS_ORIGINS; the default "*" allows any origin.
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.store = store if store is not None else load_store(config.DATA_DIR)

    application.include_router(api_router)
    application.include_router(web_router)
    if os.path.isdir(config.STATIC_DIR):
        application.mount("/static", StaticFiles(directory=config.STATIC_DIR), name="static")

    @application.get("/health")
    async def health() -> dict:
        """Report store size for uptime checks."""
        return {"status": "ok", "creators": len(application.state.store)}

    return application


app = create_app()
