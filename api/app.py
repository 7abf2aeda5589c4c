from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lexicon.dictionary import RefreshScheduler

from api.dependencies import get_dictionary, get_scheduler_config
from api.routes.dictionary import router as dictionary_router
from api.routes.entries import router as entries_router

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


def create_app() -> FastAPI:
    app = FastAPI(title="Dictionary API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(entries_router)
    app.include_router(dictionary_router)
    app.state.scheduler = None

    @app.on_event("startup")
    def start_refresh_scheduler() -> None:
        # A feed that cannot be loaded fails startup.
        provider = app.dependency_overrides.get(get_dictionary, get_dictionary)
        dictionary = provider()
        config = get_scheduler_config()
        if config.interval_seconds <= 0:
            logger.info("Periodic dictionary refresh disabled")
            return
        scheduler = RefreshScheduler(dictionary, config)
        scheduler.start()
        app.state.scheduler = scheduler

    @app.on_event("shutdown")
    def stop_refresh_scheduler() -> None:
        scheduler = app.state.scheduler
        if scheduler is not None:
            scheduler.stop()
            app.state.scheduler = None

    @app.get("/healthz")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
