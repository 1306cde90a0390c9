"""FastAPI application exposing the signal query boundary."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from signal_scanner.query import SignalQuery
from signal_scanner.services import Services

logger = structlog.get_logger("api")


def create_app(services: Services, *, run_scheduler: bool = True) -> FastAPI:
    """Build the app around already-constructed services.

    With ``run_scheduler`` the scan and sweep loops start with the app and
    stop when it shuts down.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if run_scheduler:
            services.scheduler.start()
        logger.info("api_started", scheduler=run_scheduler)
        try:
            yield
        finally:
            await services.aclose()
            logger.info("api_stopped")

    app = FastAPI(
        title="Signal Scanner API",
        description="Live trading signals produced by the periodic market scanner",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "DELETE"],
        allow_headers=["*"],
    )
    app.state.services = services

    def _query(request: Request) -> SignalQuery:
        return request.app.state.services.query

    @app.get("/api/health")
    async def health_check():
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    # Store calls take a blocking lock, so these run in the threadpool.

    @app.get("/api/signals")
    def list_signals(request: Request):
        signals = _query(request).list_signals()
        return {
            "success": True,
            "signals": [s.model_dump(mode="json") for s in signals],
            "total": len(signals),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/api/stats")
    def get_stats(request: Request):
        return {"success": True, **_query(request).stats()}

    @app.delete("/api/signals/{signal_id}")
    def delete_signal(signal_id: str, request: Request):
        deleted = _query(request).delete(signal_id)
        return {
            "success": deleted,
            "message": "Signal deleted" if deleted else "Signal not found",
        }

    return app
