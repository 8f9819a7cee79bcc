import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, REGISTRY, generate_latest

from sensorbug.exporter_app.config import ExporterSettings, get_settings
from sensorbug.exporter_app.jobs import JobManager, reporter_job
from sensorbug.exporter_app.logging import create_logger, ring_buffer
from sensorbug.exporter_app.metrics import MetricsSink
from sensorbug.exporter_app.reporter import Reporter
from sensorbug.exporter_app.scanner import scanner_job


def create_app(settings: Optional[ExporterSettings] = None, registry: Optional[CollectorRegistry] = None) -> FastAPI:
    settings = settings or get_settings()
    registry = registry if registry is not None else REGISTRY
    logger = create_logger("sensorbug", settings.log_ring_size, settings.log_level)
    reporter = Reporter(
        flush_interval=settings.flush_interval,
        queue_max_size=settings.queue_max_size,
        metrics=MetricsSink(registry),
        logger=logger,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        stop_event = asyncio.Event()
        jobs = JobManager(logger)
        jobs.start(reporter_job(reporter, stop_event), name="reporter")
        if settings.enable_scanner_job:
            jobs.start(scanner_job(reporter, settings, logger), name="scanner")
        try:
            yield
        finally:
            stop_event.set()
            await jobs.stop(grace=settings.shutdown_grace)

    app = FastAPI(title="sensorbug-exporter", lifespan=lifespan)
    app.state.settings = settings
    app.state.reporter = reporter
    app.state.logger = logger

    @app.get("/metrics")
    async def metrics() -> Response:
        return Response(generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "devices": len(reporter.store), "pending": reporter.pending}

    @app.get("/events")
    async def events() -> dict:
        handler = ring_buffer(logger)
        return {"events": handler.get_events() if handler else []}

    return app
