"""Tests for the job manager and the ring-buffer logger."""
import asyncio
import logging

from sensorbug.exporter_app.jobs import JobManager
from sensorbug.exporter_app.logging import RingBufferHandler, create_logger, ring_buffer


def test_ring_buffer_keeps_last_entries():
    handler = RingBufferHandler(max_entries=2)
    logger = logging.getLogger("tests.ring")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        logger.info("one")
        logger.info("two", extra={"details": {"n": 2}})
        logger.info("three")
    finally:
        logger.removeHandler(handler)
    events = handler.get_events()
    assert [e["event"] for e in events] == ["two", "three"]
    assert events[0]["details"] == {"n": 2}
    assert events[1]["details"] == {}


def test_create_logger_is_idempotent():
    first = create_logger("tests.created", ring_size=5, level="debug")
    second = create_logger("tests.created", ring_size=50)
    assert first is second
    assert first.level == logging.DEBUG
    assert first.propagate is False
    assert ring_buffer(first).max_entries == 5
    assert ring_buffer(logging.getLogger("tests.no_ring")) is None


def test_job_manager_waits_for_graceful_exit():
    async def scenario() -> list:
        finished = []
        stop = asyncio.Event()

        async def job():
            await stop.wait()
            finished.append("job")

        jobs = JobManager()
        jobs.start(job(), name="job")
        await asyncio.sleep(0)
        stop.set()
        await jobs.stop(grace=1.0)
        assert jobs.tasks == []
        return finished

    assert asyncio.run(scenario()) == ["job"]


def test_job_manager_cancels_and_logs_failures(caplog):
    async def scenario() -> None:
        async def forever():
            await asyncio.sleep(3600)

        async def broken():
            raise RuntimeError("boom")

        jobs = JobManager(logging.getLogger("tests.jobs"))
        jobs.start(forever(), name="forever")
        jobs.start(broken(), name="broken")
        await asyncio.sleep(0.01)
        await jobs.stop(grace=0.01)

    with caplog.at_level(logging.ERROR, logger="tests.jobs"):
        asyncio.run(scenario())
    assert caplog.messages == ["job_failed"]
    assert caplog.records[0].details == {"job": "broken", "error": "boom"}
