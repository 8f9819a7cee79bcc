import asyncio
import logging
from typing import List, Optional

from sensorbug.exporter_app.reporter import Reporter


class JobManager:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.tasks: List[asyncio.Task] = []
        self.logger = logger or logging.getLogger(__name__)

    def start(self, coro, name: str):
        task = asyncio.create_task(coro, name=name)
        self.tasks.append(task)

    async def stop(self, grace: float = 0.0):
        # Give jobs a chance to finish their current event before cancelling
        if self.tasks and grace > 0:
            await asyncio.wait(self.tasks, timeout=grace)
        for task in self.tasks:
            task.cancel()
        for task in self.tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
            except Exception as exc:
                self.logger.error("job_failed", extra={"details": {"job": task.get_name(), "error": str(exc)}})
        self.tasks.clear()


async def reporter_job(reporter: Reporter, stop_event: asyncio.Event):
    reporter.logger.info("Running", extra={"details": {"flush_interval": reporter.flush_interval}})
    await reporter.run(stop_event)
