from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from sensorbug.exporter_app.metrics import MetricsSink
from sensorbug.exporter_app.state import ApplyOutcome, StateStore
from sensorbug.parsing.advert import DecodeError, Reading, build_summary, decode_advertisement


@dataclass(frozen=True)
class Discovery:
    device_id: str
    manufacturer_data: bytes
    rssi: int = 0


class Reporter:
    """
    Single consumer of discovery events.

    ``run`` is the only coroutine that touches the state store. Producers hand
    events over with ``submit``, which waits while the queue is full.
    """

    def __init__(
        self,
        flush_interval: float = 300.0,
        queue_max_size: int = 16,
        metrics: Optional[MetricsSink] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if flush_interval <= 0:
            raise ValueError("flush_interval must be positive")
        self.flush_interval = flush_interval
        self.metrics = metrics
        self.logger = logger or logging.getLogger(__name__)
        self.store = StateStore(logger=self.logger)
        self._queue: asyncio.Queue[Discovery] = asyncio.Queue(maxsize=queue_max_size)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    async def submit(self, discovery: Discovery) -> None:
        await self._queue.put(discovery)

    def on_discovery(self, device_id: str, manufacturer_data: bytes, rssi: int = 0) -> Optional[Reading]:
        try:
            reading = decode_advertisement(manufacturer_data)
        except DecodeError as exc:
            self.logger.debug(
                "decode_failed",
                extra={"details": {"device_id": device_id, "error": str(exc), "data": manufacturer_data.hex()}},
            )
            return None
        if reading is None:
            return None

        if self.metrics is not None:
            self.metrics.record_battery(device_id, reading.battery)
            if reading.temperature is not None:
                self.metrics.record_temperature(device_id, reading.temperature)

        self.store.apply(device_id, build_summary(reading))
        return reading

    def flush(self) -> list[tuple[str, str]]:
        changed = self.store.drain_changed()
        for device_id, summary in changed:
            self.logger.info(
                "%s: %s",
                device_id,
                summary,
                extra={"details": {"device_id": device_id, "summary": summary}},
            )
        return changed

    def _handle(self, discovery: Discovery) -> None:
        self.on_discovery(discovery.device_id, discovery.manufacturer_data, discovery.rssi)

    async def run(self, stop_event: asyncio.Event) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.flush_interval
        stopper = asyncio.ensure_future(stop_event.wait())
        getter: Optional[asyncio.Future] = None
        try:
            while True:
                getter = asyncio.ensure_future(self._queue.get())
                timeout = max(0.0, deadline - loop.time())
                await asyncio.wait({getter, stopper}, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)

                if getter.done():
                    self._handle(getter.result())
                else:
                    getter.cancel()
                getter = None

                if stopper.done():
                    self.logger.info("Exit on shutdown")
                    return

                now = loop.time()
                if now >= deadline:
                    self.flush()
                    while deadline <= now:
                        deadline += self.flush_interval
        finally:
            if getter is not None:
                getter.cancel()
            stopper.cancel()
