from __future__ import annotations

import logging
from typing import Any, List

from bleak import BleakScanner
from bleak.backends.scanner import AdvertisementData
from bleak.exc import BleakError

from sensorbug.exporter_app.config import ExporterSettings
from sensorbug.exporter_app.reporter import Discovery, Reporter


def manufacturer_payloads(advertisement: AdvertisementData) -> List[bytes]:
    """
    Rebuild raw manufacturer data as it appeared on air.

    bleak splits the little-endian company id off into the dict key; the
    decoder expects it in front of the payload.
    """
    return [
        company_id.to_bytes(2, byteorder="little") + bytes(data)
        for company_id, data in advertisement.manufacturer_data.items()
    ]


def _scanner_kwargs(settings: ExporterSettings) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    if settings.bluetooth_adapter:
        kwargs["bluez"] = {"adapter": settings.bluetooth_adapter}
    return kwargs


async def scanner_job(reporter: Reporter, settings: ExporterSettings, logger: logging.Logger) -> None:
    try:
        async with BleakScanner(**_scanner_kwargs(settings)) as scanner:
            logger.info("scanning...", extra={"details": {"adapter": settings.bluetooth_adapter}})
            async for device, advertisement in scanner.advertisement_data():
                for payload in manufacturer_payloads(advertisement):
                    await reporter.submit(Discovery(device.address, payload, advertisement.rssi))
    except BleakError as exc:
        logger.error("scanner_failed", extra={"details": {"error": str(exc)}})
        raise
