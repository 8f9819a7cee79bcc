"""Tests for the bleak scanner adapter (scanner mocked)."""
import asyncio
import logging
from types import SimpleNamespace

import pytest
from bleak.exc import BleakError

from sensorbug.exporter_app import scanner as scanner_module
from sensorbug.exporter_app.config import ExporterSettings
from sensorbug.exporter_app.reporter import Reporter
from sensorbug.exporter_app.scanner import manufacturer_payloads, scanner_job
from sensorbug.parsing.advert import build_summary, decode_advertisement

LOGGER = logging.getLogger("tests.scanner")


def _adv(manufacturer_data: dict, rssi: int = -60) -> SimpleNamespace:
    """Helper: stand-in for bleak's AdvertisementData."""
    return SimpleNamespace(manufacturer_data=manufacturer_data, rssi=rssi)


class FakeScanner:
    instances: list = []
    adverts: list = []
    fail_with = None

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        FakeScanner.instances.append(self)

    async def __aenter__(self):
        if FakeScanner.fail_with is not None:
            raise FakeScanner.fail_with
        return self

    async def __aexit__(self, *exc):
        return False

    async def advertisement_data(self):
        for device, adv in FakeScanner.adverts:
            yield device, adv


@pytest.fixture
def fake_scanner(monkeypatch):
    FakeScanner.instances = []
    FakeScanner.adverts = []
    FakeScanner.fail_with = None
    monkeypatch.setattr(scanner_module, "BleakScanner", FakeScanner)
    return FakeScanner


def test_manufacturer_payload_restores_company_id():
    payloads = manufacturer_payloads(_adv({0x0085: bytes([0x02, 0x00, 0x3C, 0x32, 0x00, 0x43, 0x90, 0x01])}))
    assert payloads == [bytes([0x85, 0x00, 0x02, 0x00, 0x3C, 0x32, 0x00, 0x43, 0x90, 0x01])]
    assert build_summary(decode_advertisement(payloads[0])) == "batt:50% temp:25.0°C"


def test_manufacturer_payload_multiple_companies():
    payloads = manufacturer_payloads(_adv({0x004C: b"\x02\x15", 0x0085: b"\x02\x00"}))
    assert payloads == [b"\x4c\x00\x02\x15", b"\x85\x00\x02\x00"]


def test_manufacturer_payload_empty():
    assert manufacturer_payloads(_adv({})) == []


def test_scanner_job_submits_discoveries(fake_scanner):
    fake_scanner.adverts = [
        (SimpleNamespace(address="AA:BB"), _adv({0x0085: bytes([0x02, 0x00, 0x3C, 0x32, 0x00])}, rssi=-42)),
        (SimpleNamespace(address="CC:DD"), _adv({0x004C: b"\x02\x15\x00\x00\x00"})),
    ]

    async def scenario() -> Reporter:
        reporter = Reporter(logger=LOGGER)
        await scanner_job(reporter, ExporterSettings(bluetooth_adapter="hci1"), LOGGER)
        assert reporter.pending == 2
        stop = asyncio.Event()
        task = asyncio.create_task(reporter.run(stop))
        await asyncio.sleep(0.02)
        stop.set()
        await asyncio.wait_for(task, timeout=1.0)
        return reporter

    reporter = asyncio.run(scenario())
    assert reporter.store.get("AA:BB").message == "batt:50%"
    assert "CC:DD" not in reporter.store
    assert fake_scanner.instances[0].kwargs == {"bluez": {"adapter": "hci1"}}


def test_scanner_job_default_adapter(fake_scanner):
    asyncio.run(scanner_job(Reporter(logger=LOGGER), ExporterSettings(), LOGGER))
    assert fake_scanner.instances[0].kwargs == {}


def test_scanner_job_reraises_adapter_failure(fake_scanner, caplog):
    fake_scanner.fail_with = BleakError("adapter not powered")
    with caplog.at_level(logging.ERROR, logger="tests.scanner"):
        with pytest.raises(BleakError):
            asyncio.run(scanner_job(Reporter(logger=LOGGER), ExporterSettings(), LOGGER))
    assert caplog.messages == ["scanner_failed"]
    assert caplog.records[0].details == {"error": "adapter not powered"}
