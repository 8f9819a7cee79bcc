"""Prometheus gauges for decoded readings."""
from typing import Optional

from prometheus_client import CollectorRegistry, Gauge, REGISTRY

NAMESPACE = "btl"
SUBSYSTEM = "sensorbug"


class MetricsSink:
    """Last-value gauges keyed by device id (the ``unit`` label)."""

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry if registry is not None else REGISTRY
        self.temperature = Gauge(
            "temperature_c",
            "Air temperature reported by the beacon, in degrees Celsius",
            ["unit"],
            namespace=NAMESPACE,
            subsystem=SUBSYSTEM,
            registry=self.registry,
        )
        self.battery = Gauge(
            "battery_percent",
            "Battery level reported by the beacon, in percent",
            ["unit"],
            namespace=NAMESPACE,
            subsystem=SUBSYSTEM,
            registry=self.registry,
        )

    def record_battery(self, device_id: str, percent: int) -> None:
        self.battery.labels(unit=device_id).set(percent)

    def record_temperature(self, device_id: str, celsius: float) -> None:
        self.temperature.labels(unit=device_id).set(celsius)
