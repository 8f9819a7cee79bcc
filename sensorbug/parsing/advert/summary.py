from __future__ import annotations

from sensorbug.parsing.advert.model import LightReading, Reading, TemperatureReading


def format_light(light: LightReading) -> str:
    is_ir = "true" if light.is_ir else "false"
    return f"light:{is_ir}/{light.resolution}/{light.range}/{light.value}"


def format_temperature(temperature: TemperatureReading) -> str:
    return f"temp:{temperature.celsius:.1f}°C"


def build_summary(reading: Reading) -> str:
    """
    Render a reading as the canonical one-line summary.

    Battery always comes first; light and temperature follow in the order the
    records appeared in the payload, e.g. ``"batt:50% temp:25.0°C"``.
    """
    parts = [f"batt:{reading.battery}%"]
    for record in reading.records:
        if isinstance(record, LightReading):
            parts.append(format_light(record))
        elif isinstance(record, TemperatureReading):
            parts.append(format_temperature(record))
    return " ".join(parts)
