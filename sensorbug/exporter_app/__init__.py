from sensorbug.exporter_app.app import create_app
from sensorbug.exporter_app.config import ExporterSettings, get_settings
from sensorbug.exporter_app.reporter import Discovery, Reporter
from sensorbug.exporter_app.state import ApplyOutcome, StateEntry, StateStore

__all__ = [
    "ApplyOutcome",
    "create_app",
    "Discovery",
    "ExporterSettings",
    "get_settings",
    "Reporter",
    "StateEntry",
    "StateStore",
]
