from sensorbug.parsing.advert import DecodeError, Reading, build_summary, decode_advertisement
from sensorbug.exporter_app import create_app, Discovery, ExporterSettings, Reporter, StateStore
from sensorbug.exporter import Exporter
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "build_summary",
    "create_app",
    "decode_advertisement",
    "DecodeError",
    "Discovery",
    "Exporter",
    "ExporterSettings",
    "Reading",
    "Reporter",
    "StateStore",
]

try:
    __version__ = version("sensorbug-exporter")
except PackageNotFoundError:
    __version__ = "0.0.0"
