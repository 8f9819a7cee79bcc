import argparse
import sys

import uvicorn

from sensorbug.exporter_app import create_app, ExporterSettings


class Exporter:
    def __init__(self, settings: ExporterSettings) -> None:
        self.settings = settings
        self.app = create_app(settings=self.settings)

    def start(self) -> None:
        uvicorn.run(
            self.app,
            host=self.settings.server_ip,
            port=self.settings.server_port,
            log_level=self.settings.log_level.lower(),
        )


def build_settings(argv=None) -> ExporterSettings:
    parser = argparse.ArgumentParser(description="Decode SensorBug advertisements and export them to Prometheus.")
    parser.add_argument("--ip", type=str, default=None, help="IP address to bind the metrics server to.")
    parser.add_argument("--port", type=int, default=None, help="Port to serve /metrics on.")
    parser.add_argument("--flush-interval", type=float, default=None, help="Seconds between change reports.")
    parser.add_argument("--adapter", type=str, default=None, help="Bluetooth adapter to scan with, e.g. hci0.")
    args = parser.parse_args(argv)

    # Command-line values override the environment
    overrides = {
        "server_ip": args.ip,
        "server_port": args.port,
        "flush_interval": args.flush_interval,
        "bluetooth_adapter": args.adapter,
    }
    return ExporterSettings(**{key: value for key, value in overrides.items() if value is not None})


def main(argv=None):
    exporter = Exporter(build_settings(argv))
    exporter.start()


if __name__ == "__main__":
    sys.exit(main())
