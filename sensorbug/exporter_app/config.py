from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict, BaseSettings


class ExporterSettings(BaseSettings):
    server_ip: str = Field("0.0.0.0", validation_alias="SERVER_IP")
    server_port: int = Field(9298, validation_alias="SERVER_PORT")

    flush_interval: float = Field(300.0, gt=0, validation_alias="FLUSH_INTERVAL")
    queue_max_size: int = Field(16, gt=0, validation_alias="QUEUE_MAX_SIZE")
    shutdown_grace: float = Field(2.0, ge=0, validation_alias="SHUTDOWN_GRACE")

    log_ring_size: int = Field(200, validation_alias="LOG_RING_SIZE")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    # None lets bleak pick the default adapter
    bluetooth_adapter: Optional[str] = Field(None, validation_alias="BLUETOOTH_ADAPTER")
    enable_scanner_job: bool = Field(True, validation_alias="ENABLE_SCANNER_JOB")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")


@lru_cache
def get_settings() -> ExporterSettings:
    return ExporterSettings()
