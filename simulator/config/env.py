from __future__ import annotations
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ExportConfig:
    filename_prefix: str = "kpis_feedback"


def get_export_config() -> ExportConfig:
    return ExportConfig(filename_prefix=os.getenv("KPI_EXPORT_PREFIX", "kpis_feedback"))


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000


def get_server_config() -> ServerConfig:
    return ServerConfig(
        host=os.getenv("SIMULATOR_HOST", "0.0.0.0"),
        port=int(os.getenv("SIMULATOR_PORT", "8000")),
    )


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"


def get_log_config() -> LogConfig:
    return LogConfig(level=os.getenv("SIMULATOR_LOG_LEVEL", "INFO").upper())
