"""Prometheus exporter for Zhone GPON gateways."""

from zhone_exporter.collector import CycleResult, ZhoneCollector, collect_cycle
from zhone_exporter.config import AppConfig, load_config
from zhone_exporter.errors import ScrapeError

__all__ = [
    "AppConfig",
    "CycleResult",
    "ScrapeError",
    "ZhoneCollector",
    "collect_cycle",
    "load_config",
]
