"""Metric descriptors for everything the exporter publishes.

The tables are built once at import time; the collector only walks them.
Names and labels are kept stable for existing dashboards.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Callable

from prometheus_client.core import GaugeMetricFamily

NAMESPACE = "cpe"
INTERFACE_LABELS = ("instance", "interface", "interface_name")
WIFI_LABELS = ("instance", "wlan_interface", "client_mac")


@dataclass(frozen=True)
class MetricSpec:
    name: str
    documentation: str
    labels: tuple[str, ...]
    attribute: str

    def family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(self.name, self.documentation, labels=list(self.labels))


def _name(subsystem: str, name: str) -> str:
    return "_".join(part for part in (NAMESPACE, subsystem, name) if part)


def _interface(name: str, documentation: str, attribute: str) -> MetricSpec:
    return MetricSpec(_name("", name), documentation, INTERFACE_LABELS, attribute)


def _gpon(name: str, documentation: str, attribute: str) -> MetricSpec:
    return MetricSpec(_name("gpon", name), documentation, INTERFACE_LABELS, attribute)


def _wifi(name: str, documentation: str, attribute: str) -> MetricSpec:
    return MetricSpec(_name("wifi", name), documentation, WIFI_LABELS, attribute)


INTERFACE_METRICS = (
    _interface("receive_bytes", "Received bytes per interface.", "rx_bytes"),
    _interface("transmit_bytes", "Transmitted bytes per interface.", "tx_bytes"),
    _interface("receive_frames", "Received frames per interface.", "rx_frames"),
    _interface("transmit_frames", "Transmitted frames per interface.", "tx_frames"),
    _interface("receive_errors", "Received errors per interface.", "rx_errors"),
    _interface("transmit_errors", "Transmitted errors per interface.", "tx_errors"),
    _interface("receive_drops", "Received drops per interface.", "rx_drops"),
    _interface("transmit_drops", "Transmitted drops per interface.", "tx_drops"),
    _interface("if_speed", "Interface Speed.", "link_speed"),
    _interface("if_status", "Interface Status.", "status"),
)

GPON_METRICS = (
    _gpon("receive_power", "GPON Receive Power.", "rx_power_dbm"),
    _gpon("transmit_power", "GPON Transmit Power.", "tx_power_dbm"),
    _gpon("up_transitions", "GPON Link Up Transitions.", "up_transitions"),
)

WIFI_METRICS = (
    _wifi("time_associated", "Time Associated", "associated_seconds"),
    _wifi("transmit_frames", "Transmit Frames", "tx_frames"),
    _wifi("transmit_unicast_frames", "Transmit Unicast Frames", "tx_unicast_frames"),
    _wifi("transmit_errors", "Transmit Failures", "tx_errors"),
    _wifi("transmit_retries", "Transmit Retries", "tx_retries"),
    _wifi("transmit_retry_rate", "Transmit Retry Rate", "tx_retry_rate"),
    _wifi("receive_unicast_frames", "Receive Unicast Frames", "rx_unicast_frames"),
    _wifi("receive_broadcast_frames", "Receive Multicast/Broadcast Frames", "rx_broadcast_frames"),
    _wifi("transmit_rate", "Transmit Rate", "tx_rate"),
    _wifi("receive_rate", "Receive Rate", "rx_rate"),
    _wifi("rssi", "RSSI", "rssi"),
    _wifi("noise", "Noise", "noise"),
    _wifi("snr", "SNR", "snr"),
    _wifi("quality", "Quality", "quality"),
)

ALL_METRICS = INTERFACE_METRICS + GPON_METRICS + WIFI_METRICS


def build_families(
    specs: Iterable[MetricSpec],
    records: Iterable[Any],
    labels: Callable[[Any], list[str]],
) -> Iterator[GaugeMetricFamily]:
    """Yield one gauge family per spec with a sample for every record."""
    records = list(records)
    for spec in specs:
        family = spec.family()
        for record in records:
            family.add_metric(labels(record), float(getattr(record, spec.attribute)))
        yield family
