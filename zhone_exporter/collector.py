from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
import logging
import re
import time
from typing import Callable

from prometheus_client.core import GaugeMetricFamily

from zhone_exporter import client as pages
from zhone_exporter.client import DeviceClient
from zhone_exporter.config import DeviceConfig
from zhone_exporter.gpon import parse_gpon_status
from zhone_exporter.interfaces import parse_interfaces
from zhone_exporter.metrics import (
    ALL_METRICS,
    GPON_METRICS,
    INTERFACE_METRICS,
    WIFI_METRICS,
    build_families,
)
from zhone_exporter.models import GponRecord, InterfaceRecord, WifiClientRecord
from zhone_exporter.wireless import parse_wireless

GPON_INTERFACE = "eth0"
RADIO_RE = re.compile(r"wl(\d+)$")


@dataclass
class CycleResult:
    interfaces: list[InterfaceRecord] = field(default_factory=list)
    gpon: GponRecord | None = None
    clients: list[WifiClientRecord] = field(default_factory=list)
    radios: list[str] = field(default_factory=list)


def discover_radios(interfaces: list[InterfaceRecord]) -> list[str]:
    radios: list[str] = []
    for interface in interfaces:
        match = RADIO_RE.search(interface.id)
        if match and match.group(1) not in radios:
            radios.append(match.group(1))
    return radios


def attach_gpon(interfaces: list[InterfaceRecord], gpon: GponRecord) -> GponRecord | None:
    """Attach the GPON snapshot to the optical port, if it was reported.

    The optical port's link state comes from the GPON page rather than the
    ethernet status page.
    """
    for interface in interfaces:
        if interface.id == GPON_INTERFACE:
            interface.status = gpon.status
            gpon.interface_id = interface.id
            gpon.interface_name = interface.name
            return gpon
    return None


def collect_cycle(device: DeviceClient, logger: logging.Logger | None = None) -> CycleResult:
    """Run one fetch, parse and merge pass against the gateway.

    Any fetch or parse error propagates; there is no partial result.
    """
    logger = logger or logging.getLogger(__name__)
    stats = device.fetch(pages.STATS_PAGE)
    status = device.fetch(pages.STATUS_PAGE)
    gpon_page = device.fetch(pages.GPON_PAGE)

    interfaces = parse_interfaces(stats, status)
    gpon = attach_gpon(interfaces, parse_gpon_status(gpon_page))
    if gpon is None:
        logger.debug("No %s interface reported; dropping GPON metrics.", GPON_INTERFACE)

    radios = discover_radios(interfaces)
    signal_pages = {radio: device.fetch_wlan_status(radio) for radio in radios}
    traffic_pages = {radio: device.fetch_wlan_info(radio) for radio in radios}
    clients = parse_wireless(signal_pages, traffic_pages)

    return CycleResult(interfaces=interfaces, gpon=gpon, clients=clients, radios=radios)


class ZhoneCollector:
    """Prometheus collector that scrapes the gateway on every collect call."""

    def __init__(
        self,
        config: DeviceConfig,
        client_factory: Callable[[DeviceConfig], DeviceClient] = DeviceClient,
    ) -> None:
        self.config = config
        self.client_factory = client_factory
        self.logger = logging.getLogger(self.__class__.__name__)

    def describe(self) -> Iterator[GaugeMetricFamily]:
        for spec in ALL_METRICS:
            yield spec.family()

    def collect(self) -> Iterator[GaugeMetricFamily]:
        start = time.monotonic()
        with self.client_factory(self.config) as device:
            result = collect_cycle(device, self.logger)
        self.logger.debug(
            "Collected %s interfaces and %s wireless clients (radios %s) in %.2fs",
            len(result.interfaces),
            len(result.clients),
            result.radios,
            time.monotonic() - start,
        )
        yield from self.families(result)

    def families(self, result: CycleResult) -> Iterator[GaugeMetricFamily]:
        instance = self.config.host
        yield from build_families(
            INTERFACE_METRICS,
            result.interfaces,
            lambda record: [instance, record.id, record.name],
        )
        yield from build_families(
            GPON_METRICS,
            [result.gpon] if result.gpon is not None else [],
            lambda record: [instance, record.interface_id, record.interface_name],
        )
        yield from build_families(
            WIFI_METRICS,
            result.clients,
            lambda record: [instance, record.interface, record.hardware_address],
        )
