"""Wireless client parsing.

Client data for each radio is split over two pages: ``zhnwlstatus.cmd``
carries signal quality, ``zhnwlinfo.cmd`` carries traffic counters. Both
embed a ``wlClients`` variable of ``#``-separated records with
``|``-separated fields. The two are parsed independently and merged on the
client's hardware address.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging

from bs4 import BeautifulSoup

from zhone_exporter.errors import PatternNotFound
from zhone_exporter.extract import RecordLayout, extract_payload, mac, number, skip, split_records
from zhone_exporter.models import SignalSample, TrafficSample, WifiClientRecord

logger = logging.getLogger(__name__)

CLIENTS_VARIABLE = "wlClients"

SIGNAL_LAYOUT = RecordLayout(
    "wifi_signal",
    (
        skip(),
        mac("hardware_address"),
        number("rssi"),
        number("noise"),
        number("snr"),
        number("quality"),
    ),
)

TRAFFIC_LAYOUT = RecordLayout(
    "wifi_traffic",
    (
        mac("hardware_address"),
        number("associated_seconds"),
        number("tx_frames"),
        number("tx_unicast_frames"),
        number("tx_errors"),
        number("tx_retries"),
        number("tx_retry_rate"),
        number("rx_unicast_frames"),
        number("rx_broadcast_frames"),
        number("tx_rate"),
        number("rx_rate"),
    ),
)

SIGNAL_FIELDS = ("rssi", "noise", "snr", "quality")
TRAFFIC_FIELDS = tuple(f.name for f in TRAFFIC_LAYOUT.fields[1:])


def _client_records(text: str) -> list[str]:
    try:
        payload = extract_payload(text, CLIENTS_VARIABLE)
    except PatternNotFound:
        return []
    if not payload:
        return []
    records = split_records(payload, "#")
    # a trailing separator leaves one empty token behind
    if records[-1] == "":
        records.pop()
    return records


def parse_signal_records(radio_id: str, text: str) -> list[SignalSample]:
    return [
        SignalSample(radio_id=radio_id, **SIGNAL_LAYOUT.parse(record))
        for record in _client_records(text)
    ]


def parse_traffic_records(radio_id: str, text: str) -> list[TrafficSample]:
    return [
        TrafficSample(radio_id=radio_id, **TRAFFIC_LAYOUT.parse(record))
        for record in _client_records(text)
    ]


def parse_signal_page(radio_id: str, document: BeautifulSoup) -> list[SignalSample]:
    """Parse one radio's ``zhnwlstatus.cmd`` page.

    The client list lives in the second body of ``#clientTable``; pages
    without that table are searched as a whole.
    """
    scope = document
    table = document.find(id="clientTable")
    if table is not None:
        bodies = table.find_all("tbody")
        if len(bodies) > 1:
            scope = bodies[1]
    return parse_signal_records(radio_id, str(scope))


def parse_traffic_page(radio_id: str, document: BeautifulSoup) -> list[TrafficSample]:
    return parse_traffic_records(radio_id, str(document))


def merge_clients(
    signal: Iterable[SignalSample], traffic: Iterable[TrafficSample]
) -> list[WifiClientRecord]:
    """Merge signal and traffic samples into one record per hardware address.

    Signal samples are applied first. Traffic samples then update the
    matching record or start a new one, leaving signal fields untouched.
    A client seen by only one page still produces a record.
    """
    clients: dict[str, WifiClientRecord] = {}
    for sample in signal:
        key = sample.hardware_address.lower()
        clients[key] = WifiClientRecord(
            radio_id=sample.radio_id,
            hardware_address=key,
            **{name: getattr(sample, name) for name in SIGNAL_FIELDS},
        )
    for sample in traffic:
        key = sample.hardware_address.lower()
        client = clients.get(key)
        if client is None:
            client = clients[key] = WifiClientRecord(
                radio_id=sample.radio_id, hardware_address=key
            )
        for name in TRAFFIC_FIELDS:
            setattr(client, name, getattr(sample, name))
    return list(clients.values())


def parse_wireless(
    signal_pages: Mapping[str, BeautifulSoup], traffic_pages: Mapping[str, BeautifulSoup]
) -> list[WifiClientRecord]:
    signal: list[SignalSample] = []
    for radio_id, document in signal_pages.items():
        signal.extend(parse_signal_page(radio_id, document))
    traffic: list[TrafficSample] = []
    for radio_id, document in traffic_pages.items():
        traffic.extend(parse_traffic_page(radio_id, document))
    logger.debug(
        "Parsed %s signal and %s traffic samples across %s radios",
        len(signal),
        len(traffic),
        len(set(signal_pages) | set(traffic_pages)),
    )
    return merge_clients(signal, traffic)
