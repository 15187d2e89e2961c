"""Parsers for the interface status and interface statistics pages."""
from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup, Tag

from zhone_exporter.errors import LabelFormatError, PatternNotFound, ShapeMismatch
from zhone_exporter.extract import (
    RecordLayout,
    extract_payload,
    number,
    split_fields,
    split_records,
    to_float,
)
from zhone_exporter.models import InterfaceRecord

logger = logging.getLogger(__name__)

STATUS_VARIABLE = "portlistAll"
LABEL_RE = re.compile(r"^(.+) \((.+)\)$")

COUNTER_LAYOUT = RecordLayout(
    "interface_counters",
    (
        number("rx_bytes"),
        number("rx_frames"),
        number("rx_errors"),
        number("rx_drops"),
        number("tx_bytes"),
        number("tx_frames"),
        number("tx_errors"),
        number("tx_drops"),
    ),
)


def _parse_speed(token: str) -> float:
    if token.strip() == "-":
        return 0.0
    return to_float(token, "link_speed")


def parse_status_payload(payload: str) -> dict[str, tuple[float, float]]:
    """Map interface IDs to ``(status, speed)`` from a ``portlistAll`` payload.

    The payload looks like ``eth0|eth1|/...#hdr|Up|Down/hdr|1000|-``: the ID
    list carries a trailing empty token and both value lists lead with a
    header token.
    """
    sections = split_records(payload, "#")
    if len(sections) < 2:
        raise ShapeMismatch(f"Interface status payload has no value section: {payload!r}")
    ids = split_fields(split_records(sections[0], "/")[0], "|")[:-1]
    value_lists = split_records(sections[1], "/")
    if len(value_lists) < 2:
        raise ShapeMismatch(f"Interface status payload has no speed list: {payload!r}")
    states = split_fields(value_lists[0], "|")[1:]
    speeds = split_fields(value_lists[1], "|")[1:]
    if not len(ids) == len(states) == len(speeds):
        raise ShapeMismatch(
            f"Interface status lists differ in length: "
            f"{len(ids)} ids, {len(states)} states, {len(speeds)} speeds"
        )

    status: dict[str, tuple[float, float]] = {}
    for interface_id, state, speed in zip(ids, states, speeds):
        status[interface_id] = (1.0 if state.strip() == "Up" else 0.0, _parse_speed(speed))
    return status


def parse_interface_status(document: BeautifulSoup) -> dict[str, tuple[float, float]]:
    return parse_status_payload(extract_payload(str(document), STATUS_VARIABLE))


def parse_label(label: str) -> tuple[str, str]:
    """Split a ``Name (ID)`` cell into ``(name, id)``."""
    match = LABEL_RE.match(label.strip())
    if match is None:
        raise LabelFormatError(label)
    return match.group(1), match.group(2)


def _data_cells(row: Tag) -> list[str]:
    return [
        cell.get_text(strip=True)
        for cell in row.find_all("td")
        if cell.get("valign") != "middle"
    ]


def parse_interface_rows(document: BeautifulSoup) -> list[InterfaceRecord]:
    """Parse the counter rows of ``statsifc.html`` without status data."""
    table = document.find(id="table")
    if table is None:
        raise PatternNotFound("Interface statistics table not found")

    records: list[InterfaceRecord] = []
    seen: set[str] = set()
    for body in table.find_all("tbody")[1:3]:
        for row in body.find_all("tr"):
            cells = _data_cells(row)
            if not cells:
                continue
            name, interface_id = parse_label(cells[0])
            if interface_id in seen:
                raise ShapeMismatch(f"Duplicate interface id {interface_id}")
            seen.add(interface_id)
            counters = cells[1:]
            if len(counters) != len(COUNTER_LAYOUT.fields):
                raise ShapeMismatch(
                    f"Interface {interface_id} has {len(counters)} counters, "
                    f"expected {len(COUNTER_LAYOUT.fields)}"
                )
            values = COUNTER_LAYOUT.convert(counters, interface_id)
            records.append(InterfaceRecord(id=interface_id, name=name, **values))
    return records


def join_status(
    records: list[InterfaceRecord], status: dict[str, tuple[float, float]]
) -> list[InterfaceRecord]:
    for record in records:
        if record.id not in status:
            logger.debug("No status entry for interface %s", record.id)
            continue
        record.status, record.link_speed = status[record.id]
    return records


def parse_interfaces(
    stats_document: BeautifulSoup, status_document: BeautifulSoup
) -> list[InterfaceRecord]:
    status = parse_interface_status(status_document)
    return join_status(parse_interface_rows(stats_document), status)
