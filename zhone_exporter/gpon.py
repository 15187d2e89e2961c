"""Parser for the GPON optical status page (``zhngponstatus.html``)."""
from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from zhone_exporter.errors import PatternNotFound
from zhone_exporter.extract import to_float
from zhone_exporter.logging_utils import TRACE_LEVEL
from zhone_exporter.models import GponRecord

logger = logging.getLogger(__name__)

LINK_STATE = "Current Link State"
UP_TRANSITIONS = "Link Up Transitions"
RECEIVE_LEVEL = "Receive Level"
TRANSMIT_POWER = "Transmit Power"


def parse_power(value: str, field: str = "power") -> float:
    """Parse a ``-18.2 dBm`` style reading into a float."""
    return to_float(value.strip().strip("dBm").strip(), field)


def parse_gpon_status(document: BeautifulSoup) -> GponRecord:
    table = document.find(id="table1")
    if table is None:
        raise PatternNotFound("GPON status table not found")
    bodies = table.find_all("tbody")
    if len(bodies) < 2:
        raise PatternNotFound("GPON status table has no data section")

    gpon = GponRecord()
    for row in bodies[1].find_all("tr"):
        cells = [
            cell.get_text(strip=True)
            for cell in row.find_all("td")
            if "hd" not in (cell.get("class") or [])
        ]
        if len(cells) < 2:
            continue
        label, value = cells[0], cells[1]
        if label == LINK_STATE:
            gpon.status = 1.0 if value == "Up" else 0.0
        elif label == UP_TRANSITIONS:
            gpon.up_transitions = to_float(value, "up_transitions")
        elif label == RECEIVE_LEVEL:
            gpon.rx_power_dbm = parse_power(value, "rx_power")
        elif label == TRANSMIT_POWER:
            gpon.tx_power_dbm = parse_power(value, "tx_power")
        else:
            logger.log(TRACE_LEVEL, "Ignoring GPON field %r", label)
    return gpon
