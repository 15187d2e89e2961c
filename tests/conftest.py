"""Pytest configuration and shared fixtures."""
from __future__ import annotations

from bs4 import BeautifulSoup
import pytest

from zhone_exporter.config import DeviceConfig

STATUS_HTML = """<html><head><script>
var portlistAll = 'eth0|eth1|wl0|wl1|/GPON|LAN1|WLAN|WLAN5#Status|Up|Down|Up|Up/Speed|1000|-|300|866';
</script></head><body></body></html>"""

STATS_HTML = """<html><body>
<table id="table">
<tbody><tr><td>Interface</td><td>Bytes</td></tr></tbody>
<tbody>
<tr><td valign="middle" rowspan="2">LAN</td><td>Bridge (br0)</td>
<td>100</td><td>10</td><td>0</td><td>1</td><td>200</td><td>20</td><td>0</td><td>2</td></tr>
<tr><td>Wireless 2.4GHz (wl0)</td>
<td>300</td><td>30</td><td>1</td><td>0</td><td>400</td><td>40</td><td>2</td><td>0</td></tr>
<tr><td>Wireless 5GHz (wl1)</td>
<td>350</td><td>35</td><td>0</td><td>0</td><td>450</td><td>45</td><td>0</td><td>0</td></tr>
</tbody>
<tbody>
<tr><td>GPON (eth0)</td>
<td>5000</td><td>500</td><td>3</td><td>4</td><td>6000</td><td>600</td><td>5</td><td>6</td></tr>
<tr><td>LAN 1 (eth1)</td>
<td>0</td><td>0</td><td>0</td><td>0</td><td>0</td><td>0</td><td>0</td><td>0</td></tr>
</tbody>
</table>
</body></html>"""

GPON_HTML = """<html><body>
<table id="table1">
<tbody><tr><td class="hd">GPON Status</td></tr></tbody>
<tbody>
<tr><td class="hd">&nbsp;</td><td>Current Link State</td><td>Up</td></tr>
<tr><td>Link Up Transitions</td><td>3</td></tr>
<tr><td>Receive Level</td><td>-18.5 dBm</td></tr>
<tr><td>Transmit Power</td><td>  2.3dBm</td></tr>
<tr><td>Serial Number</td><td>ZHNT12345678</td></tr>
</tbody>
</table>
</body></html>"""


def signal_html(records: str) -> str:
    return f"""<html><body>
<table id="clientTable">
<tbody><tr><td>MAC</td><td>RSSI</td></tr></tbody>
<tbody><script>var wlClients = '{records}';</script></tbody>
</table>
</body></html>"""


def traffic_html(records: str) -> str:
    return f"""<html><body><script>
var wlClients = '{records}';
</script></body></html>"""


def soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class FakeDevice:
    """Stands in for DeviceClient, serving canned pages per path and radio."""

    def __init__(self, pages: dict[str, str], signal: dict[str, str], traffic: dict[str, str]) -> None:
        self.pages = pages
        self.signal = signal
        self.traffic = traffic
        self.requests: list[tuple[str, str | None]] = []
        self.closed = False

    def __enter__(self) -> FakeDevice:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed = True

    def fetch(self, path: str, params=None) -> BeautifulSoup:
        self.requests.append((path, None))
        return soup(self.pages[path])

    def fetch_wlan_status(self, radio_id: str) -> BeautifulSoup:
        self.requests.append(("zhnwlstatus.cmd", radio_id))
        return soup(signal_html(self.signal.get(radio_id, "")))

    def fetch_wlan_info(self, radio_id: str) -> BeautifulSoup:
        self.requests.append(("zhnwlinfo.cmd", radio_id))
        return soup(traffic_html(self.traffic.get(radio_id, "")))


@pytest.fixture
def device_config():
    return DeviceConfig(host="192.168.1.1", username="admin", password="secret", timeout_s=2.0)


@pytest.fixture
def fake_device():
    return FakeDevice(
        pages={
            "statsifc.html": STATS_HTML,
            "zhnethernetstatus.html": STATUS_HTML,
            "zhngponstatus.html": GPON_HTML,
        },
        signal={
            "0": "1|AA:BB:CC:DD:EE:01|-45|-90|45|100",
            "1": "1|aa:bb:cc:dd:ee:02|-60|-92|32|80",
        },
        traffic={
            "0": "aa:bb:cc:dd:ee:01|3600|1000|900|5|20|2|800|50|144|130",
            "1": "aa:bb:cc:dd:ee:03|60|10|9|0|1|10|8|5|866|780",
        },
    )
