from __future__ import annotations

import logging
from typing import Any

import requests
from bs4 import BeautifulSoup
from requests.auth import HTTPBasicAuth

from zhone_exporter.config import DeviceConfig
from zhone_exporter.errors import FetchError

STATS_PAGE = "statsifc.html"
STATUS_PAGE = "zhnethernetstatus.html"
GPON_PAGE = "zhngponstatus.html"
WLAN_STATUS_PAGE = "zhnwlstatus.cmd"
WLAN_INFO_PAGE = "zhnwlinfo.cmd"


class DeviceClient:
    """Fetches pages from the gateway's web UI for a single collection cycle."""

    def __init__(self, config: DeviceConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.session.auth = HTTPBasicAuth(config.username, config.password)
        self.logger = logging.getLogger(self.__class__.__name__)

    def __enter__(self) -> DeviceClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def url(self, path: str) -> str:
        return f"http://{self.config.host}/{path.lstrip('/')}"

    def fetch(self, path: str, params: dict[str, Any] | None = None) -> BeautifulSoup:
        url = self.url(path)
        self.logger.debug("Fetching %s %s", url, params or "")
        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout_s)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc
        return BeautifulSoup(response.text, "html.parser")

    def fetch_wlan_status(self, radio_id: str) -> BeautifulSoup:
        return self.fetch(WLAN_STATUS_PAGE, {"curRadio": radio_id})

    def fetch_wlan_info(self, radio_id: str) -> BeautifulSoup:
        return self.fetch(WLAN_INFO_PAGE, {"action": "view", "curRadio": radio_id})
