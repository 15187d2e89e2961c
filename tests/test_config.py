"""Tests for configuration loading."""
from __future__ import annotations

import pytest

from zhone_exporter.config import (
    DEFAULT_LISTEN,
    ServerConfig,
    apply_overrides,
    load_config,
)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "exporter.cfg"
    path.write_text(
        "[device]\n"
        "host = 10.0.0.1\n"
        "username = admin\n"
        "password = hunter2\n"
        "timeout_s = 4.5\n"
        "\n"
        "[server]\n"
        "listen_address = 127.0.0.1:9100\n",
        encoding="utf-8",
    )
    return path


class TestLoadConfig:
    def test_defaults_without_file(self):
        config = load_config(None, host="192.168.1.1")
        assert config.device.host == "192.168.1.1"
        assert config.device.username == "user"
        assert config.device.password == "user"
        assert config.device.timeout_s == 10.0
        assert config.server.listen_address == DEFAULT_LISTEN

    def test_reads_file(self, config_file):
        config = load_config(config_file)
        assert config.device.host == "10.0.0.1"
        assert config.device.username == "admin"
        assert config.device.password == "hunter2"
        assert config.device.timeout_s == 4.5
        assert config.server.listen_address == "127.0.0.1:9100"

    def test_host_argument_wins(self, config_file):
        assert load_config(config_file, host="10.0.0.2").device.host == "10.0.0.2"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.cfg", host="x")

    def test_missing_host(self):
        with pytest.raises(ValueError):
            load_config(None)


def test_apply_overrides(config_file):
    config = apply_overrides(
        load_config(config_file),
        username="root",
        listen_address=":2113",
        timeout_s=1.0,
    )
    assert config.device.username == "root"
    assert config.device.password == "hunter2"
    assert config.device.timeout_s == 1.0
    assert config.server.listen_address == ":2113"


class TestServerBind:
    @pytest.mark.parametrize(
        ("address", "expected"),
        [
            (":2112", ("", 2112)),
            ("0.0.0.0:9100", ("0.0.0.0", 9100)),
        ],
    )
    def test_bind(self, address, expected):
        assert ServerConfig(listen_address=address).bind == expected

    @pytest.mark.parametrize("address", ["[::]:2112", "[::1]:8080", "::1:8080"])
    def test_rejects_ipv6(self, address):
        with pytest.raises(ValueError, match="IPv6"):
            ServerConfig(listen_address=address).bind

    def test_invalid(self):
        with pytest.raises(ValueError):
            ServerConfig(listen_address="localhost").bind
