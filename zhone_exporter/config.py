from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import configparser

DEFAULT_USERNAME = "user"
DEFAULT_PASSWORD = "user"
DEFAULT_LISTEN = ":2112"
DEFAULT_TIMEOUT_S = 10.0


@dataclass(frozen=True)
class DeviceConfig:
    host: str
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    timeout_s: float = DEFAULT_TIMEOUT_S


@dataclass(frozen=True)
class ServerConfig:
    listen_address: str = DEFAULT_LISTEN

    @property
    def bind(self) -> tuple[str, int]:
        """Split ``host:port`` (host may be empty) into a bind tuple.

        Only IPv4 hosts are accepted; the WSGI server binds an IPv4 socket.
        """
        host, _, port = self.listen_address.rpartition(":")
        if not port.isdigit():
            raise ValueError(f"Invalid listen address: {self.listen_address!r}")
        if ":" in host or host.startswith("["):
            raise ValueError(f"IPv6 listen addresses are not supported: {self.listen_address!r}")
        return host, int(port)


@dataclass(frozen=True)
class AppConfig:
    device: DeviceConfig
    server: ServerConfig


def _get_optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def load_config(path: str | Path | None, host: str | None = None) -> AppConfig:
    """Load settings from an optional CFG file.

    ``host`` overrides ``[device] host``; one of the two must be set.
    """
    parser = configparser.ConfigParser()
    if path is not None:
        read_files = parser.read(path)
        if not read_files:
            raise FileNotFoundError(f"Config file not found: {path}")

    host = host or _get_optional(parser.get("device", "host", fallback=None))
    if not host:
        raise ValueError("No device host configured")

    device = DeviceConfig(
        host=host,
        username=parser.get("device", "username", fallback=DEFAULT_USERNAME),
        password=parser.get("device", "password", fallback=DEFAULT_PASSWORD),
        timeout_s=parser.getfloat("device", "timeout_s", fallback=DEFAULT_TIMEOUT_S),
    )
    server = ServerConfig(
        listen_address=parser.get("server", "listen_address", fallback=DEFAULT_LISTEN),
    )
    return AppConfig(device=device, server=server)


def apply_overrides(
    config: AppConfig,
    username: str | None = None,
    password: str | None = None,
    listen_address: str | None = None,
    timeout_s: float | None = None,
) -> AppConfig:
    device = config.device
    if username is not None:
        device = replace(device, username=username)
    if password is not None:
        device = replace(device, password=password)
    if timeout_s is not None:
        device = replace(device, timeout_s=timeout_s)
    server = config.server
    if listen_address is not None:
        server = replace(server, listen_address=listen_address)
    return AppConfig(device=device, server=server)
