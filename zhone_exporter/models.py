from __future__ import annotations

from dataclasses import dataclass


@dataclass
class InterfaceRecord:
    id: str
    name: str
    status: float = 0.0
    link_speed: float = 0.0
    rx_bytes: float = 0.0
    rx_frames: float = 0.0
    rx_errors: float = 0.0
    rx_drops: float = 0.0
    tx_bytes: float = 0.0
    tx_frames: float = 0.0
    tx_errors: float = 0.0
    tx_drops: float = 0.0


@dataclass
class GponRecord:
    status: float = 0.0
    rx_power_dbm: float = 0.0
    tx_power_dbm: float = 0.0
    up_transitions: float = 0.0
    interface_id: str | None = None
    interface_name: str | None = None


@dataclass(frozen=True)
class SignalSample:
    """Per-client signal quality as reported by the wireless status page."""

    radio_id: str
    hardware_address: str
    rssi: float
    noise: float
    snr: float
    quality: float


@dataclass(frozen=True)
class TrafficSample:
    """Per-client traffic counters as reported by the wireless info page."""

    radio_id: str
    hardware_address: str
    associated_seconds: float
    tx_frames: float
    tx_unicast_frames: float
    tx_errors: float
    tx_retries: float
    tx_retry_rate: float
    rx_unicast_frames: float
    rx_broadcast_frames: float
    tx_rate: float
    rx_rate: float


@dataclass
class WifiClientRecord:
    radio_id: str
    hardware_address: str
    rssi: float = 0.0
    noise: float = 0.0
    snr: float = 0.0
    quality: float = 0.0
    associated_seconds: float = 0.0
    tx_frames: float = 0.0
    tx_unicast_frames: float = 0.0
    tx_errors: float = 0.0
    tx_retries: float = 0.0
    tx_retry_rate: float = 0.0
    rx_unicast_frames: float = 0.0
    rx_broadcast_frames: float = 0.0
    tx_rate: float = 0.0
    rx_rate: float = 0.0

    @property
    def interface(self) -> str:
        return f"wl{self.radio_id}"
