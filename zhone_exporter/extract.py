"""Helpers for pulling delimited payloads out of the gateway's pages.

The web UI embeds most of its data as JavaScript string literals such as
``var wlClients = 'a|b|c#d|e|f';``. Nothing about the format is documented,
so every conversion here is strict and raises on the first surprise.
"""
from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, Callable

from zhone_exporter.errors import (
    InvalidAddress,
    MalformedField,
    PatternNotFound,
    ShapeMismatch,
)

_MAC_RE = re.compile(r"^[0-9a-fA-F]{2}([:\-])(?:[0-9a-fA-F]{2}\1){4}[0-9a-fA-F]{2}$")


def extract_payload(text: str, variable: str) -> str:
    """Return the string literal assigned to ``var <variable>``."""
    pattern = re.compile(r"var\s+" + re.escape(variable) + r"\s*=\s*'(.*?)'\s*;?")
    match = pattern.search(text)
    if match is None:
        raise PatternNotFound(f"Payload variable {variable!r} not found")
    return match.group(1)


def split_records(payload: str, separator: str) -> list[str]:
    return payload.split(separator)


def split_fields(record: str, separator: str) -> list[str]:
    return record.split(separator)


def to_float(value: str, field: str = "value") -> float:
    try:
        return float(value.strip())
    except ValueError:
        raise MalformedField(field, value) from None


def parse_mac(value: str) -> str:
    """Normalise a MAC address to lower-case colon form."""
    candidate = value.strip()
    if not _MAC_RE.match(candidate):
        raise InvalidAddress(value)
    return candidate.replace("-", ":").lower()


@dataclass(frozen=True)
class Field:
    name: str | None
    convert: Callable[[str, str], Any] = to_float


def skip() -> Field:
    return Field(None)


def number(name: str) -> Field:
    return Field(name, to_float)


def mac(name: str) -> Field:
    return Field(name, lambda value, _field: parse_mac(value))


@dataclass(frozen=True)
class RecordLayout:
    """Ordered field layout for one kind of delimited record.

    Firmware changes that move columns around only need the layout edited.
    Trailing fields beyond the layout are ignored.
    """

    name: str
    fields: tuple[Field, ...]

    def parse(self, record: str, separator: str = "|") -> dict[str, Any]:
        return self.convert(split_fields(record, separator), record)

    def convert(self, values: list[str], context: str | None = None) -> dict[str, Any]:
        """Convert positional values; ``context`` names the record in errors."""
        prefix = self.name if context is None else f"{self.name}[{context}]"
        if len(values) < len(self.fields):
            raise ShapeMismatch(
                f"{self.name} record has {len(values)} fields, "
                f"expected {len(self.fields)}: {values!r}"
            )
        parsed: dict[str, Any] = {}
        for layout_field, raw in zip(self.fields, values):
            if layout_field.name is None:
                continue
            parsed[layout_field.name] = layout_field.convert(raw, f"{prefix}.{layout_field.name}")
        return parsed
