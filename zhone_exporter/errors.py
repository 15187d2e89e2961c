from __future__ import annotations


class ScrapeError(Exception):
    """Base class for anything that aborts a collection cycle."""


class PatternNotFound(ScrapeError):
    pass


class ShapeMismatch(ScrapeError):
    pass


class MalformedField(ScrapeError):
    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"Malformed value for {field}: {value!r}")
        self.field = field
        self.value = value


class InvalidAddress(MalformedField):
    def __init__(self, value: str) -> None:
        super().__init__("hardware address", value)


class LabelFormatError(ScrapeError):
    def __init__(self, label: str) -> None:
        super().__init__(f"Interface label does not match 'Name (ID)': {label!r}")
        self.label = label


class FetchError(ScrapeError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
