"""Data models for pingreport orders and their measurement results."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Result:
    """Most recent measurement snapshot for one order."""

    updated: float  # epoch seconds
    median: float | None  # seconds, None if every probe of the cycle failed
    loss: int | None  # count of lost probes, not a fraction


@dataclass
class Order:
    """A configured recurring latency-measurement job.

    ``record`` keeps the whole parsed order file so that probe-specific
    sections (looked up by the ``probe`` value) stay available without a
    schema per probe type.
    """

    id: str
    user: str
    probe: str | None
    step: Any
    pings: Any
    probe_host: str | None
    sort_key: str
    record: dict = field(default_factory=dict, repr=False)
    result: Result | None = None

    @property
    def probe_section(self) -> dict:
        """Return the nested section named after the probe, or an empty dict."""
        if self.probe is None:
            return {}
        section = self.record.get(self.probe)
        return section if isinstance(section, dict) else {}
