"""Probe-specific annotations shown after a report row."""

from typing import Callable, Protocol

from pingreport.models import Order


class ProbeAnnotator(Protocol):
    """Protocol for functions describing extra details of a probe section."""

    def __call__(self, section: dict) -> list[str]:
        """Return annotation items for the probe's configuration section."""
        ...


_annotators: dict[str, ProbeAnnotator] = {}


def register_annotator(probe: str) -> Callable[[ProbeAnnotator], ProbeAnnotator]:
    """Decorator registering an annotator for the given probe type."""

    def decorator(func: ProbeAnnotator) -> ProbeAnnotator:
        _annotators[probe] = func
        return func

    return decorator


def get_annotator(probe: str | None) -> ProbeAnnotator | None:
    if probe is None:
        return None
    return _annotators.get(probe)


def annotate(order: Order) -> str:
    """Return the comma-joined annotation for an order, or "" if there is none."""
    annotator = get_annotator(order.probe)
    if annotator is None:
        return ""
    return ", ".join(annotator(order.probe_section))


@register_annotator("fping")
def fping_annotation(section: dict) -> list[str]:
    items = []
    if section.get("interface"):
        items.append(str(section["interface"]))
    if section.get("source"):
        items.append(f"source={section['source']}")
    return items
