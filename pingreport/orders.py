"""Order loader: reads order records and derives their sort keys."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from pingreport.models import Order

logger = logging.getLogger(__name__)

IPV6_SHAPE = re.compile(r"[0-9A-Fa-f:]+")
IPV4_SHAPE = re.compile(r"[0-9]{1,3}(?:\.[0-9]{1,3}){3}")

# Sorts after IPv4 keys; lowercase names and the "a." IPv6 prefix sort after it
HOSTLESS_PREFIX = "ZZZ"


INT_TAG = "tag:yaml.org,2002:int"
FLOAT_TAG = "tag:yaml.org,2002:float"


class RecordLoader(yaml.SafeLoader):
    """SafeLoader without YAML 1.1 base-60 numbers.

    Plain ``2001:0:0:0:0:0:0:1`` would otherwise load as an integer; here it
    stays a string like any other colon-separated scalar.
    """


RecordLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (INT_TAG, FLOAT_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
RecordLoader.add_implicit_resolver(
    INT_TAG,
    re.compile(
        r"""^(?:[-+]?0b[0-1_]+
        |[-+]?0[0-7_]+
        |[-+]?(?:0|[1-9][0-9_]*)
        |[-+]?0x[0-9a-fA-F_]+)$""",
        re.X,
    ),
    list("-+0123456789"),
)
RecordLoader.add_implicit_resolver(
    FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+][0-9]+)?
        |\.[0-9][0-9_]*(?:[eE][-+][0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+0123456789."),
)


class OrdersDirectoryError(OSError):
    """Raised when the orders directory cannot be listed."""


class RecordError(ValueError):
    """Raised when a record parses but does not have the expected structure."""


@dataclass
class OrderSet:
    """Loaded orders keyed by id, plus report-wide facts gathered while loading."""

    orders: dict[str, Order] = field(default_factory=dict)
    has_ipv6: bool = False


def is_ipv6_shape(host: str) -> bool:
    """Return True if host looks like an IPv6 literal (hex digits and colons)."""
    return ":" in host and IPV6_SHAPE.fullmatch(host) is not None


def sortable_ip(host: str) -> str:
    """Transform a host into a string whose lexicographic order is numeric order (pure function).

    - IPv6 (colon-hex shape): every hextet zero-padded to 4 digits, prefixed
      with "a." so that all IPv6 addresses sort after all IPv4 addresses.
    - IPv4 (dotted quad): every octet zero-padded to 3 digits.
    - Anything else (hostnames): returned unchanged.

    Examples:
        >>> sortable_ip("10.0.0.1")
        '010.000.000.001'
        >>> sortable_ip("2001:db8:0:0:0:0:0:1")
        'a.2001:0db8:0000:0000:0000:0000:0000:0001'
        >>> sortable_ip("example.com")
        'example.com'
    """
    if is_ipv6_shape(host):
        return "a." + ":".join(hextet.rjust(4, "0") for hextet in host.split(":"))
    if IPV4_SHAPE.fullmatch(host):
        return ".".join(octet.rjust(3, "0") for octet in host.split("."))
    return host


def build_sort_key(order_id: str, probe, step, host: str | None) -> str:
    """Build the key ordering orders by host, then probe, step and id."""
    prefix = sortable_ip(host) if host is not None else HOSTLESS_PREFIX
    parts = [prefix, probe, step, order_id]
    return ":".join("" if part is None else str(part) for part in parts)


def probe_host(record: dict, probe: str | None) -> str | None:
    """Look up ``record[probe]["host"]``; None if any level is missing."""
    if probe is None:
        return None
    section = record.get(probe)
    if not isinstance(section, dict):
        return None
    host = section.get("host")
    if host is None:
        return None
    return str(host)


def read_record(path: Path) -> dict:
    """Parse a YAML (or JSON) file into a mapping.

    Raises:
        OSError, UnicodeDecodeError: the file could not be read
        yaml.YAMLError: the content is not valid YAML
        RecordError: the top level is not a mapping
    """
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.load(handle, Loader=RecordLoader)
    if not isinstance(data, dict):
        raise RecordError(f"top level is {type(data).__name__}, expected a mapping")
    return data


def load_order(path: Path) -> Order | None:
    """Load one order file, returning None (with a warning) if it is unusable."""
    try:
        record = read_record(path)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, RecordError) as e:
        logger.warning("Skipping unparsable order file %s: %s", path, e)
        return None

    user = record.get("user")
    if user is None or str(user) == "":
        logger.warning("Skipping order file %s: no user", path)
        return None

    order_id = path.name
    probe = record.get("probe")
    probe = None if probe is None else str(probe)
    step = record.get("step")
    host = probe_host(record, probe)

    return Order(
        id=order_id,
        user=str(user),
        probe=probe,
        step=step,
        pings=record.get("pings"),
        probe_host=host,
        sort_key=build_sort_key(order_id, probe, step, host),
        record=record,
    )


def load_orders(orders_dir: Path) -> OrderSet:
    """Load every regular file in orders_dir as an order.

    Unparsable or invalid records are skipped with a warning; they never
    abort the run.

    Raises:
        OrdersDirectoryError: orders_dir cannot be listed
    """
    orders_dir = Path(orders_dir)
    try:
        entries = sorted(orders_dir.iterdir())
    except OSError as e:
        raise OrdersDirectoryError(
            e.errno, f"cannot read orders directory: {e.strerror}", str(orders_dir)
        ) from e

    order_set = OrderSet()
    for path in entries:
        if not path.is_file():
            continue
        order = load_order(path)
        if order is None:
            continue
        order_set.orders[order.id] = order
        if order.probe_host is not None and is_ipv6_shape(order.probe_host):
            order_set.has_ipv6 = True

    logger.info("Loaded %d orders from %s", len(order_set.orders), orders_dir)
    return order_set
