"""Result loader: attaches the last persisted measurement to each order."""

import dataclasses
import logging
from pathlib import Path

import yaml

from pingreport.models import Order, Result
from pingreport.orders import RecordError, read_record

logger = logging.getLogger(__name__)

RESULT_FILENAME = "last_result"


def result_path(output_dir: Path, order_id: str) -> Path:
    return Path(output_dir) / order_id / RESULT_FILENAME


def parse_result(record: dict) -> Result:
    """Build a Result from a parsed record.

    Raises:
        RecordError: ``updated`` is missing or a field is not numeric
    """
    if record.get("updated") is None:
        raise RecordError("no updated timestamp")

    try:
        updated = float(record["updated"])
        median = record.get("median")
        median = None if median is None else float(median)
        loss = record.get("loss")
        loss = None if loss is None else int(loss)
    except (TypeError, ValueError) as e:
        raise RecordError(f"bad field value: {e}") from e

    return Result(updated=updated, median=median, loss=loss)


def load_result(path: Path) -> Result | None:
    """Read one result file.

    Returns None silently when the file does not exist, and None with a
    warning when it exists but cannot be parsed.
    """
    try:
        record = read_record(path)
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, yaml.YAMLError, RecordError) as e:
        logger.warning("Ignoring unparsable result file %s: %s", path, e)
        return None

    try:
        return parse_result(record)
    except RecordError as e:
        logger.warning("Ignoring invalid result file %s: %s", path, e)
        return None


def attach_results(orders: dict[str, Order], output_dir: Path) -> dict[str, Order]:
    """Return a new mapping where every order carries its last result, if any."""
    merged = {}
    found = 0
    for order_id, order in orders.items():
        result = load_result(result_path(output_dir, order_id))
        if result is not None:
            found += 1
        merged[order_id] = dataclasses.replace(order, result=result)

    logger.info("Found results for %d of %d orders", found, len(orders))
    return merged
