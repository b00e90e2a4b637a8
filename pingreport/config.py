"""Runtime settings for pingreport, read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_ORDERS_DIR = "/var/lib/pingreport/orders"
DEFAULT_OUTPUT_DIR = "/var/lib/pingreport/output"


@dataclass(frozen=True)
class Settings:
    """Directory locations consumed by the report.

    Environment Variables:
        PINGREPORT_ORDERS_DIR: Directory holding one file per order.
                               Default is /var/lib/pingreport/orders.
        PINGREPORT_OUTPUT_DIR: Directory holding <order id>/last_result files.
                               Default is /var/lib/pingreport/output.
    """

    orders_dir: Path
    output_dir: Path

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        if environ is None:
            environ = os.environ
        return cls(
            orders_dir=Path(environ.get("PINGREPORT_ORDERS_DIR") or DEFAULT_ORDERS_DIR),
            output_dir=Path(environ.get("PINGREPORT_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR),
        )
