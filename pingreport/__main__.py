"""Entry point for pingreport."""

import logging
import sys

from pingreport.config import Settings
from pingreport.logging_config import configure_logging
from pingreport.orders import OrdersDirectoryError, load_orders
from pingreport.report import print_report
from pingreport.results import attach_results
from pingreport.terminal import Decorations, is_interactive

logger = logging.getLogger(__name__)


def run(settings: Settings, stream=None) -> None:
    """Load orders and results and print the report.

    Raises:
        OrdersDirectoryError: the orders directory cannot be read
    """
    if stream is None:
        stream = sys.stdout

    order_set = load_orders(settings.orders_dir)
    orders = attach_results(order_set.orders, settings.output_dir)
    decorations = Decorations.for_terminal(is_interactive(stream))
    print_report(orders.values(), order_set.has_ipv6, decorations, stream=stream)


def main():
    """Main entry point for the pingreport command."""
    configure_logging()
    settings = Settings.from_env()
    logger.debug(
        "Using orders_dir=%s, output_dir=%s", settings.orders_dir, settings.output_dir
    )

    try:
        run(settings)
    except OrdersDirectoryError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
