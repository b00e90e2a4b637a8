"""Grouping, sorting and rendering of the per-user status report."""

import logging
import math
import sys
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, TextIO

from pingreport.models import Order
from pingreport.probes import annotate
from pingreport.terminal import Decorations

logger = logging.getLogger(__name__)

PLACEHOLDER = "-"
COLUMN_GAP = "  "
HOST_WIDTH = 15
HOST_WIDTH_IPV6 = 39  # full-length IPv6 literal
ORDER_ID_LENGTH = 8

GREEN = "green"
YELLOW = "yellow"
RED = "red"


@dataclass(frozen=True)
class Column:
    title: str
    width: int
    right: bool = False

    def pad(self, text: str) -> str:
        return text.rjust(self.width) if self.right else text.ljust(self.width)


@dataclass(frozen=True)
class ReportLayout:
    """Column layout of the report; only the host column width varies."""

    columns: tuple[Column, ...]

    @classmethod
    def create(cls, has_ipv6: bool) -> "ReportLayout":
        host_width = HOST_WIDTH_IPV6 if has_ipv6 else HOST_WIDTH
        return cls(
            columns=(
                Column("order", ORDER_ID_LENGTH),
                Column("step", 6, right=True),
                Column("pings", 5, right=True),
                Column("probe", 10),
                Column("host", host_width),
                Column("updated", 8, right=True),
                Column("median rtt", 10, right=True),
                Column("loss", 5, right=True),
            )
        )

    def header(self) -> str:
        return COLUMN_GAP.join(column.pad(column.title) for column in self.columns)

    def separator(self) -> str:
        return COLUMN_GAP.join("-" * column.width for column in self.columns)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def group_orders(orders: Iterable[Order]) -> list[tuple[str, list[Order]]]:
    """Partition orders by user; users ascending, orders by sort key within a user."""
    groups = defaultdict(list)
    for order in orders:
        groups[order.user].append(order)
    return [
        (user, sorted(groups[user], key=lambda order: order.sort_key))
        for user in sorted(groups)
    ]


def format_age(seconds: float) -> str:
    """Format an elapsed time with the coarsest unit that keeps it readable.

    Examples:
        >>> format_age(30)
        '30 s'
        >>> format_age(600)
        '10 min'
        >>> format_age(3 * 86400)
        '3 d'
    """
    seconds = max(0, int(seconds))
    if seconds < 120:
        return f"{seconds} s"
    if seconds < 7200:
        return f"{seconds // 60} min"
    if seconds < 48 * 3600:
        return f"{seconds // 3600} h"
    return f"{seconds // 86400} d"


def is_stale(elapsed: float, step) -> bool:
    """Return True if more than one measurement interval passed since the update."""
    try:
        return elapsed > float(step)
    except (TypeError, ValueError):
        return False


def format_median(median: float | None) -> str:
    if median is None:
        return PLACEHOLDER
    return f"{round_half_up(median * 1000)} ms"


def loss_color(loss: int, pings: int) -> str:
    """Classify a loss count out of pings as green, yellow or red.

    A single lost probe counts as noise once more than two probes were sent.
    """
    if loss == 0 or (pings > 2 and loss == 1):
        return GREEN
    if loss == pings:
        return RED
    return YELLOW


def format_loss(loss: int, pings: int) -> str:
    return f"{round_half_up(loss * 100 / pings)}%"


def _positive_int(value) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


class ReportRenderer:
    """Renders orders into report lines using a fixed layout and decorations."""

    def __init__(self, layout: ReportLayout, decorations: Decorations, now: float):
        self.layout = layout
        self.decorations = decorations
        self.now = now

    def render_row(self, order: Order) -> str:
        columns = self.layout.columns
        result = order.result

        cells = [
            columns[0].pad(order.id[:ORDER_ID_LENGTH]),
            columns[1].pad(f"{order.step} s" if order.step is not None else PLACEHOLDER),
            columns[2].pad(str(order.pings) if order.pings is not None else PLACEHOLDER),
            columns[3].pad(str(order.probe) if order.probe is not None else PLACEHOLDER),
            columns[4].pad(order.probe_host if order.probe_host is not None else PLACEHOLDER),
            self._updated_cell(order, columns[5]),
            columns[6].pad(format_median(result.median) if result is not None else PLACEHOLDER),
            self._loss_cell(order, columns[7]),
        ]
        line = COLUMN_GAP.join(cells)

        info = annotate(order)
        if info:
            line += f" ({info})"
        return line

    def _updated_cell(self, order: Order, column: Column) -> str:
        if order.result is None:
            return column.pad(PLACEHOLDER)
        elapsed = self.now - order.result.updated
        cell = column.pad(format_age(elapsed))
        if is_stale(elapsed, order.step):
            return self.decorations.red(cell)
        return cell

    def _loss_cell(self, order: Order, column: Column) -> str:
        pings = _positive_int(order.pings)
        if order.result is None or order.result.loss is None or pings is None:
            return column.pad(PLACEHOLDER)
        loss = order.result.loss
        decorate = getattr(self.decorations, loss_color(loss, pings))
        return decorate(column.pad(format_loss(loss, pings)))

    def render_group(self, user: str, orders: list[Order]) -> list[str]:
        bold = self.decorations.bold
        lines = [
            bold(f"user {user}"),
            "",
            bold(self.layout.header()),
            self.layout.separator(),
        ]
        lines.extend(self.render_row(order) for order in orders)
        return lines


def render_report(
    orders: Iterable[Order],
    has_ipv6: bool,
    decorations: Decorations | None = None,
    now: float | None = None,
) -> list[str]:
    """Render the whole report as a list of lines (without newlines)."""
    if decorations is None:
        decorations = Decorations()
    if now is None:
        now = time.time()

    renderer = ReportRenderer(ReportLayout.create(has_ipv6), decorations, now)
    lines = []
    for index, (user, user_orders) in enumerate(group_orders(orders)):
        if index > 0:
            lines.append("")
        lines.extend(renderer.render_group(user, user_orders))
    return lines


def print_report(
    orders: Iterable[Order],
    has_ipv6: bool,
    decorations: Decorations,
    stream: TextIO | None = None,
    now: float | None = None,
) -> None:
    if stream is None:
        stream = sys.stdout
    lines = render_report(orders, has_ipv6, decorations, now)
    logger.debug("Rendering %d report lines", len(lines))
    for line in lines:
        print(line, file=stream)
