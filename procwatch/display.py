"""Terminal display of the latest monitor snapshot, one page per statistic."""

import argparse
import sys
import threading
import time
from enum import IntEnum

from rich.console import Console, Group
from rich.live import Live
from rich.table import Table
from rich.text import Text

from .messages import MonitorInfo
from .models import (
    CpuLoadModel,
    CpuStatModel,
    MemModel,
    NetModel,
    Orientation,
    Role,
    SoftIrqModel,
)
from .rpc import DEFAULT_TARGET, RpcClient, RpcConnectionError

DEFAULT_INTERVAL = 2.0


class Page(IntEnum):
    """The pages a view can show, in button order."""

    CPU = 0
    SOFT_IRQ = 1
    MEM = 2
    NET = 3

    @property
    def suffix(self):
        return self.name.lower()


def _format_cell(value):
    if isinstance(value, float):
        return f"{value:g}"
    return "" if value is None else str(value)


def _table(model):
    table = Table(header_style="bold")
    for column in range(model.column_count()):
        table.add_column(
            model.header_data(column, Orientation.HORIZONTAL, Role.DISPLAY),
            justify="left",
            no_wrap=True,
        )
    for row in range(model.row_count()):
        table.add_row(
            *(_format_cell(model.data(row, column)) for column in range(model.column_count()))
        )
    return table


class MonitorView:
    """Holds the table models of one machine and renders the selected page."""

    def __init__(self, name=""):
        self.name = name
        self.current_page = Page.CPU
        self.soft_irq_model = SoftIrqModel()
        self.cpu_load_model = CpuLoadModel()
        self.cpu_stat_model = CpuStatModel()
        self.mem_model = MemModel()
        self.net_model = NetModel()
        self._lock = threading.Lock()
        self._sections = {
            Page.CPU: (
                ("Monitor CpuStat:", self.cpu_stat_model),
                ("Monitor CpuLoad:", self.cpu_load_model),
            ),
            Page.SOFT_IRQ: (("Monitor softirq:", self.soft_irq_model),),
            Page.MEM: (("Monitor mem:", self.mem_model),),
            Page.NET: (("Monitor net:", self.net_model),),
        }

    def update_data(self, monitor_info):
        """Refresh every table from *monitor_info*."""
        with self._lock:
            for model in (
                self.soft_irq_model,
                self.cpu_load_model,
                self.cpu_stat_model,
                self.mem_model,
                self.net_model,
            ):
                model.update_monitor_info(monitor_info)

    def select_page(self, page):
        """Show *page*, given as a Page or its index; raise ValueError if unknown."""
        selected = Page(page)
        with self._lock:
            self.current_page = selected

    def button_labels(self):
        """Return the labels of the page buttons, in page order."""
        return [f"{self.name}_{page.suffix}" for page in Page]

    def render(self):
        """Return a renderable of the button bar and the current page's tables."""
        with self._lock:
            buttons = Text()
            for page, label in zip(Page, self.button_labels()):
                if buttons:
                    buttons.append("  ")
                style = "bold reverse" if page is self.current_page else "bold"
                buttons.append(f"[{label}]", style=style)
            parts = [buttons]
            for label, model in self._sections[self.current_page]:
                parts.append(Text(label))
                parts.append(_table(model))
        return Group(*parts)


def _fetch(client):
    try:
        return client.get_monitor_info()
    except RpcConnectionError as exc:
        print(exc, file=sys.stderr)
        return None


def _positive_float(text):
    value = float(text)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return value


def main(argv=None):
    """Parse arguments and show the server's snapshots until interrupted."""
    parser = argparse.ArgumentParser(description="Display the latest monitor snapshot.")
    parser.add_argument("--target", default=DEFAULT_TARGET, help="server host:port")
    parser.add_argument(
        "--interval", type=_positive_float, default=DEFAULT_INTERVAL, help="seconds between refreshes"
    )
    parser.add_argument(
        "--page", choices=[page.suffix for page in Page], default=Page.CPU.suffix, help="page to show"
    )
    parser.add_argument("--once", action="store_true", help="print one snapshot and exit")
    args = parser.parse_args(argv)

    console = Console()
    with RpcClient(args.target) as client:
        info = _fetch(client)
        view = MonitorView((info or MonitorInfo()).name)
        view.select_page(Page[args.page.upper()])
        if info is not None:
            view.update_data(info)
        if args.once:
            console.print(view.render())
            return 0 if info is not None else 1
        try:
            with Live(console=console, get_renderable=view.render, auto_refresh=False) as live:
                while True:
                    time.sleep(args.interval)
                    info = _fetch(client)
                    if info is not None:
                        view.update_data(info)
                    live.refresh()
        except KeyboardInterrupt:
            pass
    return 0