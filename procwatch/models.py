"""Table models that turn monitor snapshots into rows for display."""

from abc import ABC, abstractmethod
from enum import Enum, auto

_HEADER_FONT = ("Microsoft YaHei", 10, "bold")
_HEADER_BACKGROUND = "lightgray"


class Role(Enum):
    """The kind of information a view asks a model for."""

    DISPLAY = auto()
    FONT = auto()
    BACKGROUND = auto()
    TEXT_ALIGNMENT = auto()
    TEXT_COLOR = auto()


class Orientation(Enum):
    """Header direction."""

    HORIZONTAL = auto()
    VERTICAL = auto()


class TableModel(ABC):
    """A table of values taken from the latest snapshot.

    Subclasses name their header labels and the record attributes that
    make up each column, and say which records of a snapshot become rows.
    """

    HEADERS = ()
    COLUMNS = ()

    def __init__(self):
        self._rows = []

    @abstractmethod
    def _records(self, monitor_info):
        """Return the records of *monitor_info* shown as rows."""

    def row_count(self):
        """Return the number of rows."""
        return len(self._rows)

    def column_count(self):
        """Return the number of columns."""
        return len(self.COLUMNS)

    def header_data(self, section, orientation, role=Role.DISPLAY):
        """Return the header value for *section*, or None when there is none."""
        if role is Role.DISPLAY and orientation is Orientation.HORIZONTAL:
            if not 0 <= section < len(self.HEADERS):
                raise IndexError(f"header section {section} out of range")
            return self.HEADERS[section]
        if role is Role.FONT:
            return _HEADER_FONT
        if role is Role.BACKGROUND:
            return _HEADER_BACKGROUND
        if role is Role.DISPLAY and orientation is Orientation.VERTICAL:
            return section + 1
        return None

    def data(self, row, column, role=Role.DISPLAY):
        """Return the cell value at *row*, *column*, or None outside the table."""
        if not 0 <= column < self.column_count():
            return None
        if role is Role.DISPLAY and 0 <= row < len(self._rows):
            return self._rows[row][column]
        return None

    def update_monitor_info(self, monitor_info):
        """Replace every row with those taken from *monitor_info*."""
        self._rows = [
            tuple(getattr(record, name) for name in self.COLUMNS)
            for record in self._records(monitor_info)
        ]


class SoftIrqModel(TableModel):
    """Soft interrupt rates, one row per CPU."""

    HEADERS = (
        "cpu",
        "hi",
        "timer",
        "net_tx",
        "net_rx",
        "block",
        "irq_poll",
        "tasklet",
        "sched",
        "hrtimer",
        "rcu",
    )
    COLUMNS = HEADERS

    def _records(self, monitor_info):
        return monitor_info.soft_irq


class CpuLoadModel(TableModel):
    """Load averages as a single row."""

    HEADERS = ("load_1", "load_3", "load_15")
    COLUMNS = ("load_avg_1", "load_avg_3", "load_avg_15")

    def _records(self, monitor_info):
        return [monitor_info.cpu_load]


class CpuStatModel(TableModel):
    """CPU utilisation, one row per CPU."""

    HEADERS = ("name", "cpu_percent", "user", "system")
    COLUMNS = ("cpu_name", "cpu_percent", "usr_percent", "system_percent")

    def _records(self, monitor_info):
        return monitor_info.cpu_stat


class MemModel(TableModel):
    """Memory usage as a single row."""

    HEADERS = (
        "used_percent",
        "total",
        "free",
        "avail",
        "buffers",
        "cached",
        "swap_cached",
        "active",
        "in_active",
        "active_anon",
        "inactive_anon",
        "active_file",
        "inactive_file",
        "dirty",
        "writeback",
        "anon_pages",
        "mapped",
        "kReclaimable",
        "sReclaimable",
        "sUnreclaim",
    )
    COLUMNS = (
        "used_percent",
        "total",
        "free",
        "avail",
        "buffers",
        "cached",
        "swap_cached",
        "active",
        "inactive",
        "active_anon",
        "inactive_anon",
        "dirty",
        "writeback",
        "anon_pages",
        "mapped",
        "kreclaimable",
        "sreclaimable",
        "sunreclaim",
    )

    def _records(self, monitor_info):
        return [monitor_info.mem_info]


class NetModel(TableModel):
    """Network throughput, one row per interface."""

    HEADERS = ("name", "send_rate", "rcv_rate", "send_packets_rate", "rcv_packets_rate")
    COLUMNS = HEADERS

    def _records(self, monitor_info):
        return monitor_info.net_info