"""Samplers that read kernel statistics from /proc into a MonitorInfo."""

import math
import time
from abc import ABC, abstractmethod
from contextlib import closing
from dataclasses import dataclass

from .messages import CpuLoad, CpuStat, MemInfo, NetInfo, SoftIrq
from .read_file import read_fields, steady_time_second

KB_TO_GB = 1000 * 1000

_SOFTIRQ_KINDS = (
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

_MEMINFO_FIELDS = {
    "MemTotal:": "total",
    "MemFree:": "free",
    "MemAvailable:": "avail",
    "Buffers:": "buffers",
    "Cached:": "cached",
    "SwapCached:": "swap_cached",
    "Active:": "active",
    "Inactive:": "inactive",
    "Active(anon):": "active_anon",
    "Inactive(anon):": "inactive_anon",
    "Active(file):": "active_file",
    "Inactive(file):": "inactive_file",
    "Dirty:": "dirty",
    "Writeback:": "writeback",
    "AnonPages:": "anon_pages",
    "Mapped:": "mapped",
    "KReclaimable:": "kreclaimable",
    "SReclaimable:": "sreclaimable",
    "SUnreclaim:": "sunreclaim",
}


def _ratio(numerator, denominator):
    """Divide with floating-point semantics: zero denominators give inf or nan."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


class Monitor(ABC):
    """A sampler that adds one kind of statistic to a snapshot."""

    def __init__(self):
        self._history = {}

    @abstractmethod
    def update_once(self, monitor_info):
        """Take one sample and add its results to *monitor_info*."""

    def stop(self):
        """Forget earlier samples, so the next update starts afresh."""
        self._history.clear()


class CpuLoadMonitor(Monitor):
    """Reads the load averages."""

    def __init__(self, path="/proc/loadavg"):
        super().__init__()
        self.path = path

    def update_once(self, monitor_info):
        with closing(read_fields(self.path)) as rows:
            values = next(rows, [])
        if len(values) < 3:
            raise ValueError(f"{self.path}: expected three load averages")
        monitor_info.cpu_load = CpuLoad(*(float(value) for value in values[:3]))


class CpuSoftIrqMonitor(Monitor):
    """Reports soft interrupt rates per CPU between consecutive samples."""

    def __init__(self, path="/proc/softirqs", clock=time.monotonic):
        super().__init__()
        self.path = path
        self.clock = clock

    def update_once(self, monitor_info):
        rows = list(read_fields(self.path))
        if len(rows) <= len(_SOFTIRQ_KINDS):
            raise ValueError(f"{self.path}: expected {len(_SOFTIRQ_KINDS)} softirq rows")
        header, counters = rows[0], rows[1 : len(_SOFTIRQ_KINDS) + 1]
        now = self.clock()
        for column, cpu in enumerate(header, start=1):
            if any(len(row) <= column for row in counters):
                raise ValueError(f"{self.path}: missing counters for {cpu}")
            counts = tuple(int(row[column]) for row in counters)
            previous = self._history.get(cpu)
            if previous is not None:
                old_counts, old_time = previous
                period = steady_time_second(now, old_time)
                rates = {
                    kind: _ratio(new - old, period)
                    for kind, new, old in zip(_SOFTIRQ_KINDS, counts, old_counts)
                }
                monitor_info.soft_irq.append(SoftIrq(cpu=cpu, **rates))
            self._history[cpu] = (counts, now)


@dataclass(frozen=True)
class _CpuTimes:
    user: float
    nice: float
    system: float
    idle: float
    io_wait: float
    irq: float
    soft_irq: float
    steal: float
    guest: float
    guest_nice: float

    @property
    def busy(self):
        return self.user + self.system + self.nice + self.irq + self.soft_irq + self.steal

    @property
    def total(self):
        return self.busy + self.idle + self.io_wait


class CpuStatMonitor(Monitor):
    """Reports CPU utilisation percentages between consecutive samples."""

    def __init__(self, path="/proc/stat"):
        super().__init__()
        self.path = path

    def update_once(self, monitor_info):
        for values in read_fields(self.path):
            name = values[0]
            if "cpu" not in name:
                continue
            if len(values) < 11:
                raise ValueError(f"{self.path}: too few counters for {name}")
            times = _CpuTimes(*(float(value) for value in values[1:11]))
            old = self._history.get(name)
            if old is not None:
                elapsed = times.total - old.total

                def percent(new, prev):
                    return _ratio(new - prev, elapsed) * 100.0

                monitor_info.cpu_stat.append(
                    CpuStat(
                        cpu_name=name,
                        cpu_percent=percent(times.busy, old.busy),
                        usr_percent=percent(times.user, old.user),
                        system_percent=percent(times.system, old.system),
                        nice_percent=percent(times.nice, old.nice),
                        idle_percent=percent(times.idle, old.idle),
                        io_wait_percent=percent(times.io_wait, old.io_wait),
                        irq_percent=percent(times.irq, old.irq),
                        soft_irq_percent=percent(times.soft_irq, old.soft_irq),
                    )
                )
            self._history[name] = times


class MemMonitor(Monitor):
    """Reads memory usage; sizes are reported in GB."""

    def __init__(self, path="/proc/meminfo"):
        super().__init__()
        self.path = path

    def update_once(self, monitor_info):
        kilobytes = dict.fromkeys(_MEMINFO_FIELDS.values(), 0)
        for values in read_fields(self.path):
            key = _MEMINFO_FIELDS.get(values[0])
            if key is None:
                continue
            if len(values) < 2:
                raise ValueError(f"{self.path}: no value for {values[0]}")
            kilobytes[key] = int(values[1])
        used = kilobytes["total"] - kilobytes["avail"]
        monitor_info.mem_info = MemInfo(
            used_percent=_ratio(used * 1.0, kilobytes["total"]) * 100.0,
            **{key: value / KB_TO_GB for key, value in kilobytes.items()},
        )


@dataclass(frozen=True)
class _NetCounters:
    rcv_bytes: int
    rcv_packets: int
    err_in: int
    drop_in: int
    snd_bytes: int
    snd_packets: int
    err_out: int
    drop_out: int
    timepoint: float


class NetMonitor(Monitor):
    """Reports per-interface throughput between consecutive samples."""

    def __init__(self, path="/proc/net/dev", clock=time.monotonic):
        super().__init__()
        self.path = path
        self.clock = clock

    def update_once(self, monitor_info):
        now = self.clock()
        for values in read_fields(self.path):
            label = values[0]
            if label.find(":") != len(label) - 1 or len(values) < 13:
                continue
            name = label[:-1]
            current = _NetCounters(
                rcv_bytes=int(values[1]),
                rcv_packets=int(values[2]),
                err_in=int(values[3]),
                drop_in=int(values[4]),
                snd_bytes=int(values[9]),
                snd_packets=int(values[10]),
                err_out=int(values[11]),
                drop_out=int(values[12]),
                timepoint=now,
            )
            old = self._history.get(name)
            if old is not None:
                period = steady_time_second(current.timepoint, old.timepoint)
                monitor_info.net_info.append(
                    NetInfo(
                        name=name,
                        send_rate=_ratio((current.snd_bytes - old.snd_bytes) / 1024.0, period),
                        rcv_rate=_ratio((current.rcv_bytes - old.rcv_bytes) / 1024.0, period),
                        send_packets_rate=_ratio(current.snd_packets - old.snd_packets, period),
                        rcv_packets_rate=_ratio(current.rcv_packets - old.rcv_packets, period),
                    )
                )
            self._history[name] = current


def default_monitors():
    """Return the standard set of samplers in collection order."""
    return [
        CpuSoftIrqMonitor(),
        CpuLoadMonitor(),
        CpuStatMonitor(),
        MemMonitor(),
        NetMonitor(),
    ]