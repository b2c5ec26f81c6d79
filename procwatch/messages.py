"""Snapshot messages exchanged between the collector, the server and the display."""

import json
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields


@dataclass
class CpuLoad:
    """Load averages over one, three and fifteen minutes."""

    load_avg_1: float = 0.0
    load_avg_3: float = 0.0
    load_avg_15: float = 0.0


@dataclass
class SoftIrq:
    """Per-CPU soft interrupt rates, in events per second."""

    cpu: str = ""
    hi: float = 0.0
    timer: float = 0.0
    net_tx: float = 0.0
    net_rx: float = 0.0
    block: float = 0.0
    irq_poll: float = 0.0
    tasklet: float = 0.0
    sched: float = 0.0
    hrtimer: float = 0.0
    rcu: float = 0.0


@dataclass
class CpuStat:
    """Per-CPU utilisation percentages over the last sampling period."""

    cpu_name: str = ""
    cpu_percent: float = 0.0
    usr_percent: float = 0.0
    system_percent: float = 0.0
    nice_percent: float = 0.0
    idle_percent: float = 0.0
    io_wait_percent: float = 0.0
    irq_percent: float = 0.0
    soft_irq_percent: float = 0.0


@dataclass
class MemInfo:
    """Memory usage; sizes in GB, used_percent in percent."""

    used_percent: float = 0.0
    total: float = 0.0
    free: float = 0.0
    avail: float = 0.0
    buffers: float = 0.0
    cached: float = 0.0
    swap_cached: float = 0.0
    active: float = 0.0
    inactive: float = 0.0
    active_anon: float = 0.0
    inactive_anon: float = 0.0
    active_file: float = 0.0
    inactive_file: float = 0.0
    dirty: float = 0.0
    writeback: float = 0.0
    anon_pages: float = 0.0
    mapped: float = 0.0
    kreclaimable: float = 0.0
    sreclaimable: float = 0.0
    sunreclaim: float = 0.0


@dataclass
class NetInfo:
    """Per-interface throughput: rates in KiB/s and packets/s."""

    name: str = ""
    send_rate: float = 0.0
    rcv_rate: float = 0.0
    send_packets_rate: float = 0.0
    rcv_packets_rate: float = 0.0


def _record_from_dict(cls, data):
    if not isinstance(data, Mapping):
        raise ValueError(f"{cls.__name__} expects a mapping, got {type(data).__name__}")
    values = {}
    for spec in fields(cls):
        if spec.name not in data:
            continue
        raw = data[spec.name]
        if isinstance(spec.default, str):
            if not isinstance(raw, str):
                raise ValueError(f"{cls.__name__}.{spec.name} must be a string")
            values[spec.name] = raw
        else:
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ValueError(f"{cls.__name__}.{spec.name} must be a number")
            values[spec.name] = float(raw)
    return cls(**values)


def _records_from_list(cls, data):
    if not isinstance(data, (list, tuple)):
        raise ValueError(f"a list of {cls.__name__} was expected, got {type(data).__name__}")
    return [_record_from_dict(cls, item) for item in data]


@dataclass
class MonitorInfo:
    """One complete snapshot of a machine's statistics."""

    name: str = ""
    soft_irq: list[SoftIrq] = field(default_factory=list)
    cpu_load: CpuLoad = field(default_factory=CpuLoad)
    cpu_stat: list[CpuStat] = field(default_factory=list)
    mem_info: MemInfo = field(default_factory=MemInfo)
    net_info: list[NetInfo] = field(default_factory=list)

    def to_dict(self):
        """Return the snapshot as plain nested dicts and lists."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        """Build a snapshot from nested dicts; missing keys take their defaults."""
        if not isinstance(data, Mapping):
            raise ValueError(f"MonitorInfo expects a mapping, got {type(data).__name__}")
        name = data.get("name", "")
        if not isinstance(name, str):
            raise ValueError("MonitorInfo.name must be a string")
        return cls(
            name=name,
            soft_irq=_records_from_list(SoftIrq, data.get("soft_irq", [])),
            cpu_load=_record_from_dict(CpuLoad, data.get("cpu_load", {})),
            cpu_stat=_records_from_list(CpuStat, data.get("cpu_stat", [])),
            mem_info=_record_from_dict(MemInfo, data.get("mem_info", {})),
            net_info=_records_from_list(NetInfo, data.get("net_info", [])),
        )


def encode_monitor_info(info):
    """Serialise a snapshot to bytes."""
    return json.dumps(info.to_dict(), separators=(",", ":")).encode("utf-8")


def decode_monitor_info(data):
    """Parse bytes produced by encode_monitor_info; raise ValueError on bad input."""
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError(f"malformed monitor info: {exc}") from exc
    return MonitorInfo.from_dict(payload)