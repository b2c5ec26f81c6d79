import pytest

from procwatch.messages import (
    CpuLoad,
    CpuStat,
    MemInfo,
    MonitorInfo,
    NetInfo,
    SoftIrq,
    decode_monitor_info,
    encode_monitor_info,
)


def sample_info():
    return MonitorInfo(
        name="board",
        soft_irq=[SoftIrq(cpu="cpu1", hi=1.5, timer=2.0), SoftIrq(cpu="cpu2", rcu=7.25)],
        cpu_load=CpuLoad(load_avg_1=0.52, load_avg_3=0.58, load_avg_15=0.59),
        cpu_stat=[CpuStat(cpu_name="cpu", cpu_percent=12.5, usr_percent=8.0)],
        mem_info=MemInfo(used_percent=40.0, total=16.0, avail=9.6),
        net_info=[NetInfo(name="eth0", send_rate=3.0, rcv_rate=4.0)],
    )


def test_defaults_are_empty():
    info = MonitorInfo()
    assert info.name == ""
    assert info.soft_irq == [] and info.cpu_stat == [] and info.net_info == []
    assert info.cpu_load == CpuLoad()
    assert info.mem_info == MemInfo()


def test_default_lists_are_not_shared():
    first, second = MonitorInfo(), MonitorInfo()
    first.soft_irq.append(SoftIrq(cpu="cpu0"))
    assert second.soft_irq == []


def test_encode_decode_round_trip():
    info = sample_info()
    assert decode_monitor_info(encode_monitor_info(info)) == info


def test_encode_returns_bytes_that_decode_to_empty_snapshot():
    data = encode_monitor_info(MonitorInfo())
    assert isinstance(data, bytes)
    assert decode_monitor_info(data) == MonitorInfo()


def test_to_dict_structure():
    result = sample_info().to_dict()
    assert result["name"] == "board"
    assert result["soft_irq"][0]["cpu"] == "cpu1"
    assert result["soft_irq"][1]["rcu"] == 7.25
    assert result["cpu_load"]["load_avg_1"] == 0.52
    assert result["net_info"][0]["name"] == "eth0"


def test_from_dict_round_trip():
    info = sample_info()
    assert MonitorInfo.from_dict(info.to_dict()) == info


def test_from_dict_missing_keys_take_defaults():
    info = MonitorInfo.from_dict({"name": "host", "soft_irq": [{"cpu": "cpu3"}]})
    assert info.name == "host"
    assert info.soft_irq == [SoftIrq(cpu="cpu3")]
    assert info.cpu_load == CpuLoad()
    assert info.net_info == []


def test_from_dict_converts_integers_to_floats():
    info = MonitorInfo.from_dict({"cpu_load": {"load_avg_1": 2}})
    assert info.cpu_load.load_avg_1 == 2.0
    assert type(info.cpu_load.load_avg_1) is float


def test_from_dict_ignores_unknown_keys():
    info = MonitorInfo.from_dict({"name": "x", "extra": 1, "mem_info": {"bogus": 3}})
    assert info == MonitorInfo(name="x")


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"name": 5},
        {"soft_irq": {"cpu": "cpu0"}},
        {"soft_irq": ["cpu0"]},
        {"cpu_load": {"load_avg_1": "high"}},
        {"cpu_load": {"load_avg_1": True}},
        {"net_info": [{"name": 3}]},
    ],
)
def test_from_dict_rejects_bad_shapes(payload):
    with pytest.raises(ValueError):
        MonitorInfo.from_dict(payload)


@pytest.mark.parametrize("data", [b"not json", b"\xff\xfe", b"[1, 2]"])
def test_decode_rejects_malformed_bytes(data):
    with pytest.raises(ValueError):
        decode_monitor_info(data)