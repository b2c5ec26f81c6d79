import pytest

from procwatch.messages import CpuLoad, CpuStat, MemInfo, MonitorInfo, NetInfo, SoftIrq
from procwatch.models import (
    CpuLoadModel,
    CpuStatModel,
    MemModel,
    NetModel,
    Orientation,
    Role,
    SoftIrqModel,
    TableModel,
)


def _row(model, row):
    return [model.data(row, column) for column in range(model.column_count())]


@pytest.fixture
def info():
    return MonitorInfo(
        name="board",
        soft_irq=[
            SoftIrq(cpu="CPU0", hi=1.0, timer=2.0, rcu=11.0),
            SoftIrq(cpu="CPU1", net_rx=5.0),
        ],
        cpu_load=CpuLoad(0.5, 0.25, 0.125),
        cpu_stat=[
            CpuStat(cpu_name="cpu", cpu_percent=40.0, usr_percent=30.0, system_percent=10.0),
            CpuStat(cpu_name="cpu0", cpu_percent=50.0, usr_percent=25.0, system_percent=25.0),
            CpuStat(cpu_name="cpu1"),
        ],
        mem_info=MemInfo(used_percent=42.0, total=16.0, active_file=3.0, dirty=0.5, sunreclaim=0.25),
        net_info=[NetInfo(name="eth0", send_rate=1.5, rcv_rate=2.5, send_packets_rate=3.0, rcv_packets_rate=4.0)],
    )


def test_table_model_is_abstract():
    with pytest.raises(TypeError):
        TableModel()


def test_empty_models_have_no_rows():
    for model in (SoftIrqModel(), CpuLoadModel(), CpuStatModel(), MemModel(), NetModel()):
        assert model.row_count() == 0
        assert model.data(0, 0) is None


def test_soft_irq_rows(info):
    model = SoftIrqModel()
    model.update_monitor_info(info)
    assert model.row_count() == len(info.soft_irq)
    assert model.column_count() == len(SoftIrqModel.HEADERS)
    first = _row(model, 0)
    assert first[0] == "CPU0"
    assert first[1] == 1.0
    assert first[2] == 2.0
    assert first[-1] == 11.0
    assert model.data(1, 0) == "CPU1"
    assert model.data(1, 4) == 5.0


def test_soft_irq_headers():
    model = SoftIrqModel()
    labels = [model.header_data(i, Orientation.HORIZONTAL, Role.DISPLAY) for i in range(model.column_count())]
    assert labels == [
        "cpu", "hi", "timer", "net_tx", "net_rx", "block",
        "irq_poll", "tasklet", "sched", "hrtimer", "rcu",
    ]


def test_cpu_load_single_row(info):
    model = CpuLoadModel()
    model.update_monitor_info(info)
    assert model.row_count() == 1
    assert _row(model, 0) == [0.5, 0.25, 0.125]
    assert [model.header_data(i, Orientation.HORIZONTAL, Role.DISPLAY) for i in range(3)] == [
        "load_1", "load_3", "load_15",
    ]


def test_cpu_stat_rows(info):
    model = CpuStatModel()
    model.update_monitor_info(info)
    assert model.row_count() == len(info.cpu_stat)
    assert _row(model, 0) == ["cpu", 40.0, 30.0, 10.0]
    assert _row(model, 1) == ["cpu0", 50.0, 25.0, 25.0]
    assert model.header_data(1, Orientation.HORIZONTAL, Role.DISPLAY) == "cpu_percent"


def test_mem_row_skips_file_counters(info):
    model = MemModel()
    model.update_monitor_info(info)
    assert model.row_count() == 1
    values = _row(model, 0)
    assert values[0] == 42.0
    assert values[1] == 16.0
    assert info.mem_info.active_file not in values
    assert values[MemModel.COLUMNS.index("dirty")] == 0.5
    assert values[-1] == 0.25
    assert model.column_count() == len(MemModel.COLUMNS)
    assert len(MemModel.HEADERS) > model.column_count()
    assert model.header_data(19, Orientation.HORIZONTAL, Role.DISPLAY) == "sUnreclaim"


def test_net_rows(info):
    model = NetModel()
    model.update_monitor_info(info)
    assert model.row_count() == 1
    assert _row(model, 0) == ["eth0", 1.5, 2.5, 3.0, 4.0]
    assert model.header_data(4, Orientation.HORIZONTAL, Role.DISPLAY) == "rcv_packets_rate"


def test_update_replaces_previous_rows(info):
    model = CpuStatModel()
    model.update_monitor_info(info)
    model.update_monitor_info(MonitorInfo(cpu_stat=[CpuStat(cpu_name="cpu7")]))
    assert model.row_count() == 1
    assert model.data(0, 0) == "cpu7"
    assert model.data(1, 0) is None


def test_data_outside_table_is_none(info):
    model = NetModel()
    model.update_monitor_info(info)
    assert model.data(0, -1) is None
    assert model.data(0, model.column_count()) is None
    assert model.data(model.row_count(), 0) is None
    assert model.data(-1, 0) is None


def test_data_non_display_roles_are_none(info):
    model = NetModel()
    model.update_monitor_info(info)
    for role in (Role.FONT, Role.BACKGROUND, Role.TEXT_ALIGNMENT, Role.TEXT_COLOR):
        assert model.data(0, 0, role) is None


def test_header_styling():
    model = CpuLoadModel()
    assert model.header_data(0, Orientation.HORIZONTAL, Role.FONT) == ("Microsoft YaHei", 10, "bold")
    assert model.header_data(0, Orientation.VERTICAL, Role.FONT) == ("Microsoft YaHei", 10, "bold")
    assert model.header_data(0, Orientation.HORIZONTAL, Role.BACKGROUND) == "lightgray"
    assert model.header_data(0, Orientation.HORIZONTAL, Role.TEXT_COLOR) is None


def test_vertical_header_numbers_rows_from_one():
    model = MemModel()
    assert [model.header_data(i, Orientation.VERTICAL, Role.DISPLAY) for i in range(3)] == [1, 2, 3]


def test_horizontal_header_out_of_range_raises():
    model = CpuLoadModel()
    with pytest.raises(IndexError):
        model.header_data(len(CpuLoadModel.HEADERS), Orientation.HORIZONTAL, Role.DISPLAY)
    with pytest.raises(IndexError):
        model.header_data(-1, Orientation.HORIZONTAL, Role.DISPLAY)