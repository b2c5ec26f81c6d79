# procwatch

procwatch samples system statistics from the Linux `/proc` filesystem,
passes them through a small gRPC service and shows them as tables in a
terminal.

It has three commands:

- **`procwatch-collector`** reads `/proc/softirqs`, `/proc/loadavg`,
  `/proc/stat`, `/proc/meminfo` and `/proc/net/dev` and turns the readings
  into per-CPU soft-IRQ rates (events per second), load averages, per-CPU
  usage percentages, memory figures (in GB, plus the percentage in use) and
  per-interface network rates (KiB/s and packets/s). It sends each snapshot
  to the server, by default every three seconds. A failed send is reported
  on stderr and the collector carries on.
- **`procwatch-server`** keeps the most recent snapshot it received and
  returns it to anyone who asks.
- **`procwatch-display`** asks the server for the latest snapshot and shows
  it as tables, with one page each for CPU, soft IRQs, memory and network.

Rates and percentages come from the difference between two readings, so the
first snapshot after the collector starts holds no soft-IRQ, CPU or network
rows.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Usage

Start the server. It listens on `0.0.0.0:50051` unless given `--address`:

```
procwatch-server
procwatch-server --address 127.0.0.1:6000
```

Start the collector on the machine to watch. It sends to `localhost:50051`
and labels each snapshot with the `USER` environment variable:

```
procwatch-collector
procwatch-collector --target 127.0.0.1:6000 --interval 5 --name web-01
```

Open the display. It refreshes every two seconds and starts on the CPU page;
`--page` chooses another (`cpu`, `soft_irq`, `mem`, `net`), and `--once`
prints a single snapshot and exits, with status 1 if the server could not be
reached:

```
procwatch-display
procwatch-display --page net --interval 1
procwatch-display --once
```

Each command takes `--help` to list its options.

## Library use

```python
from procwatch.monitors import default_monitors
from procwatch.collector import collect_once

info = collect_once(default_monitors(), "my-host")
print(info.to_dict())
```

- `procwatch.messages` holds the snapshot dataclasses (`MonitorInfo`,
  `CpuLoad`, `SoftIrq`, `CpuStat`, `MemInfo`, `NetInfo`), with
  `MonitorInfo.to_dict` / `MonitorInfo.from_dict` and the byte encoding
  `encode_monitor_info` / `decode_monitor_info`.
- `procwatch.monitors` has one sampler per statistic (`CpuLoadMonitor`,
  `CpuSoftIrqMonitor`, `CpuStatMonitor`, `MemMonitor`, `NetMonitor`). Each
  takes the file path to read, and the rate-based ones also a clock, so they
  can be pointed at sample files. `Monitor.stop` forgets earlier readings.
- `procwatch.rpc` has `MonitorStore`, `create_server` and `RpcClient`
  (`set_monitor_info`, `get_monitor_info`, `close`; also a context manager).
  Failed calls raise `RpcConnectionError`.
- `procwatch.collector.run` and `procwatch.server.serve` are the loops behind
  the commands.
- `procwatch.models` provides table models (`CpuLoadModel`, `CpuStatModel`,
  `SoftIrqModel`, `MemModel`, `NetModel`) that turn a snapshot into rows and
  headers; `procwatch.display.MonitorView` renders them with rich.

## What it does not do

- The server keeps only the latest snapshot, in memory. There is no history
  and nothing is written to disk.
- All connections are plain, unauthenticated gRPC.
- Snapshots travel as JSON inside gRPC messages, under the service name
  `monitor.proto.GrpcManager`; there is no protobuf schema, so only
  procwatch clients and servers understand each other.
- The display is a terminal view. There is no graphical window, and pages
  are chosen with `--page` rather than interactively.