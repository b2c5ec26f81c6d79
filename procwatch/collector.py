"""Command that samples local statistics and sends them to the server."""

import argparse
import os
import sys
import threading

from .messages import MonitorInfo
from .monitors import default_monitors
from .rpc import DEFAULT_TARGET, RpcClient, RpcConnectionError

DEFAULT_INTERVAL = 3.0


def collect_once(monitors, name):
    """Run every monitor once and return the resulting snapshot."""
    info = MonitorInfo(name=name)
    for monitor in monitors:
        monitor.update_once(info)
    return info


def run(client, monitors, name, interval=DEFAULT_INTERVAL, stop_event=None):
    """Send a snapshot every *interval* seconds until *stop_event* is set.

    Failed sends are reported on stderr and do not stop the loop.
    Returns the number of snapshots taken.
    """
    if stop_event is None:
        stop_event = threading.Event()
    taken = 0
    try:
        while not stop_event.is_set():
            info = collect_once(monitors, name)
            taken += 1
            try:
                client.set_monitor_info(info)
            except RpcConnectionError as exc:
                print(exc, file=sys.stderr)
            stop_event.wait(interval)
    finally:
        for monitor in monitors:
            monitor.stop()
    return taken


def _positive_float(text):
    value = float(text)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return value


def main(argv=None):
    """Parse arguments and run the collector."""
    parser = argparse.ArgumentParser(description="Report local statistics to a monitor server.")
    parser.add_argument("--target", default=DEFAULT_TARGET, help="server host:port")
    parser.add_argument(
        "--interval", type=_positive_float, default=DEFAULT_INTERVAL, help="seconds between samples"
    )
    parser.add_argument("--name", default=os.environ.get("USER", ""), help="name of this machine")
    args = parser.parse_args(argv)
    with RpcClient(args.target) as client:
        try:
            run(client, default_monitors(), args.name, args.interval)
        except KeyboardInterrupt:
            pass
    return 0