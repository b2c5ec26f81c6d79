"""Command that runs the monitor snapshot server."""

import argparse
import logging

from .rpc import MonitorStore, create_server

DEFAULT_ADDRESS = "0.0.0.0:50051"

_log = logging.getLogger(__name__)


def serve(address=DEFAULT_ADDRESS, store=None):
    """Serve snapshots on *address* until the server terminates."""
    if store is None:
        store = MonitorStore()
    server, port = create_server(address, store)
    server.start()
    _log.info("monitor server listening on %s (port %s)", address, port)
    try:
        server.wait_for_termination()
    except KeyboardInterrupt:
        server.stop(None)


def main(argv=None):
    """Parse arguments and run the server."""
    parser = argparse.ArgumentParser(description="Serve the latest monitor snapshot.")
    parser.add_argument("--address", default=DEFAULT_ADDRESS, help="host:port to listen on")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    serve(args.address)
    return 0