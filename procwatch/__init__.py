"""Sample /proc statistics, share the latest snapshot over gRPC and show it in a terminal."""

__version__ = "0.1.0"