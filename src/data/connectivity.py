"""Network reachability signal consumed by the pollers."""

from __future__ import annotations

import socket


def host_reachable(host: str, port: int, timeout_seconds: float) -> bool:
    """Return True if a TCP connection to host:port opens within the timeout."""
    try:
        with socket.create_connection((host, port), timeout=timeout_seconds):
            return True
    except OSError:
        return False


__all__ = ["host_reachable"]
