"""Process-wide registry of named TLS contexts."""

from __future__ import annotations

import ssl
import threading

_lock = threading.RLock()
_registry: dict[str, ssl.SSLContext] = {}


def register_tls_config(key: str, context: ssl.SSLContext) -> None:
    """Register a TLS context under a name, replacing any earlier one."""
    with _lock:
        _registry[key] = context


def deregister_tls_config(key: str) -> None:
    """Remove the TLS context registered under a name, if any."""
    with _lock:
        _registry.pop(key, None)


def get_tls_config(key: str) -> ssl.SSLContext | None:
    """Return the TLS context registered under a name, or None."""
    with _lock:
        return _registry.get(key)