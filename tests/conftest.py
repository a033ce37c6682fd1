"""Shared test fixtures.

Nothing here needs external services: the lifecycle is driven by scripted
in-memory transports, and the few tests that use real sockets stay on the
loopback interface (``@pytest.mark.integration``).
"""

from __future__ import annotations

import socket
from collections.abc import Iterator

import pytest

from deckplugin.plugin_runtime.settings import _get_settings_cached


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate every test from DECKPLUGIN_* variables in the caller's shell."""
    for key in ("DECKPLUGIN_LOG_LEVEL", "DECKPLUGIN_LOG_FILE", "DECKPLUGIN_MAX_MESSAGE_SIZE"):
        monkeypatch.delenv(key, raising=False)
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()


@pytest.fixture
def free_port() -> int:
    """A loopback port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    _, port = sock.getsockname()
    sock.close()
    return port
