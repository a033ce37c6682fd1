"""Transport interface for the plugin connection.

A transport carries text frames to and from the host.  The connection
manager owns exactly one transport and is its only user: it opens it,
sends through it, iterates its inbound frames until the peer closes, and
closes it on the way out.

Implementations translate their library's exceptions into the
``TransportError`` family so the lifecycle can tell fatal failures from a
clean close without knowing which library is underneath.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


class TransportError(RuntimeError):
    """The transport failed; the connection cannot continue."""


class TransportOpenError(TransportError):
    """Connecting or completing the opening handshake failed."""


class TransportSendError(TransportError):
    """A single outbound frame could not be written."""


@runtime_checkable
class Transport(Protocol):
    """Async protocol for a single client-side message connection."""

    async def open(self, uri: str) -> None:
        """Connect to *uri*.  Raises ``TransportOpenError`` on failure."""
        ...

    async def send(self, text: str) -> None:
        """Send one text frame.  Raises ``TransportSendError`` on failure."""
        ...

    def frames(self) -> AsyncIterator[str | bytes]:
        """Yield inbound frames in arrival order.

        Text frames arrive as ``str`` and binary frames as ``bytes``.  The
        iterator ends when the connection closes normally and raises
        ``TransportError`` when it breaks.
        """
        ...

    async def close(self) -> None:
        """Close the connection.  No-op if it is not open."""
        ...

    @property
    def close_reason(self) -> str:
        """Human-readable close reason, empty if unknown."""
        ...
