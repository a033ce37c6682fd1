"""Scripted transport and recording handler for plugin-runtime tests."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Iterable
from typing import Any

import pytest

from deckplugin.plugin_runtime.commands import CommandEmitter
from deckplugin.plugin_runtime.handler import PluginHandler
from deckplugin.plugin_runtime.transport.base import TransportOpenError, TransportSendError


class ScriptedTransport:
    """In-memory ``Transport`` that replays a fixed list of inbound frames.

    A frame that is an exception instance is raised instead of yielded.
    With ``hold_open`` the stream stays open after the scripted frames until
    ``close`` is called, and ``idle`` is set once it starts waiting.
    Every open/send/close is appended to ``log`` (shared with the handler
    when a test wants one combined timeline).
    """

    def __init__(
        self,
        frames: Iterable[str | bytes | Exception] = (),
        *,
        fail_open: bool = False,
        fail_sends: bool = False,
        hold_open: bool = False,
        log: list[tuple[str, Any]] | None = None,
    ) -> None:
        self.inbound = list(frames)
        self.fail_open = fail_open
        self.fail_sends = fail_sends
        self.hold_open = hold_open
        self.idle = asyncio.Event()
        self._closed_event = asyncio.Event()
        self.log: list[tuple[str, Any]] = log if log is not None else []
        self.sent: list[str] = []
        self.closed = False

    async def open(self, uri: str) -> None:
        self.log.append(("open", uri))
        if self.fail_open:
            msg = "connection refused"
            raise TransportOpenError(msg)

    async def send(self, text: str) -> None:
        if self.fail_sends or self.closed:
            msg = "socket closed"
            raise TransportSendError(msg)
        self.sent.append(text)
        self.log.append(("send", json.loads(text)))

    async def frames(self) -> AsyncIterator[str | bytes]:
        for frame in self.inbound:
            if self.closed:
                return
            if isinstance(frame, Exception):
                raise frame
            yield frame
        if self.hold_open and not self.closed:
            self.idle.set()
            await self._closed_event.wait()

    async def close(self) -> None:
        if not self.closed:
            self.log.append(("close", None))
        self.closed = True
        self._closed_event.set()

    @property
    def close_reason(self) -> str:
        return "1000" if self.closed else ""

    @property
    def sent_json(self) -> list[dict[str, Any]]:
        return [json.loads(t) for t in self.sent]


class RecordingEmitter(CommandEmitter):
    """Command emitter that keeps every frame instead of sending it."""

    def __init__(self, plugin_uuid: str = "plugin-uuid", *, fail: bool = False) -> None:
        super().__init__(plugin_uuid)
        self.fail = fail
        self.frames: list[str] = []

    async def _write(self, text: str) -> None:
        if self.fail:
            msg = "broken pipe"
            raise TransportSendError(msg)
        self.frames.append(text)

    @property
    def messages(self) -> list[dict[str, Any]]:
        return [json.loads(t) for t in self.frames]


class RecordingHandler(PluginHandler):
    """Handler that records the per-key callbacks the lifecycle tests need."""

    def __init__(self, log: list[tuple[str, Any]] | None = None) -> None:
        super().__init__()
        self.log: list[tuple[str, Any]] = log if log is not None else []

    async def key_down_for_action(self, action, context, payload, device_id) -> None:
        self.log.append(("keyDown", (action, context, payload, device_id)))

    async def key_up_for_action(self, action, context, payload, device_id) -> None:
        self.log.append(("keyUp", (action, context, payload, device_id)))

    async def did_receive_global_settings(self, payload) -> None:
        self.log.append(("didReceiveGlobalSettings", (payload,)))


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def timeline() -> list[tuple[str, Any]]:
    return []


@pytest.fixture
def make_transport() -> type[ScriptedTransport]:
    return ScriptedTransport


@pytest.fixture
def make_handler() -> type[RecordingHandler]:
    return RecordingHandler


@pytest.fixture
def failing_emitter() -> RecordingEmitter:
    return RecordingEmitter(fail=True)
