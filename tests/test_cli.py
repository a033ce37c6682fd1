"""CLI tests: launch-flag parsing, plugin loading, exit codes."""

from __future__ import annotations

from typing import Any

import pytest
from click.testing import CliRunner

from deckplugin import cli
from deckplugin.plugin_runtime import log
from deckplugin.plugin_runtime.connection import ConnectionManager
from deckplugin.plugin_runtime.handler import PluginHandler
from deckplugin.plugin_runtime.models.enums import ConnectionState

LAUNCH_ARGS = ["-port", "28196", "-pluginUUID", "ABCDEF", "-registerEvent", "registerPlugin", "-info", '{"a":1}']
BASE_PLUGIN = "deckplugin.plugin_runtime.handler:PluginHandler"


class _RecordingRun:
    """Stand-in for ``run_connection`` that records its arguments."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.state = ConnectionState.CLOSED

    def __call__(self, factory, port, plugin_uuid, register_event, info) -> ConnectionState:
        self.calls.append({
            "factory": factory,
            "port": port,
            "plugin_uuid": plugin_uuid,
            "register_event": register_event,
            "info": info,
        })
        return self.state


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> _RecordingRun:
    recording = _RecordingRun()
    monkeypatch.setattr(cli, "run_connection", recording)
    return recording


# ---------------------------------------------------------------------------
# deckplugin run
# ---------------------------------------------------------------------------


def test_run_parses_host_flags(runner: CliRunner, recorder: _RecordingRun) -> None:
    result = runner.invoke(cli.main, ["run", "--plugin", BASE_PLUGIN, *LAUNCH_ARGS])

    assert result.exit_code == 0, result.output
    assert recorder.calls == [
        {
            "factory": PluginHandler,
            "port": 28196,
            "plugin_uuid": "ABCDEF",
            "register_event": "registerPlugin",
            "info": '{"a":1}',
        }
    ]


def test_run_failed_connection_exits_1(runner: CliRunner, recorder: _RecordingRun) -> None:
    recorder.state = ConnectionState.FAILED

    result = runner.invoke(cli.main, ["run", "--plugin", BASE_PLUGIN, *LAUNCH_ARGS])

    assert result.exit_code == 1


def test_run_requires_port(runner: CliRunner, recorder: _RecordingRun) -> None:
    result = runner.invoke(cli.main, ["run", "--plugin", BASE_PLUGIN, "-pluginUUID", "x", "-registerEvent", "r"])

    assert result.exit_code == 2
    assert recorder.calls == []


def test_run_rejects_bad_port(runner: CliRunner, recorder: _RecordingRun) -> None:
    args = ["run", "--plugin", BASE_PLUGIN, *LAUNCH_ARGS]
    args[args.index("28196")] = "70000"

    result = runner.invoke(cli.main, args)

    assert result.exit_code == 2
    assert recorder.calls == []


@pytest.mark.parametrize(
    "plugin",
    [
        "no_colon",
        "deckplugin.does_not_exist:Handler",
        "deckplugin.plugin_runtime.handler:Missing",
        "deckplugin:__version__",
    ],
)
def test_run_bad_plugin_path(runner: CliRunner, recorder: _RecordingRun, plugin: str) -> None:
    result = runner.invoke(cli.main, ["run", "--plugin", plugin, *LAUNCH_ARGS])

    assert result.exit_code == 2
    assert "--plugin" in result.output
    assert recorder.calls == []


# ---------------------------------------------------------------------------
# plugin_command
# ---------------------------------------------------------------------------


def test_plugin_command(runner: CliRunner, recorder: _RecordingRun) -> None:
    class MyPlugin(PluginHandler):
        pass

    result = runner.invoke(cli.plugin_command(MyPlugin, name="my-plugin"), LAUNCH_ARGS)

    assert result.exit_code == 0, result.output
    assert recorder.calls[0]["factory"] is MyPlugin
    assert recorder.calls[0]["port"] == 28196


def test_plugin_command_info_optional(runner: CliRunner, recorder: _RecordingRun) -> None:
    result = runner.invoke(cli.plugin_command(PluginHandler), LAUNCH_ARGS[:6])

    assert result.exit_code == 0, result.output
    assert recorder.calls[0]["info"] == ""


# ---------------------------------------------------------------------------
# run_connection wiring
# ---------------------------------------------------------------------------


def test_run_connection_wires_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[ConnectionManager] = []

    def fake_run(self: ConnectionManager) -> None:
        seen.append(self)

    logging_calls: list[tuple] = []
    monkeypatch.setenv("DECKPLUGIN_MAX_MESSAGE_SIZE", "2048")
    monkeypatch.setattr(ConnectionManager, "run", fake_run)
    monkeypatch.setattr(log, "setup_logging", lambda *args: logging_calls.append(args))

    state = cli.run_connection(PluginHandler, 4444, "uuid", "registerPlugin", "")

    (manager,) = seen
    assert state is ConnectionState.DISCONNECTED
    assert manager.uri == "ws://127.0.0.1:4444"
    assert isinstance(manager.handler, PluginHandler)
    assert manager.handler.connection_manager is manager
    assert manager._transport._max_message_size == 2048
    assert logging_calls == [("INFO", None, "uuid")]
