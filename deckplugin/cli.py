from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any

import click

if TYPE_CHECKING:
    from collections.abc import Callable

    from deckplugin.plugin_runtime.handler import PluginHandler
    from deckplugin.plugin_runtime.models.enums import ConnectionState

    HandlerFactory = Callable[[], PluginHandler]


# ---------------------------------------------------------------------------
# Host launch parameters
# ---------------------------------------------------------------------------


def _launch_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the host's single-dash launch flags (``-port 28196 -pluginUUID ...``)."""
    func = click.option("-info", "info", default="", help="Registration info JSON from the host.")(func)
    func = click.option("-registerEvent", "register_event", required=True, help="Registration event name.")(func)
    func = click.option("-pluginUUID", "plugin_uuid", required=True, help="Unique identifier of this plugin.")(func)
    func = click.option("-port", "port", type=click.IntRange(1, 65535), required=True, help="Host WebSocket port.")(
        func
    )
    return func


def run_connection(
    factory: HandlerFactory,
    port: int,
    plugin_uuid: str,
    register_event: str,
    info: str,
) -> ConnectionState:
    """Configure logging, connect to the host, and block until the connection ends."""
    from deckplugin.plugin_runtime.connection import ConnectionManager
    from deckplugin.plugin_runtime.log import setup_logging
    from deckplugin.plugin_runtime.settings import get_settings
    from deckplugin.plugin_runtime.transport.websocket import WebSocketTransport

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file, plugin_uuid)

    manager = ConnectionManager(
        port,
        plugin_uuid,
        register_event,
        info,
        factory(),
        transport=WebSocketTransport(max_message_size=settings.max_message_size),
    )
    manager.run()
    return manager.state


def _exit_with(state: ConnectionState) -> None:
    from deckplugin.plugin_runtime.models.enums import ConnectionState

    if state is ConnectionState.FAILED:
        click.get_current_context().exit(1)


def load_factory(path: str) -> HandlerFactory:
    """Resolve ``package.module:attr`` to a handler class or factory."""
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        msg = f"Expected 'module:attr', got {path!r}"
        raise click.BadParameter(msg, param_hint="--plugin")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        msg = f"Cannot import {module_name!r}: {e}"
        raise click.BadParameter(msg, param_hint="--plugin") from e
    try:
        factory = getattr(module, attr)
    except AttributeError as e:
        msg = f"{module_name!r} has no attribute {attr!r}"
        raise click.BadParameter(msg, param_hint="--plugin") from e
    if not callable(factory):
        msg = f"{path!r} is not callable"
        raise click.BadParameter(msg, param_hint="--plugin")
    return factory


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@click.group()
def main() -> None:
    """deckplugin - client runtime for Stream Deck style plugins."""


@main.command()
@click.option("--plugin", "plugin_path", required=True, help="Handler class or factory as 'module:attr'.")
@_launch_options
def run(plugin_path: str, port: int, plugin_uuid: str, register_event: str, info: str) -> None:
    """Connect a plugin handler to the host and run until the connection ends."""
    factory = load_factory(plugin_path)
    _exit_with(run_connection(factory, port, plugin_uuid, register_event, info))


def plugin_command(factory: HandlerFactory, *, name: str | None = None) -> click.Command:
    """Build a standalone command for a plugin's own executable.

    The host launches the executable with only the launch flags, so::

        if __name__ == "__main__":
            plugin_command(MyPlugin)()
    """

    @click.command(name=name)
    @_launch_options
    def command(port: int, plugin_uuid: str, register_event: str, info: str) -> None:
        _exit_with(run_connection(factory, port, plugin_uuid, register_event, info))

    return command


if __name__ == "__main__":
    main()
