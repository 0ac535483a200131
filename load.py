"""Primary entry point for the p2w money conversion plugin."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

if __package__:
    from .version import __version__ as P2W_VERSION
    from .p2w_plugin.commands import SlashCommandHelper, build_command_helper
    from .p2w_plugin.conversion import ConversionEngine
    from .p2w_plugin.events import EventDispatcher
    from .p2w_plugin.formatting import MoneyFormatter
    from .p2w_plugin.host import HostEnvironment
    from .p2w_plugin.integrations import PLUGIN_NAME_AUCTIONATOR, MoneyHooks
    from .p2w_plugin.logging_utils import configure_logger
    from .p2w_plugin.preferences import Preferences
    from .p2w_plugin.toggle import ToggleState
else:  # pragma: no cover - host loads as top-level module
    from version import __version__ as P2W_VERSION
    from p2w_plugin.commands import SlashCommandHelper, build_command_helper
    from p2w_plugin.conversion import ConversionEngine
    from p2w_plugin.events import EventDispatcher
    from p2w_plugin.formatting import MoneyFormatter
    from p2w_plugin.host import HostEnvironment
    from p2w_plugin.integrations import PLUGIN_NAME_AUCTIONATOR, MoneyHooks
    from p2w_plugin.logging_utils import configure_logger
    from p2w_plugin.preferences import Preferences
    from p2w_plugin.toggle import ToggleState

PLUGIN_NAME = "p2w"
PLUGIN_VERSION = P2W_VERSION
HOST_LOGGER_PATH = "logger"
HOST_PRINT_PATH = "print"

_host: Optional[HostEnvironment] = None


def _resolve_host_logger() -> Any:
    if _host is None:
        return None
    return _host.resolve(HOST_LOGGER_PATH)


LOGGER = configure_logger(_resolve_host_logger)


def _log(message: str) -> None:
    LOGGER.info(message)


class _PluginRuntime:
    """Owns the toggle, formatter and hooks for one host session."""

    def __init__(self, plugin_dir: str, preferences: Preferences, host: HostEnvironment) -> None:
        self.plugin_dir = Path(plugin_dir)
        self.host = host
        self._preferences = preferences
        self.toggle = ToggleState(preferences.enabled)
        # Rate is read once here; changing it requires a restart.
        engine = ConversionEngine(preferences.exchange_rate)
        self.formatter = MoneyFormatter(engine, currency_label=preferences.currency_label, toggle=self.toggle)
        self.dispatcher = EventDispatcher()
        self.hooks = MoneyHooks(host, self.toggle, self.formatter, dispatcher=self.dispatcher)
        self.commands: SlashCommandHelper = build_command_helper(
            self.toggle,
            self.formatter,
            self._print,
            self._persist_enabled,
        )
        self._running = False
        self.dispatcher.register("ADDON_LOADED", self._on_addon_loaded)
        self.dispatcher.register("PLAYER_LOGIN", self._on_player_login)

    # Lifecycle ------------------------------------------------------------

    def start(self) -> str:
        if self._running:
            return PLUGIN_NAME
        handles = self.hooks.install_all()
        self._running = True
        LOGGER.debug("Installed startup hooks: %s", [handle.path for handle in handles])
        _log(f"Plugin started (rate {self.formatter.engine.rate:.2f} {self.formatter.currency_label}/g, enabled={self.toggle.is_enabled()})")
        return PLUGIN_NAME

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        try:
            self._preferences.save()
        except OSError as exc:
            LOGGER.warning("Failed to save preferences on shutdown: %s", exc)
        _log("Plugin stopping")

    # Host events ----------------------------------------------------------

    def handle_event(self, event: str, *args: Any) -> int:
        if not self._running:
            return 0
        return self.dispatcher.dispatch(event, *args)

    def _on_addon_loaded(self, _event: str, addon: Any = None, *_rest: Any) -> None:
        if addon == PLUGIN_NAME:
            self._print(f"|cff00ff00p2w|r v{PLUGIN_VERSION} loaded. Type |cff88ff88/p2w|r for options.")
        elif addon == PLUGIN_NAME_AUCTIONATOR:
            if self.hooks.install_plugin_formatter() is not None:
                LOGGER.debug("Hooked %s money formatter", PLUGIN_NAME_AUCTIONATOR)

    def _on_player_login(self, _event: str, *_rest: Any) -> None:
        handles = self.hooks.install_login_hooks()
        LOGGER.debug(
            "Installed login hooks: %s; player money frames: %s",
            [handle.path for handle in handles],
            self.hooks.player_money.installed_frames,
        )
        self.dispatcher.unregister("PLAYER_LOGIN", self._on_player_login)

    # Helpers --------------------------------------------------------------

    def _print(self, message: str) -> None:
        printer = self.host.resolve(HOST_PRINT_PATH)
        if callable(printer):
            printer(message)
        else:
            _log(message)

    def _persist_enabled(self, value: bool) -> None:
        self._preferences.enabled = bool(value)
        self._preferences.save()


# Host hook functions -----------------------------------------------------

_plugin: Optional[_PluginRuntime] = None
_preferences: Optional[Preferences] = None


def plugin_start3(plugin_dir: str, host_namespace: Any) -> str:
    global _plugin, _preferences, _host
    if _plugin is not None:
        return _plugin.start()
    _host = HostEnvironment(host_namespace)
    _preferences = Preferences(Path(plugin_dir))
    configure_logger(_resolve_host_logger, _preferences.log_level)
    _log(f"Initialising p2w plugin from {plugin_dir}")
    _plugin = _PluginRuntime(plugin_dir, _preferences, _host)
    return _plugin.start()


def plugin_stop() -> None:
    global _plugin, _preferences
    if _plugin:
        try:
            _plugin.stop()
        finally:
            _plugin = None
    _preferences = None


def on_event(event: str, *args: Any) -> int:
    if _plugin is None:
        return 0
    return _plugin.handle_event(event, *args)


def slash_command(message: str) -> bool:
    if _plugin is None:
        LOGGER.debug("slash_command invoked before plugin start: %r", message)
        return False
    return _plugin.commands.handle(message)


# Metadata expected by some plugin loaders
name = PLUGIN_NAME
version = PLUGIN_VERSION
plugin_name = PLUGIN_NAME
