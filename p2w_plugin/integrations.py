"""Wiring of the conversion hooks onto the host's money entry points."""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Tuple

from p2w_plugin.chat_parser import MONEY_EVENTS, ChatMoneyFilter
from p2w_plugin.conversion import coerce_amount
from p2w_plugin.events import EventDispatcher
from p2w_plugin.formatting import MoneyFormatter
from p2w_plugin.hooks import HookHandle, HookInstallError, HookRegistry
from p2w_plugin.host import HostEnvironment
from p2w_plugin.overlay_cache import ANCHOR_BELOW, OverlayCache
from p2w_plugin.toggle import ToggleState

_LOGGER = logging.getLogger("P2W.Hooks")

STRING_FORMATTERS: Tuple[str, ...] = (
    "GetMoneyString",
    "C_CurrencyInfo.GetCoinTextureString",
    "GetCoinText",
)
FRAME_UPDATERS: Tuple[str, ...] = ("MoneyFrame_Update", "SetMoneyFrame")
TOOLTIP_SETTER = "SetTooltipMoney"
CHAT_FILTER_REGISTRAR = "ChatFrame_AddMessageEventFilter"
CHAT_FILTER_MARKER = "__p2w_chat_filter__"
PLUGIN_NAME_AUCTIONATOR = "Auctionator"
PLUGIN_FORMATTER = "Auctionator.Utilities.CreatePaddedMoneyString"
PLAYER_MONEY_GETTER = "GetMoney"
PLAYER_MONEY_FRAMES: Tuple[str, ...] = ("CharacterFrameMoneyFrame", "PlayerMoneyFrame")
PLAYER_MONEY_EVENTS: Tuple[str, ...] = ("PLAYER_MONEY", "PLAYER_ENTERING_WORLD")
TOOLTIP_LINE_COLOR = (0.0, 1.0, 0.0)


class MoneyFrameUpdater:
    """Keeps the overlay of a money frame in step with its displayed amount."""

    def __init__(self, toggle: ToggleState, formatter: MoneyFormatter, cache: OverlayCache) -> None:
        self._toggle = toggle
        self._formatter = formatter
        self._cache = cache

    def __call__(self, surface: Any = None, amount: Any = None, *_rest: Any, **_kwargs: Any) -> None:
        self.update(surface, amount)

    def update(self, surface: Any, amount: Any) -> None:
        if amount is None:
            return
        if not self._toggle.is_enabled():
            self._cache.clear(surface)
            return
        entry = self._cache.get_or_create(surface)
        if entry is None:
            return
        entry.set_text(self._formatter.plain(amount))


class TooltipMoneyDecorator:
    """Adds a converted line under the money line of a tooltip."""

    def __init__(self, toggle: ToggleState, formatter: MoneyFormatter) -> None:
        self._toggle = toggle
        self._formatter = formatter

    def __call__(
        self,
        tooltip: Any = None,
        money: Any = None,
        money_type: Any = None,
        prefix_text: Any = None,
        suffix_text: Any = None,
        *_rest: Any,
    ) -> None:
        if not self._toggle.is_enabled() or tooltip is None:
            return
        copper = coerce_amount(money)
        if copper <= 0:
            return
        red, green, blue = TOOLTIP_LINE_COLOR
        tooltip.add_line(self._formatter.decorated(copper), red, green, blue)
        tooltip.show()


class PlayerMoneyDisplay:
    """Persistent overlays under the character's own gold display."""

    def __init__(
        self,
        host: HostEnvironment,
        toggle: ToggleState,
        formatter: MoneyFormatter,
        cache: OverlayCache,
        dispatcher: EventDispatcher,
        frame_names: Tuple[str, ...] = PLAYER_MONEY_FRAMES,
    ) -> None:
        self._host = host
        self._toggle = toggle
        self._formatter = formatter
        self._cache = cache
        self._dispatcher = dispatcher
        self._frame_names = frame_names
        self._installed: List[str] = []

    @property
    def installed_frames(self) -> List[str]:
        return list(self._installed)

    def install(self) -> List[str]:
        for name in self._frame_names:
            if name in self._installed:
                continue
            if self._host.resolve(name) is None:
                _LOGGER.debug("Player money frame %s not present; skipped", name)
                continue
            if self._cache.get_or_create(name, anchor=ANCHOR_BELOW) is None:
                continue
            self._installed.append(name)
            for event in PLAYER_MONEY_EVENTS:
                self._dispatcher.register(event, self._make_refresh(name))
        return self.installed_frames

    def _make_refresh(self, name: str) -> Callable[..., None]:
        def _refresh(*_args: Any) -> None:
            self.refresh(name)

        return _refresh

    def refresh(self, name: str) -> None:
        entry = self._cache.peek(name)
        if entry is None:
            return
        if not self._toggle.is_enabled():
            entry.set_text("")
            return
        getter = self._host.resolve(PLAYER_MONEY_GETTER)
        money = getter() if callable(getter) else 0
        entry.set_text(self._formatter.plain(money))


class MoneyHooks:
    """Installs every money hook against one host environment."""

    def __init__(
        self,
        host: HostEnvironment,
        toggle: ToggleState,
        formatter: MoneyFormatter,
        *,
        dispatcher: Optional[EventDispatcher] = None,
        cache: Optional[OverlayCache] = None,
    ) -> None:
        self.host = host
        self.toggle = toggle
        self.formatter = formatter
        self.dispatcher = dispatcher or EventDispatcher()
        self.cache = cache or OverlayCache(host.resolve_surface)
        self.registry = HookRegistry(host, toggle, formatter)
        self.frame_updater = MoneyFrameUpdater(toggle, formatter, self.cache)
        self.tooltip_decorator = TooltipMoneyDecorator(toggle, formatter)
        self.chat_filter = ChatMoneyFilter(toggle, formatter)
        self.player_money = PlayerMoneyDisplay(host, toggle, formatter, self.cache, self.dispatcher)
        self._chat_registered = False

    def install_all(self) -> List[HookHandle]:
        handles: List[HookHandle] = []
        for path in STRING_FORMATTERS:
            self._collect(handles, lambda p=path: self.registry.install_suffix(p))
        for path in FRAME_UPDATERS:
            self._collect(handles, lambda p=path: self.registry.install_post_hook(p, self.frame_updater))
        self.register_chat_filters()
        return handles

    def install_login_hooks(self) -> List[HookHandle]:
        handles: List[HookHandle] = []
        self._collect(handles, lambda: self.registry.install_post_hook(TOOLTIP_SETTER, self.tooltip_decorator))
        self.player_money.install()
        self._collect(handles, self.install_plugin_formatter)
        return handles

    def install_plugin_formatter(self) -> Optional[HookHandle]:
        return self.registry.install_suffix(PLUGIN_FORMATTER)

    def register_chat_filters(self) -> bool:
        if self._chat_registered:
            return True
        registrar = self.host.resolve(CHAT_FILTER_REGISTRAR)
        if not callable(registrar):
            _LOGGER.debug("Host has no %s; chat conversion disabled", CHAT_FILTER_REGISTRAR)
            return False
        existing = getattr(registrar, CHAT_FILTER_MARKER, None)
        if isinstance(existing, ChatMoneyFilter):
            # Registered by an earlier runtime; the host keeps calling that instance.
            existing.rebind(self.toggle, self.formatter)
            self.chat_filter = existing
            self._chat_registered = True
            return True
        for event in MONEY_EVENTS:
            registrar(event, self.chat_filter)
        try:
            setattr(registrar, CHAT_FILTER_MARKER, self.chat_filter)
        except (AttributeError, TypeError) as exc:
            _LOGGER.debug("Unable to mark %s: %s", CHAT_FILTER_REGISTRAR, exc)
        self._chat_registered = True
        return True

    @staticmethod
    def _collect(handles: List[HookHandle], install: Callable[[], Optional[HookHandle]]) -> None:
        try:
            handle = install()
        except HookInstallError as exc:
            _LOGGER.warning("%s", exc)
            return
        if handle is not None:
            handles.append(handle)
