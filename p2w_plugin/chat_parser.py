"""Recover money amounts from chat messages carrying coin icon textures.

Money and loot messages embed each denomination as a number followed by an
inline texture escape, e.g. ``5|TInterface\\MoneyFrame\\UI-GoldIcon:0:0:2:0|t``.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Optional, Pattern, Tuple

from p2w_plugin.conversion import COPPER_PER_GOLD, COPPER_PER_SILVER
from p2w_plugin.formatting import MoneyFormatter
from p2w_plugin.toggle import ToggleState

_LOGGER = logging.getLogger("P2W.Chat")

MONEY_EVENTS = ("CHAT_MSG_MONEY", "CHAT_MSG_LOOT")


def _icon_pattern(icon: str) -> Pattern[str]:
    marker = re.escape(f"|TInterface\\MoneyFrame\\UI-{icon}Icon")
    return re.compile(r"([0-9]+)" + marker)


_DENOMINATIONS: Tuple[Tuple[Pattern[str], int], ...] = (
    (_icon_pattern("Gold"), COPPER_PER_GOLD),
    (_icon_pattern("Silver"), COPPER_PER_SILVER),
    (_icon_pattern("Copper"), 1),
)


def parse_chat_money(message: Optional[str]) -> int:
    """Return the total copper value of every coin token in ``message``."""
    if not message or not isinstance(message, str):
        return 0
    copper = 0
    for pattern, weight in _DENOMINATIONS:
        for match in pattern.finditer(message):
            try:
                copper += int(match.group(1)) * weight
            except (TypeError, ValueError):
                continue
    return copper


class ChatMoneyFilter:
    """Message filter that appends the converted total to money messages.

    Never suppresses a message; the rewritten text is only returned when a
    coin amount was found.
    """

    def __init__(self, toggle: ToggleState, formatter: MoneyFormatter) -> None:
        self._toggle = toggle
        self._formatter = formatter

    def rebind(self, toggle: ToggleState, formatter: MoneyFormatter) -> None:
        self._toggle = toggle
        self._formatter = formatter

    def __call__(self, surface: Any, event: str, message: Any, *rest: Any) -> Tuple[Any, ...]:
        if not self._toggle.is_enabled() or not isinstance(message, str):
            return (False,)
        try:
            copper = parse_chat_money(message)
            suffix = self._formatter.decorated(copper) if copper > 0 else ""
        except Exception as exc:
            _LOGGER.debug("Chat money conversion failed for %s: %s", event, exc, exc_info=exc)
            return (False,)
        if not suffix:
            return (False,)
        return (False, message + suffix, *rest)
