"""Slash command handling for toggling the conversion display.

``/p2w`` with no argument (or ``toggle``) flips the display, ``on`` and
``off`` set it explicitly. ``rate`` and ``test`` print the exchange rate and
a few sample conversions. The enabled flag is written back to the
preferences file on every change.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Optional

from p2w_plugin.formatting import MoneyFormatter
from p2w_plugin.toggle import ToggleState

_LOGGER = logging.getLogger("P2W.Commands")

CHAT_PREFIX = "|cff00ff00p2w:|r"
TEST_PREFIX = "|cff00ff00p2w Test:|r"


@dataclass
class _CommandContext:
    """Callbacks the command helper needs from the runtime."""

    toggle: ToggleState
    formatter: MoneyFormatter
    send_message: Callable[[str], None]
    persist: Optional[Callable[[bool], None]] = None


class SlashCommandHelper:
    def __init__(self, context: _CommandContext) -> None:
        self._ctx = context

    def handle(self, message: object) -> bool:
        """Process the text typed after ``/p2w``.

        Returns ``True`` when the text was a supported command.
        """

        if not isinstance(message, str):
            return False
        text = message.strip().lower()
        if text in {"", "toggle"}:
            self._set_enabled(not self._ctx.toggle.is_enabled())
            return True
        if text == "on":
            self._set_enabled(True)
            return True
        if text == "off":
            self._set_enabled(False)
            return True
        if text == "rate":
            self._ctx.send_message(f"{CHAT_PREFIX} Exchange rate:")
            for line in self._ctx.formatter.describe_rate():
                self._ctx.send_message(f"  {line}")
            return True
        if text == "test":
            self._ctx.send_message(TEST_PREFIX)
            for line in self._ctx.formatter.sample_lines():
                self._ctx.send_message(f"  {line}")
            return True
        _LOGGER.debug("Unsupported p2w command: %s", text)
        return False

    def _set_enabled(self, value: bool) -> None:
        self._ctx.toggle.set_enabled(value)
        if self._ctx.persist is not None:
            try:
                self._ctx.persist(value)
            except OSError as exc:
                _LOGGER.warning("Failed to save enabled flag: %s", exc)
        self._ctx.send_message(f"{CHAT_PREFIX} {'Enabled' if value else 'Disabled'}")


def build_command_helper(
    toggle: ToggleState,
    formatter: MoneyFormatter,
    send_message: Callable[[str], None],
    persist: Optional[Callable[[bool], None]] = None,
) -> SlashCommandHelper:
    context = _CommandContext(
        toggle=toggle,
        formatter=formatter,
        send_message=send_message,
        persist=persist,
    )
    return SlashCommandHelper(context)
