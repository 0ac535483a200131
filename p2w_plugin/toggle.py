from __future__ import annotations


class ToggleState:
    """Single shared enabled flag.

    Hooks capture one instance at install time and read it on every call.
    Only the command and preference paths write it.
    """

    __slots__ = ("_enabled",)

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = bool(enabled)

    def is_enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, value: bool) -> None:
        self._enabled = bool(value)

    def toggle(self) -> bool:
        self._enabled = not self._enabled
        return self._enabled

    def __bool__(self) -> bool:
        return self._enabled

    def __repr__(self) -> str:
        return f"ToggleState(enabled={self._enabled})"
