"""Non-destructive wrappers around host money entry points.

Two wrapper shapes cover every entry point:

* suffix hooks wrap value-returning formatters and append the decorated
  conversion to the returned string;
* post hooks wrap side-effecting procedures and run a callback with the
  same arguments after the original has completed.

The original is always called first and its result returned unchanged
unless a suffix applies. Failures in the conversion step are logged and
swallowed so the host sees the call as if no hook were present.

Wrappers outlive the runtime that installed them. Each one reads its
toggle, formatter and callback from a :class:`HookBinding` on every call,
and a later registry adopting the wrapper rebinds that slot to its own
state.
"""
from __future__ import annotations

import functools
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from p2w_plugin.conversion import coerce_amount
from p2w_plugin.formatting import MoneyFormatter
from p2w_plugin.host import HostEnvironment
from p2w_plugin.toggle import ToggleState

_LOGGER = logging.getLogger("P2W.Hooks")

HOOK_MARKER = "__p2w_hook__"

KIND_SUFFIX = "suffix"
KIND_POST = "post"


class HookInstallError(RuntimeError):
    """Raised when an existing host entry point cannot be wrapped."""


class HookBinding:
    """State an installed wrapper consults on each call."""

    __slots__ = ("toggle", "formatter", "callback")

    def __init__(
        self,
        toggle: ToggleState,
        formatter: MoneyFormatter,
        callback: Optional[Callable[..., Any]] = None,
    ) -> None:
        self.toggle = toggle
        self.formatter = formatter
        self.callback = callback

    def rebind(
        self,
        toggle: ToggleState,
        formatter: MoneyFormatter,
        callback: Optional[Callable[..., Any]] = None,
    ) -> None:
        self.toggle = toggle
        self.formatter = formatter
        self.callback = callback


@dataclass(frozen=True)
class HookHandle:
    path: str
    kind: str
    original: Callable[..., Any]
    wrapper: Callable[..., Any]
    binding: HookBinding


def _amount_keyword(original: Callable[..., Any], index: int) -> Optional[str]:
    """Name under which the amount may be passed by keyword, if any."""
    try:
        parameters = list(inspect.signature(original).parameters.values())
    except (TypeError, ValueError):
        return None
    if index >= len(parameters):
        return None
    parameter = parameters[index]
    if parameter.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY):
        return parameter.name
    return None


class HookRegistry:
    """Installs each wrapper at most once and remembers the handles."""

    def __init__(self, host: HostEnvironment, toggle: ToggleState, formatter: MoneyFormatter) -> None:
        self._host = host
        self._toggle = toggle
        self._formatter = formatter
        self._handles: Dict[str, HookHandle] = {}

    @property
    def toggle(self) -> ToggleState:
        return self._toggle

    def handle(self, path: str) -> Optional[HookHandle]:
        return self._handles.get(path)

    def is_installed(self, path: str) -> bool:
        return path in self._handles

    def installed_paths(self) -> list[str]:
        return list(self._handles)

    # Installation ---------------------------------------------------------

    def install_suffix(self, path: str, *, amount_index: int = 0) -> Optional[HookHandle]:
        """Wrap a money-to-string formatter so it returns ``original + conversion``.

        The amount is taken from ``args[amount_index]``, or from the keyword
        naming that parameter in the original's signature.
        """

        def _factory(original: Callable[..., Any], binding: HookBinding) -> Callable[..., Any]:
            keyword = _amount_keyword(original, amount_index)

            @functools.wraps(original)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                result = original(*args, **kwargs)
                if not binding.toggle.is_enabled():
                    return result
                try:
                    if len(args) > amount_index:
                        raw = args[amount_index]
                    else:
                        raw = kwargs.get(keyword) if keyword else None
                    amount = coerce_amount(raw)
                    if amount <= 0 or not isinstance(result, str):
                        return result
                    return result + binding.formatter.decorated(amount)
                except Exception as exc:
                    _LOGGER.debug("Conversion suffix failed for %s: %s", path, exc, exc_info=exc)
                    return result

            return wrapper

        return self._install(path, KIND_SUFFIX, _factory)

    def install_post_hook(self, path: str, callback: Callable[..., Any]) -> Optional[HookHandle]:
        """Run ``callback(*args, **kwargs)`` after each call to the host procedure."""

        def _factory(original: Callable[..., Any], binding: HookBinding) -> Callable[..., Any]:
            @functools.wraps(original)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                result = original(*args, **kwargs)
                callback_now = binding.callback
                if callback_now is None:
                    return result
                try:
                    callback_now(*args, **kwargs)
                except Exception as exc:
                    _LOGGER.debug("Post hook for %s failed: %s", path, exc, exc_info=exc)
                return result

            return wrapper

        return self._install(path, KIND_POST, _factory, callback)

    def _install(
        self,
        path: str,
        kind: str,
        factory: Callable[[Callable[..., Any], HookBinding], Callable[..., Any]],
        callback: Optional[Callable[..., Any]] = None,
    ) -> Optional[HookHandle]:
        existing = self._handles.get(path)
        if existing is not None:
            return existing
        original = self._host.resolve(path)
        if original is None:
            _LOGGER.debug("Host entry point %s not available; hook skipped", path)
            return None
        if not callable(original):
            raise HookInstallError(f"Host entry point {path} is not callable")
        marker = getattr(original, HOOK_MARKER, None)
        if isinstance(marker, HookHandle):
            # Wrapped by an earlier registry in this process; take it over instead of stacking.
            marker.binding.rebind(self._toggle, self._formatter, callback)
            self._handles[path] = marker
            _LOGGER.debug("Adopted existing %s hook on %s", marker.kind, path)
            return marker
        binding = HookBinding(self._toggle, self._formatter, callback)
        wrapper = factory(original, binding)
        handle = HookHandle(path=path, kind=kind, original=original, wrapper=wrapper, binding=binding)
        setattr(wrapper, HOOK_MARKER, handle)
        try:
            self._host.assign(path, wrapper)
        except (AttributeError, TypeError, LookupError) as exc:
            raise HookInstallError(f"Unable to replace host entry point {path}: {exc}") from exc
        self._handles[path] = handle
        _LOGGER.debug("Installed %s hook on %s", kind, path)
        return handle
