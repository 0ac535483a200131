"""Dotted-path access to the host application's global namespace."""
from __future__ import annotations

import sys
from typing import Any, List, Mapping, MutableMapping, Optional, Tuple

_MISSING = object()


def _lookup(container: Any, name: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(name, _MISSING)
    return getattr(container, name, _MISSING)


class HostEnvironment:
    """View over the host namespace (a mapping or any attribute container).

    Entry points are addressed by dotted paths such as
    ``"C_CurrencyInfo.GetCoinTextureString"``. Missing segments resolve to
    ``None`` rather than raising, since most host APIs are optional.
    """

    def __init__(self, namespace: Any) -> None:
        self._namespace = namespace

    @property
    def namespace(self) -> Any:
        return self._namespace

    @staticmethod
    def _split(path: str) -> List[str]:
        parts = [part for part in (path or "").strip().split(".") if part]
        if not parts:
            raise ValueError(f"Invalid host path: {path!r}")
        return parts

    def _parent_of(self, path: str) -> Tuple[Any, str]:
        parts = self._split(path)
        container = self._namespace
        for name in parts[:-1]:
            container = _lookup(container, name)
            if container is _MISSING or container is None:
                return _MISSING, parts[-1]
        return container, parts[-1]

    def resolve(self, path: str) -> Optional[Any]:
        container, name = self._parent_of(path)
        if container is _MISSING:
            return None
        value = _lookup(container, name)
        return None if value is _MISSING else value

    def has_callable(self, path: str) -> bool:
        return callable(self.resolve(path))

    def assign(self, path: str, value: Any) -> None:
        container, name = self._parent_of(path)
        if container is _MISSING:
            raise LookupError(f"Host path {path!r} has no parent to assign into")
        if isinstance(container, MutableMapping):
            container[name] = value
        else:
            setattr(container, name, value)

    def resolve_surface(self, surface: Any) -> Optional[Any]:
        if isinstance(surface, str):
            target = self.resolve(surface) if surface.strip() else None
        else:
            target = surface
        return _adapt_surface(target)


def _adapt_surface(target: Any) -> Any:
    """Wrap toolkit widgets that cannot create overlay text themselves."""
    if target is None or callable(getattr(target, "create_overlay_text", None)):
        return target
    # Qt hosts have PyQt6 loaded before any plugin starts.
    if "PyQt6.QtWidgets" not in sys.modules:
        return target
    from p2w_plugin.qt_surfaces import as_money_surface

    return as_money_surface(target)
