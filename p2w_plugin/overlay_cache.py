"""Per-surface overlay text registry."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Optional, Protocol, Tuple

_LOGGER = logging.getLogger("P2W.Overlay")


class OverlayText(Protocol):
    def set_text(self, text: str) -> None: ...


class MoneySurface(Protocol):
    def get_name(self) -> Optional[str]: ...
    def create_overlay_text(self, style: "OverlayStyle") -> OverlayText: ...


@dataclass(frozen=True)
class OverlayAnchor:
    """Attach ``point`` of the overlay to ``relative_point`` of its surface.

    Offsets follow the host's convention: positive ``y`` moves up.
    """

    point: str = "BOTTOM"
    relative_point: str = "TOP"
    x: float = 0.0
    y: float = 2.0


ANCHOR_ABOVE = OverlayAnchor("BOTTOM", "TOP", 0.0, 2.0)
ANCHOR_BELOW = OverlayAnchor("TOP", "BOTTOM", 0.0, -2.0)


@dataclass(frozen=True)
class OverlayStyle:
    layer: str = "OVERLAY"
    font: str = "GameFontNormalSmall"
    color: Tuple[float, float, float] = (0.0, 1.0, 0.0)
    anchor: OverlayAnchor = ANCHOR_ABOVE

    def with_anchor(self, anchor: OverlayAnchor) -> "OverlayStyle":
        return OverlayStyle(self.layer, self.font, self.color, anchor)


DEFAULT_STYLE = OverlayStyle()


def anchor_point_from_bounds(bounds: Tuple[float, float, float, float], point: str) -> Tuple[float, float]:
    """Return the coordinates of a named anchor on ``(min_x, min_y, max_x, max_y)``.

    ``min_y`` is the top edge (screen coordinates grow downwards).
    """
    min_x, min_y, max_x, max_y = bounds
    mid_x = (min_x + max_x) / 2.0
    mid_y = (min_y + max_y) / 2.0
    token = (point or "TOPLEFT").strip().upper()
    if token == "CENTER":
        return mid_x, mid_y
    if token == "TOP":
        return mid_x, min_y
    if token == "TOPRIGHT":
        return max_x, min_y
    if token == "RIGHT":
        return max_x, mid_y
    if token == "BOTTOMRIGHT":
        return max_x, max_y
    if token == "BOTTOM":
        return mid_x, max_y
    if token == "BOTTOMLEFT":
        return min_x, max_y
    if token == "LEFT":
        return min_x, mid_y
    return min_x, min_y


def place_overlay(
    surface_bounds: Tuple[float, float, float, float],
    overlay_size: Tuple[float, float],
    anchor: OverlayAnchor,
) -> Tuple[float, float]:
    """Top-left position for an overlay of ``overlay_size`` anchored to a surface."""
    target_x, target_y = anchor_point_from_bounds(surface_bounds, anchor.relative_point)
    width, height = overlay_size
    own_x, own_y = anchor_point_from_bounds((0.0, 0.0, width, height), anchor.point)
    return target_x + anchor.x - own_x, target_y - anchor.y - own_y


@dataclass
class OverlayEntry:
    key: str
    text_object: OverlayText
    text: str = field(default="")

    def set_text(self, text: str) -> None:
        value = text or ""
        self.text = value
        self.text_object.set_text(value)


class OverlayCache:
    """Owns at most one overlay text object per surface key.

    Entries are created on first use and live for the rest of the process;
    disabling only clears their text.
    """

    def __init__(
        self,
        resolve_surface: Optional[Callable[[Any], Optional[MoneySurface]]] = None,
        *,
        style: OverlayStyle = DEFAULT_STYLE,
    ) -> None:
        self._resolve_surface = resolve_surface or (lambda surface: surface)
        self._style = style
        self._entries: Dict[str, OverlayEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, surface: Any) -> bool:
        key = self.key_for(surface)
        return key is not None and key in self._entries

    def __iter__(self) -> Iterator[OverlayEntry]:
        return iter(list(self._entries.values()))

    @staticmethod
    def key_for(surface: Any) -> Optional[str]:
        if surface is None:
            return None
        if isinstance(surface, str):
            return surface.strip() or None
        getter = getattr(surface, "get_name", None)
        name = None
        if callable(getter):
            try:
                name = getter()
            except Exception:
                name = None
        if isinstance(name, str) and name:
            return name
        return f"{type(surface).__name__}@{id(surface):x}"

    def peek(self, surface: Any) -> Optional[OverlayEntry]:
        key = self.key_for(surface)
        if key is None:
            return None
        return self._entries.get(key)

    def get_or_create(self, surface: Any, *, anchor: Optional[OverlayAnchor] = None) -> Optional[OverlayEntry]:
        key = self.key_for(surface)
        if key is None:
            return None
        entry = self._entries.get(key)
        if entry is not None:
            return entry
        target = self._resolve_surface(surface)
        if target is None:
            return None
        style = self._style if anchor is None else self._style.with_anchor(anchor)
        text_object = target.create_overlay_text(style)
        entry = OverlayEntry(key=key, text_object=text_object)
        self._entries[key] = entry
        _LOGGER.debug("Created overlay for surface %s (anchor %s->%s)", key, style.anchor.point, style.anchor.relative_point)
        return entry

    def set_text(self, surface: Any, text: str) -> Optional[OverlayEntry]:
        entry = self.get_or_create(surface)
        if entry is not None:
            entry.set_text(text)
        return entry

    def clear(self, surface: Any) -> None:
        entry = self.peek(surface)
        if entry is not None:
            entry.set_text("")
