"""PyQt6 surfaces for hosts whose money displays are Qt widgets."""
from __future__ import annotations

import html
import re
from typing import Any, List, Optional, Tuple

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QWidget

from p2w_plugin.overlay_cache import OverlayStyle, place_overlay

_COLOR_DIRECTIVE = re.compile(r"\|c([0-9a-fA-F]{2})([0-9a-fA-F]{6})(.*?)\|r", re.DOTALL)


def color_directives_to_html(text: str) -> str:
    """Translate ``|cAARRGGBB text|r`` runs into HTML spans, escaping the rest."""
    parts: List[str] = []
    position = 0
    for match in _COLOR_DIRECTIVE.finditer(text or ""):
        parts.append(html.escape(text[position:match.start()]))
        parts.append(f'<span style="color: #{match.group(2).lower()}">{html.escape(match.group(3))}</span>')
        position = match.end()
    parts.append(html.escape((text or "")[position:]))
    return "".join(parts)


def _css_color(rgb: Tuple[float, float, float]) -> str:
    channels = [max(0, min(255, round(float(value) * 255))) for value in rgb]
    return "#{:02x}{:02x}{:02x}".format(*channels)


class QtOverlayText:
    """QLabel kept anchored to a money widget."""

    def __init__(self, surface: QWidget, style: OverlayStyle) -> None:
        self._surface = surface
        self._style = style
        parent = surface.parentWidget() or surface
        self.label = QLabel("", parent)
        self.label.setObjectName(f"{surface.objectName() or 'surface'}P2WOverlay")
        self.label.setStyleSheet(f"color: {_css_color(style.color)}; background: transparent;")
        self.label.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.label.hide()

    def set_text(self, text: str) -> None:
        self.label.setText(text)
        if not text:
            self.label.hide()
            return
        self.label.adjustSize()
        self._reposition()
        self.label.show()
        self.label.raise_()

    def _reposition(self) -> None:
        geometry = self._surface.geometry()
        if self.label.parentWidget() is self._surface:
            bounds = (0.0, 0.0, float(geometry.width()), float(geometry.height()))
        else:
            bounds = (
                float(geometry.left()),
                float(geometry.top()),
                float(geometry.left() + geometry.width()),
                float(geometry.top() + geometry.height()),
            )
        size = (float(self.label.width()), float(self.label.height()))
        x, y = place_overlay(bounds, size, self._style.anchor)
        self.label.move(round(x), round(y))


class QtMoneySurface:
    """Adapts a ``QWidget`` showing a money amount to the overlay cache."""

    def __init__(self, widget: QWidget) -> None:
        self.widget = widget

    def get_name(self) -> Optional[str]:
        return self.widget.objectName() or None

    def create_overlay_text(self, style: OverlayStyle) -> QtOverlayText:
        return QtOverlayText(self.widget, style)


class QtTooltip:
    """Multi-line tooltip label accepting host-style coloured lines."""

    def __init__(self, label: QLabel) -> None:
        self.label = label
        self.label.setTextFormat(Qt.TextFormat.RichText)
        self._lines: List[str] = []

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def add_line(self, text: str, red: float = 1.0, green: float = 1.0, blue: float = 1.0) -> None:
        line = color_directives_to_html(text)
        if "<span" not in line:
            line = f'<span style="color: {_css_color((red, green, blue))}">{line}</span>'
        self._lines.append(line)
        self.label.setText("<br/>".join(self._lines))

    def clear(self) -> None:
        self._lines.clear()
        self.label.setText("")

    def show(self) -> None:
        self.label.adjustSize()
        self.label.show()


def as_money_surface(target: Any) -> Any:
    """Return ``target`` wrapped in :class:`QtMoneySurface` when it is a widget."""
    if isinstance(target, QWidget):
        return QtMoneySurface(target)
    return target
