from __future__ import annotations

import os

import pytest

pytest.importorskip("PyQt6")

from PyQt6.QtWidgets import QApplication, QLabel, QWidget  # noqa: E402

from p2w_plugin.host import HostEnvironment  # noqa: E402
from p2w_plugin.integrations import MoneyHooks  # noqa: E402
from p2w_plugin.overlay_cache import ANCHOR_BELOW, OverlayCache  # noqa: E402
from p2w_plugin.qt_surfaces import QtMoneySurface, QtTooltip, as_money_surface, color_directives_to_html  # noqa: E402

pytestmark = pytest.mark.pyqt_required


@pytest.fixture(scope="module")
def app():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def money_widget(app):  # noqa: ARG001 - fixture required
    window = QWidget()
    window.resize(400, 300)
    widget = QWidget(window)
    widget.setObjectName("MerchantMoneyFrame")
    widget.setGeometry(100, 100, 120, 20)
    yield widget
    window.deleteLater()


def test_color_directives_to_html():
    assert color_directives_to_html(" |cff00ff00(3.70 kr)|r") == ' <span style="color: #00ff00">(3.70 kr)</span>'
    assert color_directives_to_html("a < b") == "a &lt; b"


def test_surface_overlay_sits_above_widget(money_widget):
    surface = QtMoneySurface(money_widget)
    cache = OverlayCache()

    entry = cache.get_or_create(surface)
    entry.set_text("(3.70 kr)")

    label = entry.text_object.label
    assert entry.key == "MerchantMoneyFrame"
    assert label.text() == "(3.70 kr)"
    assert label.isVisibleTo(money_widget.parentWidget())
    assert label.y() + label.height() == money_widget.y() - 2
    assert "#00ff00" in label.styleSheet()


def test_surface_overlay_below_and_hidden_when_cleared(money_widget):
    surface = QtMoneySurface(money_widget)
    cache = OverlayCache()
    entry = cache.get_or_create(surface, anchor=ANCHOR_BELOW)

    entry.set_text("(0.30 kr)")
    assert entry.text_object.label.y() == money_widget.y() + money_widget.height() + 2

    cache.clear(surface)
    assert entry.text_object.label.isHidden()


def test_tooltip_lines_render_colours(app):  # noqa: ARG001 - fixture required
    tooltip = QtTooltip(QLabel())
    tooltip.add_line("Sell Price: 1g")
    tooltip.add_line(" |cff00ff00(0.30 kr)|r", 0.0, 1.0, 0.0)
    tooltip.show()

    assert tooltip.lines == [
        '<span style="color: #ffffff">Sell Price: 1g</span>',
        ' <span style="color: #00ff00">(0.30 kr)</span>',
    ]
    assert tooltip.label.text() == "<br/>".join(tooltip.lines)


def test_host_wraps_named_widget_as_surface(money_widget):
    host = HostEnvironment({"MerchantMoneyFrame": money_widget})

    surface = host.resolve_surface("MerchantMoneyFrame")

    assert isinstance(surface, QtMoneySurface)
    assert surface.widget is money_widget
    assert as_money_surface("text") == "text"


def test_frame_update_hook_draws_on_qt_widget(money_widget, toggle, formatter):
    namespace = {"MerchantMoneyFrame": money_widget, "MoneyFrame_Update": lambda frame_name, money: None}
    hooks = MoneyHooks(HostEnvironment(namespace), toggle, formatter)
    hooks.install_all()

    namespace["MoneyFrame_Update"]("MerchantMoneyFrame", 123456)

    entry = hooks.cache.peek("MerchantMoneyFrame")
    assert entry is not None
    assert entry.text_object.label.text() == "(3.70 kr)"
    assert not entry.text_object.label.isHidden()
