from __future__ import annotations

import os
from typing import Any, Dict

import pytest

from p2w_plugin.conversion import ConversionEngine
from p2w_plugin.formatting import MoneyFormatter
from p2w_plugin.host import HostEnvironment
from p2w_plugin.toggle import ToggleState
from fakes import build_fake_namespace


def pytest_runtest_setup(item):
    if item.get_closest_marker("pyqt_required"):
        if not os.getenv("PYQT_TESTS"):
            pytest.skip("PYQT_TESTS not set; skipping PyQt-dependent test")


@pytest.fixture
def namespace() -> Dict[str, Any]:
    return build_fake_namespace()


@pytest.fixture
def host(namespace) -> HostEnvironment:
    return HostEnvironment(namespace)


@pytest.fixture
def toggle() -> ToggleState:
    return ToggleState(True)


@pytest.fixture
def formatter(toggle) -> MoneyFormatter:
    return MoneyFormatter(ConversionEngine(0.3), toggle=toggle)
