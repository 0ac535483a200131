from __future__ import annotations

import math

import pytest

from p2w_plugin.conversion import ConversionEngine, coerce_amount


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 0),
        (0, 0),
        (-5, 0),
        (True, 0),
        ("", 0),
        ("abc", 0),
        (" 250 ", 250),
        ("12.9", 12),
        (12.9, 12),
        (math.nan, 0),
        (math.inf, 0),
        (object(), 0),
        (123456, 123456),
    ],
)
def test_coerce_amount(raw, expected):
    assert coerce_amount(raw) == expected


def test_convert_zero_is_zero():
    assert ConversionEngine(0.3).convert(0) == 0


def test_convert_uses_gold_units():
    engine = ConversionEngine(0.3)
    assert engine.major_units(123456) == pytest.approx(12.3456)
    assert engine.convert(123456) == pytest.approx(3.70368)
    assert engine.convert(100000) == pytest.approx(3.0)


@pytest.mark.parametrize("amount", [1, 7, 10000, 123456, 99999999])
def test_convert_is_linear(amount):
    engine = ConversionEngine(0.3)
    assert engine.convert(2 * amount) == 2 * engine.convert(amount)


def test_malformed_amount_converts_to_zero():
    assert ConversionEngine().convert("not money") == 0


@pytest.mark.parametrize("rate", [0, -0.3, math.nan, math.inf, "fast"])
def test_invalid_rate_rejected(rate):
    with pytest.raises(ValueError):
        ConversionEngine(rate)


def test_rate_is_fixed_after_construction():
    engine = ConversionEngine("0.5")
    assert engine.rate == 0.5
    with pytest.raises(AttributeError):
        engine.rate = 1.0  # type: ignore[misc]
