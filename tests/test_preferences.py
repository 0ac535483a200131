from __future__ import annotations

import json

from p2w_plugin.preferences import PREFERENCES_FILE, Preferences


def test_defaults_when_file_missing(tmp_path):
    prefs = Preferences(tmp_path)
    assert prefs.enabled is True
    assert prefs.exchange_rate == 0.3
    assert prefs.currency_label == "kr"
    assert prefs.log_level is None


def test_round_trip_enabled_flag(tmp_path):
    prefs = Preferences(tmp_path)
    prefs.enabled = False
    prefs.save()

    data = json.loads((tmp_path / PREFERENCES_FILE).read_text(encoding="utf-8"))
    assert data["enabled"] is False
    assert Preferences(tmp_path).enabled is False


def test_invalid_values_fall_back(tmp_path):
    (tmp_path / PREFERENCES_FILE).write_text(
        json.dumps({"enabled": 0, "exchange_rate": -2, "currency_label": "  ", "log_level": " debug "}),
        encoding="utf-8",
    )
    prefs = Preferences(tmp_path)
    assert prefs.enabled is False
    assert prefs.exchange_rate == 0.3
    assert prefs.currency_label == "kr"
    assert prefs.log_level == "DEBUG"


def test_corrupt_file_uses_defaults(tmp_path):
    (tmp_path / PREFERENCES_FILE).write_text("{not json", encoding="utf-8")
    prefs = Preferences(tmp_path)
    assert prefs.enabled is True


def test_custom_rate_loaded(tmp_path):
    (tmp_path / PREFERENCES_FILE).write_text(json.dumps({"exchange_rate": "0.45", "currency_label": "EUR"}), encoding="utf-8")
    prefs = Preferences(tmp_path)
    assert prefs.exchange_rate == 0.45
    assert prefs.currency_label == "EUR"
