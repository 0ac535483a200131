"""Persisted settings for the p2w plugin."""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from p2w_plugin.conversion import DEFAULT_EXCHANGE_RATE
from p2w_plugin.formatting import DEFAULT_CURRENCY_LABEL

PREFERENCES_FILE = "p2w_settings.json"

_LOGGER = logging.getLogger("P2W")


@dataclass
class Preferences:
    """Simple JSON-backed preferences store."""

    plugin_dir: Path
    enabled: bool = True
    exchange_rate: float = DEFAULT_EXCHANGE_RATE
    currency_label: str = DEFAULT_CURRENCY_LABEL
    log_level: Optional[str] = None

    def __post_init__(self) -> None:
        self.plugin_dir = Path(self.plugin_dir)
        self._path = self.plugin_dir / PREFERENCES_FILE
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    # Persistence ---------------------------------------------------------

    def _load(self) -> None:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError) as exc:
            _LOGGER.debug("Ignoring unreadable preferences at %s: %s", self._path, exc)
            return
        if not isinstance(data, dict):
            return
        self.enabled = bool(data.get("enabled", True))
        try:
            rate = float(data.get("exchange_rate", DEFAULT_EXCHANGE_RATE))
        except (TypeError, ValueError):
            rate = DEFAULT_EXCHANGE_RATE
        self.exchange_rate = rate if math.isfinite(rate) and rate > 0 else DEFAULT_EXCHANGE_RATE
        label = data.get("currency_label")
        self.currency_label = label.strip() if isinstance(label, str) and label.strip() else DEFAULT_CURRENCY_LABEL
        level = data.get("log_level")
        self.log_level = level.strip().upper() if isinstance(level, str) and level.strip() else None

    def save(self) -> None:
        payload: Dict[str, Any] = {
            "enabled": bool(self.enabled),
            "exchange_rate": float(self.exchange_rate),
            "currency_label": str(self.currency_label or DEFAULT_CURRENCY_LABEL),
        }
        if self.log_level:
            payload["log_level"] = str(self.log_level)
        self.plugin_dir.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
