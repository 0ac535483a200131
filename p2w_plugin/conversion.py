"""Gold to real-currency conversion."""
from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any

COPPER_PER_GOLD = 10_000
COPPER_PER_SILVER = 100
DEFAULT_EXCHANGE_RATE = 0.3


def coerce_amount(value: Any) -> int:
    """Return ``value`` as a copper amount, or 0 when it is not a usable amount."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        token = value.strip()
        if not token:
            return 0
        try:
            number: float = int(token)
        except ValueError:
            try:
                number = float(token)
            except ValueError:
                return 0
    elif isinstance(value, Real):
        number = value
    else:
        return 0
    if not math.isfinite(number) or number <= 0:
        return 0
    return int(number)


@dataclass(frozen=True)
class ConversionEngine:
    """Fixed linear rate between one gold and one unit of the target currency."""

    rate: float = DEFAULT_EXCHANGE_RATE

    def __post_init__(self) -> None:
        try:
            rate = float(self.rate)
        except (TypeError, ValueError):
            raise ValueError(f"Exchange rate must be a number, got {self.rate!r}") from None
        if not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"Exchange rate must be positive, got {self.rate!r}")
        object.__setattr__(self, "rate", rate)

    def major_units(self, amount: Any) -> float:
        return coerce_amount(amount) / COPPER_PER_GOLD

    def convert(self, amount: Any) -> float:
        return self.major_units(amount) * self.rate
