"""Render converted amounts as display strings."""
from __future__ import annotations

from typing import List, Optional

from p2w_plugin.conversion import COPPER_PER_GOLD, ConversionEngine, coerce_amount
from p2w_plugin.toggle import ToggleState

DEFAULT_CURRENCY_LABEL = "kr"
DISPLAY_COLOR = "ff00ff00"


class MoneyFormatter:
    """Formats copper amounts in the target currency.

    The decorated variant carries a ``|cAARRGGBB ... |r`` colour directive for
    surfaces that render inline markup; the plain variant is for text objects
    that are coloured by the overlay itself. Both are empty for a zero or
    missing amount, and for any amount while the bound toggle is disabled.
    """

    def __init__(
        self,
        engine: ConversionEngine,
        *,
        currency_label: str = DEFAULT_CURRENCY_LABEL,
        toggle: Optional[ToggleState] = None,
    ) -> None:
        self._engine = engine
        self._label = (currency_label or DEFAULT_CURRENCY_LABEL).strip() or DEFAULT_CURRENCY_LABEL
        self._toggle = toggle
        self._plain_template = f"(%.2f {self._label})"
        self._decorated_template = f" |c{DISPLAY_COLOR}{self._plain_template}|r"

    @property
    def engine(self) -> ConversionEngine:
        return self._engine

    @property
    def currency_label(self) -> str:
        return self._label

    def format(self, amount: object, decorated: bool = True) -> str:
        copper = coerce_amount(amount)
        if copper == 0:
            return ""
        if self._toggle is not None and not self._toggle.is_enabled():
            return ""
        template = self._decorated_template if decorated else self._plain_template
        return template % self._engine.convert(copper)

    def decorated(self, amount: object) -> str:
        return self.format(amount, decorated=True)

    def plain(self, amount: object) -> str:
        return self.format(amount, decorated=False)

    def describe_rate(self) -> List[str]:
        rate = self._engine.rate
        return [
            f"1g = {rate:.2f} {self._label}",
            f"1 {self._label} = {1 / rate:.2f}g",
        ]

    def sample_lines(self) -> List[str]:
        samples = (
            ("1g", COPPER_PER_GOLD),
            ("100g", 100 * COPPER_PER_GOLD),
            ("1000g", 1000 * COPPER_PER_GOLD),
            ("12g 34s 56c", 123456),
        )
        return [f"{label} ={self._decorated_template % self._engine.convert(copper)}" for label, copper in samples]
