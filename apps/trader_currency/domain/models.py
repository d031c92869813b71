"""
Pure domain entities (POPOs).
No dependency on Django or the game server tables.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from apps.trader_currency.domain.exceptions import InvalidExchangeRateError


class Currency(str, Enum):
    """Currencies the game server knows about."""

    RUB = "RUB"
    EUR = "EUR"
    USD = "USD"

    @property
    def template_id(self) -> str:
        return CURRENCY_TEMPLATE_IDS[self]


# Item template ids of the money stacks in the game database
CURRENCY_TEMPLATE_IDS: dict[Currency, str] = {
    Currency.RUB: "5449016a4bdc2d6f028b456f",
    Currency.EUR: "569668774bdc2da2298b4568",
    Currency.USD: "5696686a4bdc2da3298b456a",
}

# Fixed markup applied to converted quest rewards
REWARD_MARKUP = Decimal("1.25")


class RateSource(str, Enum):
    REFERENCE_ITEM = "reference_item"
    DEFAULT = "default"


@dataclass(frozen=True)
class ConversionTarget:
    """Which trader gets converted, and between which currencies."""

    trader_nickname: str
    trader_id: str
    reference_item_id: str
    source_currency: Currency
    target_currency: Currency
    default_rate: Decimal

    def __post_init__(self):
        if self.source_currency == self.target_currency:
            raise ValueError("source_currency and target_currency must be different")
        # Fail at startup rather than on the first trader without a reference price
        ExchangeRate(self.source_currency, self.target_currency, self.default_rate)


@dataclass(frozen=True)
class ExchangeRate:

    source_currency: Currency
    target_currency: Currency
    rate_value: Decimal
    source: RateSource = RateSource.DEFAULT

    def __post_init__(self):
        try:
            finite = math.isfinite(self.rate_value)
        except (TypeError, ValueError, InvalidOperation):
            finite = False
        if not finite or self.rate_value <= 0:
            raise InvalidExchangeRateError(
                f"rate_value must be a positive finite number, got {self.rate_value!r}"
            )

    def to_target(self, amount) -> Decimal:
        """Divide a source-currency amount by the rate."""
        return Decimal(str(amount)) / self.rate_value


@dataclass(frozen=True)
class ConversionReport:
    """Outcome of one conversion pass."""

    trader_found: bool
    trader_id: str
    trader_nickname: str
    exchange_rate: ExchangeRate
    barters_converted: int = 0
    quests_processed: int = 0
    rewards_converted: int = 0
