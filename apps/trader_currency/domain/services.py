"""
Domain services - Core business logic.
Converts a trader priced in one currency (Roubles) to another (Euros),
together with the money rewards of that trader's quests.

All operations mutate the tables they receive in place. The tables belong to
the host; the caller must not touch them from elsewhere during a pass.
"""

import logging
from decimal import Decimal, InvalidOperation, ROUND_CEILING, ROUND_HALF_UP
from typing import Iterable, Optional

from apps.trader_currency.domain.interfaces import BaseDatabaseTables
from apps.trader_currency.domain.models import (
    REWARD_MARKUP,
    ConversionReport,
    ConversionTarget,
    ExchangeRate,
    RateSource,
)

LOG_PREFIX = "[OneEuroForSkier]"


def parse_count(value) -> Optional[Decimal]:
    """Return a barter count as a Decimal, or None when it is not a number."""
    if isinstance(value, bool):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return None


class CurrencyConverter:
    """
    Domain service that rewrites a trader and its quest rewards to a new currency.

    Pass order:
    1. Find the trader by nickname
    2. Read the exchange rate from the reference item's barter price
    3. Rescale loyalty levels and single-item barters
    4. Rescale money rewards of the trader's quests
    """

    def __init__(self, target: ConversionTarget, logger: logging.Logger):
        self.target = target
        self.logger = logger

    @property
    def source_tpl(self) -> str:
        return self.target.source_currency.template_id

    @property
    def target_tpl(self) -> str:
        return self.target.target_currency.template_id

    def default_rate(self) -> ExchangeRate:
        return ExchangeRate(
            source_currency=self.target.source_currency,
            target_currency=self.target.target_currency,
            rate_value=self.target.default_rate,
            source=RateSource.DEFAULT,
        )

    @staticmethod
    def find_trader(traders: dict[str, dict], nickname: str) -> Optional[dict]:
        """Return the first trader whose nickname matches exactly, or None."""
        return next(
            (trader for trader in traders.values() if trader.get("base", {}).get("nickname") == nickname),
            None
        )

    @staticmethod
    def select_quests(quests: dict[str, dict], trader_id: str) -> list[dict]:
        """Return the quests given out by the trader with this id."""
        return [quest for quest in quests.values() if quest.get("traderId") == trader_id]

    def derive_exchange_rate(self, trader: dict) -> ExchangeRate:
        """
        Read the rate from the first component of the reference item's first barter option.

        Falls back to the configured default when the entry is missing or its count
        is not a number.

        Raises:
            InvalidExchangeRateError: the rate is not a positive finite number
        """
        barter_scheme = trader.get("assort", {}).get("barter_scheme", {})
        options = barter_scheme.get(self.target.reference_item_id) or []
        entry = options[0][0] if options and options[0] else None

        count = parse_count(entry.get("count")) if isinstance(entry, dict) else None
        if count is None:
            self.logger.debug(
                f"{LOG_PREFIX} No reference barter for {self.target.reference_item_id}, "
                f"using default rate {self.target.default_rate}"
            )
            return self.default_rate()

        return ExchangeRate(
            source_currency=self.target.source_currency,
            target_currency=self.target.target_currency,
            rate_value=count,
            source=RateSource.REFERENCE_ITEM,
        )

    def convert_trader(self, trader: dict, rate: ExchangeRate) -> int:
        """
        Switch the trader's currency and rescale its prices.

        Multi-item barters are left alone. Returns the number of barter options rewritten.
        """
        base = trader["base"]
        target_code = self.target.target_currency.value

        if base.get("currency") != target_code:
            for level in base.get("loyaltyLevels", []):
                level["minSalesSum"] = float(rate.to_target(level["minSalesSum"]))
            base["currency"] = target_code

        converted = 0
        barter_scheme = trader.get("assort", {}).get("barter_scheme", {})
        for barter_id, barter_options in barter_scheme.items():
            # The reference price itself stays in the source currency
            if barter_id == self.target.reference_item_id:
                continue

            for option in barter_options:
                if len(option) != 1:
                    continue
                item = option[0]
                if item.get("_tpl") != self.source_tpl:
                    continue
                count = rate.to_target(item["count"]).quantize(Decimal(1), rounding=ROUND_HALF_UP)
                item["count"] = max(1, int(count))
                item["_tpl"] = self.target_tpl
                converted += 1

        self.logger.debug(f"{LOG_PREFIX} Trader data updated to use {target_code}.")
        return converted

    def convert_quest_rewards(self, quest: dict, rate: ExchangeRate) -> int:
        """
        Rewrite money items of the quest's Success rewards.

        Every matching item recomputes the reward value from its current value, so a
        reward holding two source-currency items is converted twice.
        Returns the number of reward items rewritten.
        """
        converted = 0
        for reward in quest.get("rewards", {}).get("Success", []):
            if reward.get("type") != "Item" or not reward.get("items"):
                continue

            for item in reward["items"]:
                if item.get("_tpl") != self.source_tpl:
                    continue
                item["_tpl"] = self.target_tpl
                value = rate.to_target(reward["value"]) * REWARD_MARKUP
                reward["value"] = int(value.to_integral_value(rounding=ROUND_CEILING))
                item.setdefault("upd", {})["StackObjectsCount"] = reward["value"]
                converted += 1

        self.logger.debug(f"{LOG_PREFIX} Updated rewards for quest with trader {quest.get('traderId')}.")
        return converted

    def convert_quests(self, quests: Iterable[dict], rate: ExchangeRate) -> tuple[int, int]:
        processed = 0
        rewards = 0
        for quest in quests:
            rewards += self.convert_quest_rewards(quest, rate)
            processed += 1
        return processed, rewards

    def post_db_load(self, tables: BaseDatabaseTables) -> ConversionReport:
        """
        Run one conversion pass over the host's tables.

        Quests are always selected by the configured trader id, whether or not the
        trader itself is found by nickname. A missing trader leaves the quests to be
        converted with the default rate.
        """
        traders = tables.get_traders()
        quests = tables.get_quests()
        trader_id = self.target.trader_id

        trader = self.find_trader(traders, self.target.trader_nickname)
        barters_converted = 0

        if trader:
            rate = self.derive_exchange_rate(trader)
            found_id = trader["base"].get("_id")
            if found_id and found_id != trader_id:
                self.logger.warning(
                    f"{LOG_PREFIX} Trader {self.target.trader_nickname} has id {found_id}, "
                    f"expected {trader_id}; only quests of {trader_id} are converted"
                )
            self.logger.info(
                f"{LOG_PREFIX} Updating {self.target.trader_nickname} favourite currency..."
            )
            barters_converted = self.convert_trader(trader, rate)
        else:
            rate = self.default_rate()
            self.logger.warning(
                f"{LOG_PREFIX} Trader {self.target.trader_nickname} not found, "
                f"converting quests of {trader_id} only"
            )

        quests_processed, rewards_converted = self.convert_quests(
            self.select_quests(quests, trader_id), rate
        )

        return ConversionReport(
            trader_found=trader is not None,
            trader_id=trader_id,
            trader_nickname=self.target.trader_nickname,
            exchange_rate=rate,
            barters_converted=barters_converted,
            quests_processed=quests_processed,
            rewards_converted=rewards_converted,
        )
