"""
Data Transfer Objects for the application layer.
"""

from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Optional

from apps.trader_currency.domain.models import ConversionReport


@dataclass
class ConversionReportDTO:
    """Summary of one conversion pass over the database tables."""
    trader_found: bool
    trader_id: str
    exchange_rate: Decimal
    rate_source: str
    barters_converted: int = 0
    quests_processed: int = 0
    rewards_converted: int = 0
    trader_nickname: Optional[str] = None

    @classmethod
    def from_report(cls, report: ConversionReport) -> "ConversionReportDTO":
        return cls(
            trader_found=report.trader_found,
            trader_id=report.trader_id,
            exchange_rate=report.exchange_rate.rate_value,
            rate_source=report.exchange_rate.source.value,
            barters_converted=report.barters_converted,
            quests_processed=report.quests_processed,
            rewards_converted=report.rewards_converted,
            trader_nickname=report.trader_nickname,
        )

    def as_dict(self) -> dict:
        data = asdict(self)
        data["exchange_rate"] = str(self.exchange_rate)
        return data
