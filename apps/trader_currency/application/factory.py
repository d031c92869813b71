"""
Composition root: builds the converter from Django settings.
"""

import logging
from decimal import Decimal, InvalidOperation

from django.conf import settings

from apps.trader_currency.domain.exceptions import InvalidExchangeRateError
from apps.trader_currency.domain.models import ConversionTarget, Currency
from apps.trader_currency.domain.services import CurrencyConverter

DEFAULT_LOGGER_NAME = "apps.trader_currency"


def get_conversion_target(overrides: dict | None = None) -> ConversionTarget:
    """
    Build the ConversionTarget from settings.TRADER_CURRENCY.

    Raises:
        ValueError: unknown currency code
        InvalidExchangeRateError: DEFAULT_RATE is not a number
    """
    config = {**getattr(settings, "TRADER_CURRENCY", {}), **(overrides or {})}

    try:
        default_rate = Decimal(str(config.get("DEFAULT_RATE", "168")))
    except InvalidOperation:
        raise InvalidExchangeRateError(f"DEFAULT_RATE must be a number, got {config.get('DEFAULT_RATE')!r}")

    return ConversionTarget(
        trader_nickname=config.get("TRADER_NICKNAME", "Skier"),
        trader_id=config.get("TRADER_ID", "58330581ace78e27b8b10cee"),
        reference_item_id=config.get("REFERENCE_ITEM_ID", "66e802a0ea847a407f0e4e65"),
        source_currency=Currency(str(config.get("SOURCE_CURRENCY", "RUB")).upper()),
        target_currency=Currency(str(config.get("TARGET_CURRENCY", "EUR")).upper()),
        default_rate=default_rate,
    )


def build_currency_converter(
    logger: logging.Logger | None = None,
    overrides: dict | None = None
) -> CurrencyConverter:
    """
    Create a CurrencyConverter with its dependencies passed in explicitly.

    Args:
        logger: Host logger; defaults to the app logger configured in settings.LOGGING
        overrides: Keys of settings.TRADER_CURRENCY to replace for this converter

    Example:
        >>> converter = build_currency_converter()
        >>> report = converter.post_db_load(InMemoryTables(traders, quests))
    """
    return CurrencyConverter(
        target=get_conversion_target(overrides),
        logger=logger or logging.getLogger(DEFAULT_LOGGER_NAME),
    )
