"""
Celery tasks for background processing.
"""

import logging
from typing import Dict, Optional

from celery import shared_task
from django.conf import settings

from apps.trader_currency.application.dto import ConversionReportDTO
from apps.trader_currency.application.factory import build_currency_converter
from apps.trader_currency.domain.exceptions import DatabaseTablesError, InvalidExchangeRateError
from apps.trader_currency.infrastructure.tables.registry import TablesFormat, get_tables_instance

logger = logging.getLogger(__name__)


@shared_task(name="convert_trader_currency")
def convert_trader_currency(
    database_path: Optional[str] = None,
    tables_format: str = TablesFormat.JSON_DIRECTORY.value,
    dry_run: bool = False
) -> Dict:
    """
    Load the game database, convert the configured trader and write the tables back.

    Args:
        database_path: Database directory or dump file (defaults to TRADER_CURRENCY["DATABASE_PATH"])
        tables_format: A TablesFormat value
        dry_run: Convert in memory but do not write anything

    Returns:
        Dict with operation results
    """
    if database_path is None:
        database_path = settings.TRADER_CURRENCY["DATABASE_PATH"]

    tables = get_tables_instance(tables_format, database_path)
    if tables is None:
        return {
            "success": False,
            "message": f"Unknown tables format: {tables_format}",
        }

    try:
        converter = build_currency_converter()
        report = ConversionReportDTO.from_report(converter.post_db_load(tables))
        if not dry_run:
            tables.save()
    except (DatabaseTablesError, InvalidExchangeRateError) as e:
        logger.error(f"Conversion of {database_path} failed: {e}")
        return {
            "success": False,
            "message": str(e),
        }
    except ValueError as e:
        logger.error(f"Invalid trader currency settings: {e}")
        return {
            "success": False,
            "message": f"Invalid settings: {e}",
        }
    except (ArithmeticError, TypeError, KeyError) as e:
        # Tables stay unsaved, the pass may have stopped half way
        logger.error(f"Malformed tables in {database_path}: {e!r}")
        return {
            "success": False,
            "message": f"Malformed tables: {e!r}",
        }

    logger.info(
        f"Converted {report.barters_converted} barters and {report.rewards_converted} rewards "
        f"in {report.quests_processed} quests (rate {report.exchange_rate}, dry_run={dry_run})"
    )

    return {
        "success": True,
        "database_path": str(database_path),
        "dry_run": dry_run,
        **report.as_dict(),
    }
