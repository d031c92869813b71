"""
Tables Registry - Maps TablesFormat names to table source classes.
"""

import logging
from enum import Enum

from apps.trader_currency.domain.interfaces import BaseDatabaseTables
from apps.trader_currency.infrastructure.tables.json_directory import JsonDirectoryTables
from apps.trader_currency.infrastructure.tables.json_dump import JsonDumpTables

logger = logging.getLogger(__name__)


class TablesFormat(str, Enum):
    """
    Enum with the supported on-disk database formats.
    To add a new format:
    1. Add an entry here
    2. Implement the BaseDatabaseTables interface
    3. Register it in TABLES_REGISTRY
    """

    JSON_DIRECTORY = "json_directory"
    JSON_DUMP = "json_dump"


TABLES_REGISTRY: dict[str, type[BaseDatabaseTables]] = {
    TablesFormat.JSON_DIRECTORY: JsonDirectoryTables,
    TablesFormat.JSON_DUMP: JsonDumpTables,
}


def get_tables_instance(tables_format: str, path) -> BaseDatabaseTables | None:
    """
    Get a table source for the given format.

    Args:
        tables_format: A TablesFormat value
        path: Database directory or dump file

    Returns:
        Instance of the table source, or None if the format is unknown
    """
    tables_class = TABLES_REGISTRY.get(tables_format)

    if tables_class is None:
        logger.warning(f"Tables format '{tables_format}' not found in registry")
        return None

    return tables_class(path)
