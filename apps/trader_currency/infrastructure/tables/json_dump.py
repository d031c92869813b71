import json
from pathlib import Path

from apps.trader_currency.domain.exceptions import DatabaseTablesError
from apps.trader_currency.domain.interfaces import BaseDatabaseTables
from apps.trader_currency.infrastructure.tables.json_directory import write_json_files


class JsonDumpTables(BaseDatabaseTables):
    """
    Single JSON file shaped like the server's database tables.

    Format: {"traders": {id: {"base": ..., "assort": ...}}, "templates": {"quests": {id: ...}}}
    """

    def __init__(self, path):
        self.path = Path(path)
        self._data: dict | None = None

    @property
    def data(self) -> dict:
        if self._data is None:
            self._data = self._load()
        return self._data

    def _load(self) -> dict:
        try:
            with self.path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            raise DatabaseTablesError(f"Database dump not found: {self.path}")
        except json.JSONDecodeError as e:
            raise DatabaseTablesError(f"Invalid JSON in {self.path}: {e}")

        if not isinstance(data, dict):
            raise DatabaseTablesError(f"Database dump {self.path} must contain a JSON object")
        return data

    def get_traders(self) -> dict[str, dict]:
        return self.data.setdefault("traders", {})

    def get_quests(self) -> dict[str, dict]:
        return self.data.setdefault("templates", {}).setdefault("quests", {})

    def save(self) -> None:
        if self._data is None:
            return
        write_json_files({self.path: self._data})
