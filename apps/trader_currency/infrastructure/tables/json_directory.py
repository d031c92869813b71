import json
import os
from pathlib import Path

from apps.trader_currency.domain.exceptions import DatabaseTablesError
from apps.trader_currency.domain.interfaces import BaseDatabaseTables


def _read_json(path: Path):
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError:
        raise DatabaseTablesError(f"File not found: {path}")
    except json.JSONDecodeError as e:
        raise DatabaseTablesError(f"Invalid JSON in {path}: {e}")


def _write_json(path: Path, data) -> None:
    try:
        with path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)
    except (OSError, TypeError, ValueError) as e:
        raise DatabaseTablesError(f"Failed to write {path}: {e}")


def write_json_files(files: dict[Path, object]) -> None:
    """
    Write several JSON files, all or nothing as far as serialisation goes.

    Every file is first written to a ".tmp" sibling; the originals are only
    replaced once all of them were written. A failed rename can still leave
    the set partly updated.
    """
    staged = []
    try:
        for path, data in files.items():
            tmp_path = path.with_name(path.name + ".tmp")
            staged.append((tmp_path, path))
            _write_json(tmp_path, data)
    except DatabaseTablesError:
        for tmp_path, _ in staged:
            tmp_path.unlink(missing_ok=True)
        raise

    try:
        for tmp_path, path in staged:
            os.replace(tmp_path, path)
    except OSError as e:
        raise DatabaseTablesError(f"Failed to replace {path}: {e}")


class JsonDirectoryTables(BaseDatabaseTables):
    """
    The server's database directory as laid out on disk.

    Layout:
        traders/<id>/base.json
        traders/<id>/assort.json   (optional, e.g. Fence or ragfair have none)
        templates/quests.json
    """

    def __init__(self, root):
        self.root = Path(root)
        self._traders: dict[str, dict] | None = None
        self._quests: dict[str, dict] | None = None

    def get_traders(self) -> dict[str, dict]:
        if self._traders is None:
            self._traders = self._load_traders()
        return self._traders

    def get_quests(self) -> dict[str, dict]:
        if self._quests is None:
            self._quests = _read_json(self.root / "templates" / "quests.json")
        return self._quests

    def _load_traders(self) -> dict[str, dict]:
        traders_dir = self.root / "traders"
        if not traders_dir.is_dir():
            raise DatabaseTablesError(f"Traders directory not found: {traders_dir}")

        traders = {}
        for trader_dir in sorted(p for p in traders_dir.iterdir() if p.is_dir()):
            base_path = trader_dir / "base.json"
            if not base_path.exists():
                continue
            trader = {"base": _read_json(base_path)}
            assort_path = trader_dir / "assort.json"
            if assort_path.exists():
                trader["assort"] = _read_json(assort_path)
            traders[trader_dir.name] = trader
        return traders

    def save(self) -> None:
        """Write back the tables that were loaded; untouched files are left alone."""
        files: dict[Path, object] = {}
        if self._traders is not None:
            for trader_id, trader in self._traders.items():
                trader_dir = self.root / "traders" / trader_id
                files[trader_dir / "base.json"] = trader["base"]
                if "assort" in trader:
                    files[trader_dir / "assort.json"] = trader["assort"]

        if self._quests is not None:
            files[self.root / "templates" / "quests.json"] = self._quests

        write_json_files(files)
