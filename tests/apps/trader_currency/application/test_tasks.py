import json
import pytest
from unittest.mock import patch

from apps.trader_currency.application.tasks import convert_trader_currency

SKIER_ID = "58330581ace78e27b8b10cee"
EUR_TPL = "569668774bdc2da2298b4568"
EURO_ITEM = "66e802a0ea847a407f0e4e65"


@pytest.fixture
def dump_file(tmp_path, traders, quests):
    path = tmp_path / "tables.json"
    path.write_text(json.dumps({"traders": traders, "templates": {"quests": quests}}), encoding="utf-8")
    return path


def read_dump(path):
    return json.loads(path.read_text(encoding="utf-8"))


class TestConvertTraderCurrencyTask:
    """Tests for the conversion Celery task."""

    def test_converts_and_saves(self, dump_file):
        """Test that the task converts the dump and writes it back."""
        result = convert_trader_currency(str(dump_file), "json_dump")

        assert result["success"] is True
        assert result["trader_found"] is True
        assert result["exchange_rate"] == "140"
        assert result["barters_converted"] == 4
        assert result["rewards_converted"] == 1

        data = read_dump(dump_file)
        skier = data["traders"][SKIER_ID]
        assert skier["base"]["currency"] == "EUR"
        assert skier["assort"]["barter_scheme"]["item_five"] == [[{"_tpl": EUR_TPL, "count": 5}]]
        reward = data["templates"]["quests"]["skier_quest"]["rewards"]["Success"][1]
        assert reward["value"] == 9
        assert reward["items"][0]["upd"]["StackObjectsCount"] == 9

    def test_dry_run_writes_nothing(self, dump_file):
        """Test that a dry run leaves the dump untouched."""
        before = dump_file.read_text(encoding="utf-8")

        result = convert_trader_currency(str(dump_file), "json_dump", dry_run=True)

        assert result["success"] is True
        assert result["dry_run"] is True
        assert dump_file.read_text(encoding="utf-8") == before

    def test_rerun_is_a_no_op_for_the_trader(self, dump_file):
        """Test that running the task twice changes nothing the second time."""
        convert_trader_currency(str(dump_file), "json_dump")
        trader_after_first = read_dump(dump_file)["traders"][SKIER_ID]

        result = convert_trader_currency(str(dump_file), "json_dump")

        assert result["barters_converted"] == 0
        assert result["rewards_converted"] == 0
        assert read_dump(dump_file)["traders"][SKIER_ID] == trader_after_first

    def test_default_database_path(self, settings, dump_file):
        """Test that DATABASE_PATH from settings is used by default."""
        settings.TRADER_CURRENCY = {**settings.TRADER_CURRENCY, "DATABASE_PATH": str(dump_file)}

        result = convert_trader_currency(tables_format="json_dump")

        assert result["success"] is True
        assert result["database_path"] == str(dump_file)

    def test_unknown_format(self, dump_file):
        """Test that an unknown tables format is reported."""
        result = convert_trader_currency(str(dump_file), "xml")

        assert result["success"] is False
        assert "Unknown tables format" in result["message"]

    def test_missing_database(self, tmp_path):
        """Test that a missing dump is reported."""
        result = convert_trader_currency(str(tmp_path / "missing.json"), "json_dump")

        assert result["success"] is False
        assert "not found" in result["message"]

    def test_invalid_reference_rate(self, tmp_path, traders, quests):
        """Test that a zero reference rate is reported and nothing is written."""
        traders[SKIER_ID]["assort"]["barter_scheme"][EURO_ITEM][0][0]["count"] = 0
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"traders": traders, "templates": {"quests": quests}}), encoding="utf-8")
        before = path.read_text(encoding="utf-8")

        result = convert_trader_currency(str(path), "json_dump")

        assert result["success"] is False
        assert "rate_value" in result["message"]
        assert path.read_text(encoding="utf-8") == before

    @pytest.mark.parametrize("count", [None, "abc", True])
    def test_non_numeric_reference_rate_uses_default(self, tmp_path, traders, quests, count):
        """Test that a non-numeric reference count converts at the default rate instead of failing."""
        traders[SKIER_ID]["assort"]["barter_scheme"][EURO_ITEM][0][0]["count"] = count
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"traders": traders, "templates": {"quests": quests}}), encoding="utf-8")

        result = convert_trader_currency(str(path), "json_dump")

        assert result["success"] is True
        assert result["rate_source"] == "default"
        assert result["exchange_rate"] == "168"

    def test_malformed_barter_count_is_reported(self, tmp_path, traders, quests):
        """Test that a malformed barter count is reported in the result and nothing is written."""
        traders[SKIER_ID]["assort"]["barter_scheme"]["item_five"][0][0]["count"] = None
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"traders": traders, "templates": {"quests": quests}}), encoding="utf-8")
        before = path.read_text(encoding="utf-8")

        result = convert_trader_currency(str(path), "json_dump")

        assert result["success"] is False
        assert "Malformed tables" in result["message"]
        assert path.read_text(encoding="utf-8") == before

    def test_invalid_settings(self, settings, dump_file):
        """Test that an unsupported currency in settings is reported."""
        settings.TRADER_CURRENCY = {**settings.TRADER_CURRENCY, "SOURCE_CURRENCY": "XXX"}

        result = convert_trader_currency(str(dump_file), "json_dump")

        assert result["success"] is False
        assert "Invalid settings" in result["message"]

    @patch('apps.trader_currency.application.tasks.build_currency_converter')
    def test_save_skipped_when_conversion_fails(self, mock_build, dump_file, mocker):
        """Test that tables are not saved when the conversion fails."""
        mock_build.return_value.post_db_load.side_effect = ValueError("boom")
        save = mocker.patch('apps.trader_currency.infrastructure.tables.json_dump.JsonDumpTables.save')

        result = convert_trader_currency(str(dump_file), "json_dump")

        assert result["success"] is False
        save.assert_not_called()
