"""
In-memory tables for hosts that already hold the loaded database.
"""

from apps.trader_currency.domain.interfaces import BaseDatabaseTables


class InMemoryTables(BaseDatabaseTables):
    """
    Wraps tables the host has already loaded.
    Nothing is copied, so the host sees every change the converter makes.
    """

    def __init__(self, traders: dict[str, dict], quests: dict[str, dict]):
        self.traders = traders
        self.quests = quests

    def get_traders(self) -> dict[str, dict]:
        return self.traders

    def get_quests(self) -> dict[str, dict]:
        return self.quests

    def save(self) -> None:
        pass
