from abc import ABC, abstractmethod


class BaseDatabaseTables(ABC):
    """
    Access to the host's loaded game database.
    The returned tables are shared by reference: the converter mutates them in place.
    """

    @abstractmethod
    def get_traders(self) -> dict[str, dict]:
        pass

    @abstractmethod
    def get_quests(self) -> dict[str, dict]:
        pass

    @abstractmethod
    def save(self) -> None:
        pass
