class InvalidExchangeRateError(ValueError):
    """Raised when the exchange rate is not a positive finite number."""


class DatabaseTablesError(Exception):
    """Raised when the game database tables cannot be loaded or saved."""
