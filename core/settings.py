"""
Django settings for the trader currency project.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-dev-key-change-me")
DEBUG = os.environ.get("DJANGO_DEBUG", "true").lower() == "true"
ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
    "apps.trader_currency",
]

# No models of our own; the game database lives in JSON files
DATABASES: dict = {}

USE_TZ = True
TIME_ZONE = "UTC"

# Celery
CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.environ.get("CELERY_RESULT_BACKEND", "redis://localhost:6379/0")
CELERY_TASK_ALWAYS_EAGER = os.environ.get("CELERY_TASK_ALWAYS_EAGER", "false").lower() == "true"

# Trader currency conversion
TRADER_CURRENCY = {
    "TRADER_NICKNAME": os.environ.get("TRADER_CURRENCY_NICKNAME", "Skier"),
    "TRADER_ID": os.environ.get("TRADER_CURRENCY_TRADER_ID", "58330581ace78e27b8b10cee"),
    # Barter entry whose price is the exchange rate
    "REFERENCE_ITEM_ID": os.environ.get("TRADER_CURRENCY_REFERENCE_ITEM", "66e802a0ea847a407f0e4e65"),
    "SOURCE_CURRENCY": os.environ.get("TRADER_CURRENCY_SOURCE", "RUB"),
    "TARGET_CURRENCY": os.environ.get("TRADER_CURRENCY_TARGET", "EUR"),
    "DEFAULT_RATE": os.environ.get("TRADER_CURRENCY_DEFAULT_RATE", "168"),
    "DATABASE_PATH": os.environ.get("TRADER_CURRENCY_DATABASE_PATH", str(BASE_DIR / "database")),
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "apps.trader_currency": {
            "handlers": ["console"],
            "level": os.environ.get("TRADER_CURRENCY_LOG_LEVEL", "INFO"),
        },
    },
}
