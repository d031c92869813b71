import copy
import logging
from decimal import Decimal

import pytest

from apps.trader_currency.domain.models import ConversionTarget, Currency
from apps.trader_currency.domain.services import CurrencyConverter

RUB_TPL = "5449016a4bdc2d6f028b456f"
USD_TPL = "5696686a4bdc2da3298b456a"
SKIER_ID = "58330581ace78e27b8b10cee"
PRAPOR_ID = "54cb50c76803fa8b248b4571"
EURO_ITEM = "66e802a0ea847a407f0e4e65"

SKIER = {
    "base": {
        "_id": SKIER_ID,
        "nickname": "Skier",
        "currency": "RUB",
        "loyaltyLevels": [
            {"minLevel": 1, "minSalesSum": 0},
            {"minLevel": 15, "minSalesSum": 1400000},
            {"minLevel": 28, "minSalesSum": 2800000},
        ],
    },
    "assort": {
        "barter_scheme": {
            EURO_ITEM: [[{"_tpl": RUB_TPL, "count": 140}]],
            "item_five": [[{"_tpl": RUB_TPL, "count": 700}]],
            "item_cheap": [[{"_tpl": RUB_TPL, "count": 50}]],
            "item_half": [[{"_tpl": RUB_TPL, "count": 210}]],
            "item_multi": [[{"_tpl": RUB_TPL, "count": 700}, {"_tpl": "59e3577886f774176a362503", "count": 2}]],
            "item_usd": [[{"_tpl": USD_TPL, "count": 30}]],
            "item_options": [
                [{"_tpl": RUB_TPL, "count": 1400}],
                [{"_tpl": "5734758f24597738025ee253", "count": 1}],
            ],
        }
    },
}

PRAPOR = {
    "base": {
        "_id": PRAPOR_ID,
        "nickname": "Prapor",
        "currency": "RUB",
        "loyaltyLevels": [{"minLevel": 1, "minSalesSum": 0}],
    },
    "assort": {"barter_scheme": {"item_p": [[{"_tpl": RUB_TPL, "count": 700}]]}},
}

QUESTS = {
    "skier_quest": {
        "traderId": SKIER_ID,
        "rewards": {
            "Started": [
                {"type": "Item", "value": 5000, "items": [{"_id": "s1", "_tpl": RUB_TPL, "upd": {"StackObjectsCount": 5000}}]},
            ],
            "Success": [
                {"type": "Experience", "value": 5000},
                {"type": "Item", "value": 1000, "items": [{"_id": "r1", "_tpl": RUB_TPL, "upd": {"StackObjectsCount": 1000}}]},
                {"type": "Item", "value": 2, "items": [{"_id": "r2", "_tpl": "5734758f24597738025ee253", "upd": {"StackObjectsCount": 2}}]},
                {"type": "Item", "value": 0, "items": []},
            ],
        },
    },
    "prapor_quest": {
        "traderId": PRAPOR_ID,
        "rewards": {
            "Success": [
                {"type": "Item", "value": 1000, "items": [{"_id": "p1", "_tpl": RUB_TPL, "upd": {"StackObjectsCount": 1000}}]},
            ],
        },
    },
}


@pytest.fixture
def skier():
    return copy.deepcopy(SKIER)


@pytest.fixture
def traders():
    return {SKIER_ID: copy.deepcopy(SKIER), PRAPOR_ID: copy.deepcopy(PRAPOR)}


@pytest.fixture
def quests():
    return copy.deepcopy(QUESTS)


@pytest.fixture
def target():
    return ConversionTarget(
        trader_nickname="Skier",
        trader_id=SKIER_ID,
        reference_item_id=EURO_ITEM,
        source_currency=Currency.RUB,
        target_currency=Currency.EUR,
        default_rate=Decimal("168"),
    )


@pytest.fixture
def converter(target):
    return CurrencyConverter(target=target, logger=logging.getLogger("tests.trader_currency"))
