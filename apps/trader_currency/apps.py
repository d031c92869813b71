from django.apps import AppConfig


class TraderCurrencyConfig(AppConfig):
    name = "apps.trader_currency"
    verbose_name = "Trader currency conversion"
