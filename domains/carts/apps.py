from django.apps import AppConfig


class CartsConfig(AppConfig):
    name = "domains.carts"
    label = "carts"
