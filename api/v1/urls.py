# api/v1/urls.py
from django.urls import include, path

urlpatterns = [
    # --- Carts ---
    path("", include(("domains.carts.urls", "carts"))),
    # --- Orders ---
    # (uuid 경로 변환기라서 "cart" 등 다른 경로와 겹치지 않음)
    path("", include(("domains.orders.urls", "orders"))),
]
