# domains/orders/urls.py
from django.urls import path

from .views import OrderDetailView

urlpatterns = [
    # 주문 단건 조회 (본인 주문만)
    path("<uuid:order_id>", OrderDetailView.as_view(), name="order-detail"),
]
