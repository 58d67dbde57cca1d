# domains/carts/urls.py
from django.urls import path

from .views import CartView

urlpatterns = [
    # 조회(GET) / 상품 추가(POST) / 상품 제거·카트 삭제(DELETE)
    path("cart", CartView.as_view(), name="cart"),
]
