from __future__ import annotations

from typing import Any, Dict

from rest_framework.exceptions import NotFound

from shared.store import DocumentStore, table_name


class OrderNotFound(NotFound):
    default_detail = "Order Not Found.!"
    default_code = "order_not_found"


def get_order(store: DocumentStore, user: Dict[str, Any], order_id: str) -> Dict[str, Any]:
    """
    (id, userId) 로 주문 단건 조회.
    """
    # userId 는 토큰 sub 가 아니라 프로필 id (카트 생성 시 기록하는 값)
    item = store.get_item(table_name("orders"), {"id": order_id, "userId": user["id"]})
    if not item:
        raise OrderNotFound()
    return item


__all__ = ["OrderNotFound", "get_order"]
