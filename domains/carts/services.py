from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from django.utils import timezone

from rest_framework import status
from rest_framework.exceptions import APIException, NotFound

from shared.cleanup import venue_cleanup
from shared.store import ConditionFailed, DocumentStore, table_name

logger = logging.getLogger(__name__)

CART_STATUS = "cart"
USER_ID_INDEX = "userIdIndex"
VENUE_ID_INDEX = "idIndex"


# ─────────────────────────────────────────────────────────────────────────────
# 도메인 예외
# ─────────────────────────────────────────────────────────────────────────────
class VenueNotFound(NotFound):
    default_detail = "Venue Not Found.!"
    default_code = "venue_not_found"


class ProductNotFound(NotFound):
    default_detail = "Product Not Found.!"
    default_code = "product_not_found"


class CartRuleError(APIException):
    """장바구니 규칙 위반 (400)"""

    status_code = status.HTTP_400_BAD_REQUEST


class ProductInactive(CartRuleError):
    default_detail = "Product Out Of Stock or InActive.!"
    default_code = "product_inactive"


class ZeroTotalError(CartRuleError):
    """상품 추가 후 합계가 0 이 되는 비정상 상태"""

    default_detail = "Price Total is 0"
    default_code = "zero_total"


class ProductIdRequired(CartRuleError):
    default_detail = "productId is required"
    default_code = "product_id_required"


class CartConflictError(APIException):
    """읽은 뒤 다른 요청이 먼저 카트를 바꿔 조건부 쓰기가 거부됐을 때"""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Cart was modified concurrently, please retry."
    default_code = "cart_conflict"


# ─────────────────────────────────────────────────────────────────────────────
# 조회 헬퍼
# ─────────────────────────────────────────────────────────────────────────────
def _now() -> str:
    return timezone.now().isoformat()


def total_price(products: Iterable[Dict[str, Any]]) -> Decimal:
    """products[].price 합계. 가격이 비어 있으면 0 으로 취급."""
    return sum((Decimal(str(p.get("price") or 0)) for p in products), Decimal("0"))


def dedupe_products(products: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """같은 상품 id 는 처음 것만 남긴다."""
    seen = set()
    out = []
    for p in products:
        pid = p.get("id")
        if pid in seen:
            continue
        seen.add(pid)
        out.append(p)
    return out


def find_open_cart(store: DocumentStore, user_id: str) -> Optional[Dict[str, Any]]:
    """유저의 열린 카트(orderStatus == "cart") 한 건. 없으면 None (오류 아님)."""
    items = store.query(
        table_name("orders"),
        USER_ID_INDEX,
        {"userId": user_id},
        filters={"orderStatus": CART_STATUS},
        limit=1,
    )
    return items[0] if items else None


def get_venue(store: DocumentStore, venue_id: str) -> Optional[Dict[str, Any]]:
    items = store.query(table_name("venues"), VENUE_ID_INDEX, {"id": venue_id}, limit=1)
    return items[0] if items else None


def get_product(store: DocumentStore, venue_id: str, product_id: str) -> Optional[Dict[str, Any]]:
    return store.get_item(
        table_name("products"),
        {"id": product_id, "venueId": venue_id},
        consistent=True,
    )


# ─────────────────────────────────────────────────────────────────────────────
# 조건부 쓰기 (version 낙관적 동시성)
# ─────────────────────────────────────────────────────────────────────────────
def _cart_key(cart: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": cart["id"], "userId": cart["userId"]}


def _version_guard(cart: Dict[str, Any]) -> Dict[str, Any]:
    # version 이 없는 예전 카트는 "version 속성이 아직 없음" 으로 가드
    return {"version": cart.get("version")}


def _update_cart(store: DocumentStore, cart: Dict[str, Any], fields: Dict[str, Any]) -> Dict[str, Any]:
    fields = {**fields, "version": int(cart.get("version") or 0) + 1}
    try:
        return store.update_item(
            table_name("orders"), _cart_key(cart), fields, expected=_version_guard(cart)
        )
    except ConditionFailed as e:
        logger.warning("cart %s update rejected: %s", cart["id"], e)
        raise CartConflictError() from e


def _delete_cart(store: DocumentStore, cart: Dict[str, Any]) -> None:
    try:
        store.delete_item(table_name("orders"), _cart_key(cart), expected=_version_guard(cart))
    except ConditionFailed as e:
        logger.warning("cart %s delete rejected: %s", cart["id"], e)
        raise CartConflictError() from e


def _create_cart(store: DocumentStore, cart: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return store.put_item(table_name("orders"), cart, expected={"id": None})
    except ConditionFailed as e:
        raise CartConflictError() from e


def _new_cart(
    user: Dict[str, Any],
    venue: Dict[str, Any],
    product: Dict[str, Any],
    discount_code: Optional[str],
) -> Dict[str, Any]:
    now = _now()
    cart = {
        "id": str(uuid.uuid4()),
        "userId": user["id"],
        "userEmail": user.get("email"),
        "venueId": venue["id"],
        "venueEmail": venue.get("venueEmail"),
        "products": [product],
        "totalPrice": total_price([product]),
        "orderStatus": CART_STATUS,
        "createdAt": now,
        "updatedAt": now,
        "version": 1,
    }
    if discount_code:
        cart["discountCode"] = discount_code
    return cart


# ─────────────────────────────────────────────────────────────────────────────
# 카트 변경 엔진
# ─────────────────────────────────────────────────────────────────────────────
def add_product(
    store: DocumentStore,
    user: Dict[str, Any],
    venue_id: str,
    product_id: str,
    discount_code: Optional[str] = None,
) -> Dict[str, Any]:
    """
    장바구니에 상품 추가.
    - 카트 없음            → 새 카트 생성
    - 같은 매장 + 이미 담김 → 변경 없음(그대로 반환)
    - 같은 매장 + 새 상품   → 추가 후 합계 재계산, 조건부 업데이트
    - 다른 매장            → 기존 카트 삭제 후 새 카트 생성
    """
    venue = get_venue(store, venue_id)
    if not venue:
        raise VenueNotFound()

    product = get_product(store, venue_id, product_id)
    if not product:
        raise ProductNotFound()
    if not product.get("isActive"):
        raise ProductInactive()

    cart = find_open_cart(store, user["id"])

    if cart and str(cart.get("venueId")) == str(venue["id"]):
        products = list(cart.get("products") or [])
        if any(p.get("id") == product["id"] for p in products):
            return cart

        products = dedupe_products(products + [product])
        new_total = total_price(products)
        if new_total == 0:
            raise ZeroTotalError()

        fields = {"products": products, "totalPrice": new_total, "updatedAt": _now()}
        if discount_code:
            fields["discountCode"] = discount_code
        updated = _update_cart(store, cart, fields)
        logger.info("cart %s updated: +product %s (total=%s)", cart["id"], product["id"], new_total)
        return updated

    new_cart = _new_cart(user, venue, product, discount_code)
    if new_cart["totalPrice"] == 0:
        raise ZeroTotalError()

    if cart:
        _delete_cart(store, cart)
        logger.info(
            "cart %s replaced: venue %s -> %s", cart["id"], cart.get("venueId"), venue["id"]
        )

    created = _create_cart(store, new_cart)
    logger.info("cart %s created for user %s (venue=%s)", created["id"], user["id"], venue["id"])
    return created


@dataclass(frozen=True)
class RemoveResult:
    EMPTY = "empty"
    DELETED = "deleted"
    UPDATED = "updated"

    outcome: str
    cart: Optional[Dict[str, Any]] = None


def remove_product(
    store: DocumentStore,
    user: Dict[str, Any],
    venue_id: Optional[str] = None,
    product_id: Optional[str] = None,
) -> RemoveResult:
    """
    장바구니에서 상품 제거.
    - 카트 없음                 → EMPTY (성공)
    - 다른 venue_id 지정         → 기존 카트 통째로 삭제
    - product_id 제거 후 비거나 0 → 카트 삭제
    - 그 외                      → 조건부 업데이트
    """
    cart = find_open_cart(store, user["id"])
    if not cart:
        return RemoveResult(RemoveResult.EMPTY)

    if venue_id and str(venue_id) != str(cart.get("venueId")):
        _delete_cart(store, cart)
        logger.info("cart %s deleted: venue %s abandoned", cart["id"], cart.get("venueId"))
        return RemoveResult(RemoveResult.DELETED, cart)

    if not product_id:
        raise ProductIdRequired()

    products = [p for p in (cart.get("products") or []) if p.get("id") != str(product_id)]
    new_total = total_price(products)

    if not products or new_total == 0:
        _delete_cart(store, cart)
        logger.info("cart %s deleted: no priced products left", cart["id"])
        return RemoveResult(RemoveResult.DELETED, cart)

    updated = _update_cart(
        store,
        cart,
        {"products": products, "totalPrice": new_total, "updatedAt": _now()},
    )
    logger.info("cart %s updated: -product %s (total=%s)", cart["id"], product_id, new_total)
    return RemoveResult(RemoveResult.UPDATED, updated)


def get_cart(store: DocumentStore, user: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """열린 카트 + 매장 정보(민감 필드 제거). 카트가 없으면 None."""
    cart = find_open_cart(store, user["id"])
    if not cart:
        return None
    venue = get_venue(store, cart["venueId"])
    return {**cart, "venue": venue_cleanup(venue)}


__all__ = [
    "CART_STATUS",
    "find_open_cart",
    "add_product",
    "remove_product",
    "get_cart",
    "total_price",
    "dedupe_products",
    "RemoveResult",
    "VenueNotFound",
    "ProductNotFound",
    "ProductInactive",
    "ZeroTotalError",
    "ProductIdRequired",
    "CartConflictError",
]
