from __future__ import annotations

from drf_spectacular.utils import PolymorphicProxySerializer, extend_schema
from rest_framework.response import Response

from shared.api_markers import EnvelopeSerializer, ErrorEnvelopeSerializer, ok
from shared.views import StoreAPIView

from .serializers import (
    AddCartProductSerializer,
    CartDeletedEnvelopeSerializer,
    CartDeletedSerializer,
    CartEnvelopeSerializer,
    CartSerializer,
    RemoveCartProductSerializer,
)
from .services import RemoveResult, add_product, get_cart, remove_product

CART_EMPTY_MESSAGE = "Cart is Empty"
CART_ALREADY_EMPTY_MESSAGE = "Cart is already empty"
CART_DELETED_MESSAGE = "Cart deleted"


class CartView(StoreAPIView):
    """
    GET    /cart  내 장바구니 조회
    POST   /cart  상품 추가 {venueId, productId, discountCode?}
    DELETE /cart  상품 제거/카트 삭제 {venueId?, productId?}
    """

    # ─────────────────────────────────────────────────────────────
    # GET 내 카트 조회
    # ─────────────────────────────────────────────────────────────
    @extend_schema(
        operation_id="GetCart",
        responses={200: CartEnvelopeSerializer, 404: EnvelopeSerializer},
        tags=["Carts"],
    )
    def get(self, request):
        user = self.get_profile(request)
        cart = get_cart(self.get_store(), user)
        if cart is None:
            return Response(ok(message=CART_EMPTY_MESSAGE))
        return Response(ok(CartSerializer(cart).data))

    # ─────────────────────────────────────────────────────────────
    # POST 장바구니에 상품 추가
    # ─────────────────────────────────────────────────────────────
    @extend_schema(
        operation_id="AddCartProduct",
        request=AddCartProductSerializer,
        responses={
            200: CartEnvelopeSerializer,
            400: ErrorEnvelopeSerializer,
            404: EnvelopeSerializer,
            409: EnvelopeSerializer,
        },
        tags=["Carts"],
    )
    def post(self, request):
        ser = AddCartProductSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        user = self.get_profile(request)
        cart = add_product(
            self.get_store(),
            user,
            data["venueId"],
            data["productId"],
            discount_code=data.get("discountCode"),
        )
        return Response(ok(CartSerializer(cart).data))

    # ─────────────────────────────────────────────────────────────
    # DELETE 상품 제거 / 카트 삭제
    # ─────────────────────────────────────────────────────────────
    @extend_schema(
        operation_id="RemoveCartProduct",
        request=RemoveCartProductSerializer,
        responses={
            200: PolymorphicProxySerializer(
                component_name="CartRemoveResult",
                serializers=[
                    CartEnvelopeSerializer,
                    CartDeletedEnvelopeSerializer,
                    EnvelopeSerializer,
                ],
                resource_type_field_name=None,
            ),
            400: ErrorEnvelopeSerializer,
            409: EnvelopeSerializer,
        },
        tags=["Carts"],
    )
    def delete(self, request):
        ser = RemoveCartProductSerializer(data=request.data or {})
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        user = self.get_profile(request)
        result = remove_product(
            self.get_store(),
            user,
            venue_id=data.get("venueId"),
            product_id=data.get("productId"),
        )

        if result.outcome == RemoveResult.EMPTY:
            return Response(ok(message=CART_ALREADY_EMPTY_MESSAGE))
        if result.outcome == RemoveResult.DELETED:
            return Response(
                ok(CartDeletedSerializer(result.cart).data, message=CART_DELETED_MESSAGE)
            )
        return Response(ok(CartSerializer(result.cart).data))


__all__ = ["CartView"]
