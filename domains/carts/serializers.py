# domains/carts/serializers.py
from __future__ import annotations

from rest_framework import serializers

from shared.api_markers import envelope_of


class UUID4Field(serializers.UUIDField):
    """UUID 버전 4 만 허용"""

    default_error_messages = {
        "invalid": "{field} must be a valid UUID v4.",
        "required": "{field} is required.",
        "null": "{field} may not be null.",
    }

    def bind(self, field_name, parent):
        super().bind(field_name, parent)
        # 메시지에 필드명 박아 넣기 ("venueId is required.")
        self.error_messages = {
            k: v.replace("{field}", field_name) for k, v in self.error_messages.items()
        }

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if value.version != 4:
            self.fail("invalid", value=data)
        return str(value)


# ---------------------------
# Write serializers
# ---------------------------
class AddCartProductSerializer(serializers.Serializer):
    """
    장바구니에 상품 추가
    - venueId, productId 는 필수(UUID v4)
    - discountCode 는 선택. 카트에 그대로 보관만 하고 계산에는 쓰지 않음
    """

    venueId = UUID4Field()
    productId = UUID4Field()
    discountCode = serializers.CharField(required=False, allow_blank=False, max_length=64)


class RemoveCartProductSerializer(serializers.Serializer):
    """
    장바구니에서 상품 제거
    - venueId 가 현재 카트와 다르면 카트 전체 삭제
    - 아니면 productId 필요
    """

    venueId = UUID4Field(required=False, allow_null=True)
    productId = UUID4Field(required=False, allow_null=True)


# ---------------------------
# Read serializers
# ---------------------------
class VenueSummarySerializer(serializers.Serializer):
    """민감 필드가 빠진 매장 정보 (그 외 필드는 그대로 통과)"""

    def to_representation(self, instance):
        return dict(instance)


class CartSerializer(serializers.Serializer):
    """
    장바구니/주문 응답 DTO.
    venueEmail, version 등 내부/민감 필드는 여기서 내보내지 않는다.
    """

    id = serializers.CharField()
    userId = serializers.CharField()
    userEmail = serializers.CharField(allow_null=True)
    venueId = serializers.CharField()
    products = serializers.ListField(child=serializers.DictField())
    totalPrice = serializers.DecimalField(
        max_digits=None, decimal_places=None, coerce_to_string=False
    )
    orderStatus = serializers.CharField()
    discountCode = serializers.CharField(required=False)
    createdAt = serializers.CharField()
    updatedAt = serializers.CharField()
    venue = VenueSummarySerializer(required=False, allow_null=True)


class CartDeletedSerializer(serializers.Serializer):
    id = serializers.CharField()
    venueId = serializers.CharField()


CartEnvelopeSerializer = envelope_of("CartEnvelope", CartSerializer(required=False))
CartDeletedEnvelopeSerializer = envelope_of(
    "CartDeletedEnvelope", CartDeletedSerializer(required=False)
)
