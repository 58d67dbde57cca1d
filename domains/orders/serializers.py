# domains/orders/serializers.py
from __future__ import annotations

from rest_framework import serializers

from shared.api_markers import envelope_of

# 저장은 하지만 응답에는 싣지 않는 필드
ORDER_PRIVATE_FIELDS = frozenset({"version", "venueEmail"})


class OrderSerializer(serializers.Serializer):
    """
    주문 단건 응답.
    결제 후 주문은 카트보다 필드가 많거나 적을 수 있어서 저장된 아이템을
    그대로 내보내고 내부 필드만 뺀다.
    """

    def to_representation(self, instance):
        return {k: v for k, v in instance.items() if k not in ORDER_PRIVATE_FIELDS}


OrderEnvelopeSerializer = envelope_of("OrderEnvelope", OrderSerializer(required=False))
