from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.response import Response

from shared.api_markers import EnvelopeSerializer, ok
from shared.views import StoreAPIView

from .serializers import OrderEnvelopeSerializer, OrderSerializer
from .services import get_order


class OrderDetailView(StoreAPIView):
    """
    GET /{order_id}
    (order_id, 로그인 유저 id) 로 주문 한 건 조회
    """

    @extend_schema(
        operation_id="GetOrderDetail",
        parameters=[
            OpenApiParameter(
                "order_id", OpenApiTypes.UUID, OpenApiParameter.PATH, required=True
            ),
        ],
        responses={200: OrderEnvelopeSerializer, 404: EnvelopeSerializer},
        tags=["Orders"],
    )
    def get(self, request, order_id):
        user = self.get_profile(request)
        order = get_order(self.get_store(), user, str(order_id))
        return Response(ok(OrderSerializer(order).data))
