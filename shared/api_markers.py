# shared/api_markers.py
"""
API 문서화용 응답 봉투 시리얼라이저

모든 응답은 {code, message, data?, errors?} 형태이며,
@extend_schema(responses=...) 에서 스키마 힌트로만 사용된다.
"""
from rest_framework import serializers


class FieldErrorSerializer(serializers.Serializer):
    field = serializers.CharField()
    message = serializers.CharField()


class EnvelopeSerializer(serializers.Serializer):
    """data 가 없는 기본 봉투 (삭제 확인, 빈 장바구니 등)"""

    code = serializers.IntegerField()
    message = serializers.CharField()


class ErrorEnvelopeSerializer(EnvelopeSerializer):
    errors = FieldErrorSerializer(many=True, required=False)


def envelope_of(name: str, data_serializer) -> type:
    """data 필드에 data_serializer 를 품은 봉투 시리얼라이저를 동적으로 생성."""
    return type(
        name,
        (EnvelopeSerializer,),
        {"data": data_serializer, "__module__": __name__},
    )


def ok(data=None, message: str = "success", code: int = 200) -> dict:
    """성공 응답 본문"""
    body = {"code": code, "message": message}
    if data is not None:
        body["data"] = data
    return body
