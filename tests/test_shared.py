"""
shared/ 헬퍼 테스트 (민감 필드 제거, 오류 봉투, 헬스체크)
"""

from unittest.mock import MagicMock

from rest_framework.exceptions import NotFound, ValidationError

from shared.cleanup import venue_cleanup
from shared.exceptions import envelope_exception_handler, flatten_errors
from shared.store import StoreError


class TestVenueCleanup:
    def test_removes_private_fields(self):
        venue = {
            "id": "v1",
            "venueName": "Corner Bistro",
            "cognitoId": "c",
            "venueEmail": "owner@example.com",
            "bankBSB": "062-000",
            "bankName": "Bank",
            "bankAccountNo": "123",
        }

        out = venue_cleanup(venue)

        assert out == {"id": "v1", "venueName": "Corner Bistro"}
        # 원본은 그대로
        assert "bankAccountNo" in venue

    def test_none_passthrough(self):
        assert venue_cleanup(None) is None


class TestFlattenErrors:
    def test_nested(self):
        detail = {"venueId": ["bad"], "meta": {"code": ["too long"]}, "non_field_errors": ["x"]}
        assert flatten_errors(detail) == [
            {"field": "venueId", "message": "bad"},
            {"field": "meta.code", "message": "too long"},
            {"field": "non_field_errors", "message": "x"},
        ]

    def test_plain_list(self):
        assert flatten_errors(["oops"]) == [{"field": "non_field_errors", "message": "oops"}]


class TestEnvelopeHandler:
    def test_api_exception(self):
        resp = envelope_exception_handler(NotFound("Order Not Found.!"), {"view": None})
        assert resp.status_code == 404
        assert resp.data == {"code": 404, "message": "Order Not Found.!"}

    def test_validation_error(self):
        resp = envelope_exception_handler(ValidationError({"productId": ["required"]}), {"view": None})
        assert resp.status_code == 400
        assert resp.data["errors"] == [{"field": "productId", "message": "required"}]

    def test_store_error_is_opaque_500(self, caplog):
        resp = envelope_exception_handler(StoreError("query on orders failed: Throttling"), {"view": MagicMock()})
        assert resp.status_code == 500
        assert resp.data == {"code": 500, "message": "Internal Server Error"}
        assert "Throttling" in caplog.text


def test_health_check_echoes_headers(client):
    resp = client.get("/health-check", HTTP_X_REQUEST_ID="abc", HTTP_AUTHORIZATION="Bearer secret")

    assert resp.status_code == 200
    body = resp.json()
    assert body["code"] == 200
    assert body["message"] == "success"
    assert body["headers"]["X-Request-Id"] == "abc"
    assert "Authorization" not in body["headers"]


def test_health_check_get_only(client):
    assert client.post("/health-check").status_code == 405
