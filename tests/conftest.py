# tests/conftest.py
from decimal import Decimal
from uuid import uuid4

from django.conf import settings

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from shared.store import table_name
from shared.store.memory import InMemoryStore
from shared.views import StoreAPIView


# ─────────────────────────────────────────────────────────────
# 저장소 (메모리 구현으로 교체)
# ─────────────────────────────────────────────────────────────
@pytest.fixture
def store(monkeypatch):
    """
    모든 StoreAPIView 가 같은 InMemoryStore 를 쓰도록 주입
    """
    s = InMemoryStore(key_schema=settings.STORE_KEY_SCHEMA)
    monkeypatch.setattr(StoreAPIView, "store", s)
    return s


# ─────────────────────────────────────────────────────────────
# 시드 데이터 팩토리
# ─────────────────────────────────────────────────────────────
@pytest.fixture
def user_factory(store):
    def _make(**kw):
        user = {
            "id": kw.pop("id", str(uuid4())),
            "cognitoId": kw.pop("cognitoId", f"cognito-{uuid4().hex[:8]}"),
            "email": kw.pop("email", f"user{uuid4().hex[:6]}@example.com"),
            **kw,
        }
        store.put_item(table_name("users"), user)
        return user

    return _make


@pytest.fixture
def venue_factory(store):
    def _make(**kw):
        venue = {
            "id": kw.pop("id", str(uuid4())),
            "venueName": kw.pop("venueName", "Corner Bistro"),
            "venueEmail": kw.pop("venueEmail", "owner@bistro.example.com"),
            "cognitoId": kw.pop("cognitoId", f"venue-{uuid4().hex[:8]}"),
            "bankBSB": kw.pop("bankBSB", "062-000"),
            "bankName": kw.pop("bankName", "Example Bank"),
            "bankAccountNo": kw.pop("bankAccountNo", "12345678"),
            **kw,
        }
        store.put_item(table_name("venues"), venue)
        return venue

    return _make


@pytest.fixture
def product_factory(store):
    def _make(venue, **kw):
        product = {
            "id": kw.pop("id", str(uuid4())),
            "venueId": venue["id"],
            "productName": kw.pop("productName", "Flat White"),
            "price": Decimal(str(kw.pop("price", "10"))),
            "isActive": kw.pop("isActive", True),
            **kw,
        }
        store.put_item(table_name("products"), product)
        return product

    return _make


@pytest.fixture
def user(user_factory):
    return user_factory(email="user@example.com")


@pytest.fixture
def venue(venue_factory):
    return venue_factory()


# ─────────────────────────────────────────────────────────────
# 클라이언트 & 인증
# ─────────────────────────────────────────────────────────────
def _make_token(sub: str, email: str | None) -> str:
    token = AccessToken()
    token["sub"] = sub
    if email is not None:
        token["email"] = email
    return str(token)


@pytest.fixture
def make_token():
    """임의 sub/email 로 서명된 access 토큰 문자열: make_token(sub, email)"""
    return _make_token


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client(user):
    """
    user 프로필(cognitoId/email)로 서명된 Bearer 토큰이 세팅된 APIClient
    """
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {_make_token(user['cognitoId'], user['email'])}")
    return c


@pytest.fixture
def client_for():
    """다른 유저로 요청할 때: client_for(user_dict)"""

    def _make(u):
        c = APIClient()
        c.credentials(HTTP_AUTHORIZATION=f"Bearer {_make_token(u['cognitoId'], u['email'])}")
        return c

    return _make
