# shared/store/__init__.py
from functools import lru_cache

from django.conf import settings
from django.utils.module_loading import import_string

from .base import ConditionFailed, DocumentStore, StoreError


@lru_cache(maxsize=None)
def get_store() -> DocumentStore:
    """settings.STORE_BACKEND 로 지정된 저장소 클라이언트를 프로세스당 1회 생성."""
    cls = import_string(settings.STORE_BACKEND)
    return cls.from_settings(settings)


def table_name(alias: str) -> str:
    """논리 테이블 별칭(orders/users/venues/products) → 실제 테이블명"""
    return settings.STORE_TABLES[alias]


__all__ = [
    "get_store",
    "table_name",
    "DocumentStore",
    "StoreError",
    "ConditionFailed",
]
