# shared/store/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional


def coerce_numbers(value: Any) -> Any:
    """float → Decimal (중첩 dict/list 포함). 저장소 숫자 타입은 항상 Decimal."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: coerce_numbers(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [coerce_numbers(v) for v in value]
    return value


class StoreError(Exception):
    """저장소 호출 실패(네트워크/권한/스로틀링 등). 호출자에게는 불투명하게 전달."""

    pass


class ConditionFailed(StoreError):
    """조건부 쓰기(expected)가 현재 값과 맞지 않아 거부됐을 때"""

    pass


class DocumentStore(ABC):
    """
    문서형 key-value 저장소의 최소 공통 인터페이스

    - key / filters / expected 는 모두 "속성명 → 값" 동등 비교 dict
    - expected 의 값이 None 이면 "해당 속성이 없어야 함"을 의미
      (put_item(..., expected={"id": None}) → 신규 생성만 허용)
    - 조건 불일치는 ConditionFailed, 그 외 실패는 StoreError
    """

    @abstractmethod
    def get_item(
        self, table: str, key: Mapping[str, Any], *, consistent: bool = False
    ) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def query(
        self,
        table: str,
        index: str,
        key: Mapping[str, Any],
        *,
        filters: Optional[Mapping[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def put_item(
        self,
        table: str,
        item: Mapping[str, Any],
        *,
        expected: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def update_item(
        self,
        table: str,
        key: Mapping[str, Any],
        fields: Mapping[str, Any],
        *,
        expected: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """fields 를 SET 하고 갱신된 전체 아이템을 반환."""
        raise NotImplementedError

    @abstractmethod
    def delete_item(
        self,
        table: str,
        key: Mapping[str, Any],
        *,
        expected: Optional[Mapping[str, Any]] = None,
    ) -> None:
        raise NotImplementedError
