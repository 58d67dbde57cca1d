# shared/store/memory.py
from __future__ import annotations

import copy
import threading
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .base import ConditionFailed, DocumentStore, coerce_numbers

DEFAULT_KEY = ("id",)


def _matches(item: Mapping[str, Any], cond: Mapping[str, Any]) -> bool:
    return all(item.get(k) == coerce_numbers(v) for k, v in cond.items())


def _check_expected(current: Optional[Mapping[str, Any]], expected, op: str, table: str) -> None:
    if not expected:
        return
    for k, v in expected.items():
        if v is None:
            if current is not None and k in current:
                raise ConditionFailed(f"{op} on {table}: '{k}' already exists")
        elif current is None or current.get(k) != coerce_numbers(v):
            raise ConditionFailed(f"{op} on {table}: condition failed on '{k}'")


class InMemoryStore(DocumentStore):
    """
    프로세스 메모리 dict 기반 구현 (로컬 개발/테스트용).
    - 테이블별 키 속성은 key_schema 로 지정, 없으면 ("id",)
    - 인덱스는 구분하지 않고 전체 아이템에서 key 동등 비교로 조회
    - 읽기/쓰기 모두 deepcopy 로 호출자와 저장 값을 분리
    """

    def __init__(self, key_schema: Mapping[str, Tuple[str, ...]] | None = None):
        self.key_schema: Dict[str, Tuple[str, ...]] = {
            k: tuple(v) for k, v in (key_schema or {}).items()
        }
        self.tables: Dict[str, Dict[Tuple[Any, ...], Dict[str, Any]]] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "InMemoryStore":
        return cls(key_schema=getattr(settings, "STORE_KEY_SCHEMA", None))

    def _pk(self, table: str, key: Mapping[str, Any]) -> Tuple[Any, ...]:
        attrs = self.key_schema.get(table, DEFAULT_KEY)
        missing = [a for a in attrs if a not in key]
        if missing:
            raise ValueError(f"{table}: key attribute(s) missing: {', '.join(missing)}")
        return tuple(coerce_numbers(key[a]) for a in attrs)

    def _rows(self, table: str) -> Dict[Tuple[Any, ...], Dict[str, Any]]:
        return self.tables.setdefault(table, {})

    # ── 읽기 ─────────────────────────────────────────────────────────────
    def get_item(self, table, key, *, consistent=False):
        with self._lock:
            row = self._rows(table).get(self._pk(table, key))
            return copy.deepcopy(row) if row is not None else None

    def query(self, table, index, key, *, filters=None, limit=None) -> List[Dict[str, Any]]:
        with self._lock:
            out = []
            for row in self._rows(table).values():
                if not _matches(row, key):
                    continue
                if filters and not _matches(row, filters):
                    continue
                out.append(copy.deepcopy(row))
                if limit is not None and len(out) >= limit:
                    break
            return out

    # ── 쓰기 ─────────────────────────────────────────────────────────────
    def put_item(self, table, item, *, expected=None):
        body = coerce_numbers(copy.deepcopy(dict(item)))
        with self._lock:
            pk = self._pk(table, body)
            rows = self._rows(table)
            _check_expected(rows.get(pk), expected, "put_item", table)
            rows[pk] = body
            return copy.deepcopy(body)

    def update_item(self, table, key, fields, *, expected=None):
        if not fields:
            raise ValueError("update_item requires at least one field")
        with self._lock:
            pk = self._pk(table, key)
            rows = self._rows(table)
            current = rows.get(pk)
            _check_expected(current, expected, "update_item", table)
            # DynamoDB UpdateItem 과 같이 없으면 키만 가진 아이템으로 생성
            row = current if current is not None else coerce_numbers(dict(key))
            row.update(coerce_numbers(copy.deepcopy(dict(fields))))
            rows[pk] = row
            return copy.deepcopy(row)

    def delete_item(self, table, key, *, expected=None):
        with self._lock:
            pk = self._pk(table, key)
            rows = self._rows(table)
            _check_expected(rows.get(pk), expected, "delete_item", table)
            rows.pop(pk, None)

    # 시드/테스트 편의
    def all_items(self, table: str) -> List[Dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._rows(table).values()]
