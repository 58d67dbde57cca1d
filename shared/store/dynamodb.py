# shared/store/dynamodb.py
from __future__ import annotations

import logging
from functools import reduce
from operator import and_
from typing import Any, Dict, List, Mapping

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import BotoCoreError, ClientError

from .base import ConditionFailed, DocumentStore, StoreError, coerce_numbers as _coerce

logger = logging.getLogger(__name__)


def _key_condition(key: Mapping[str, Any]):
    return reduce(and_, (Key(k).eq(_coerce(v)) for k, v in key.items()))


def _attr_condition(filters: Mapping[str, Any]):
    return reduce(and_, (Attr(k).eq(_coerce(v)) for k, v in filters.items()))


def _expected_condition(expected: Mapping[str, Any]):
    """{"id": None} → attribute_not_exists(id), {"version": 3} → version = 3"""
    parts = [
        Attr(k).not_exists() if v is None else Attr(k).eq(_coerce(v))
        for k, v in expected.items()
    ]
    return reduce(and_, parts)


class DynamoDBStore(DocumentStore):
    """
    boto3 DynamoDB 리소스 기반 구현.
    endpoint_url 을 주면 DynamoDB Local 등 다른 엔드포인트로 붙는다.
    """

    def __init__(self, *, endpoint_url: str | None = None, region_name: str | None = None, resource=None):
        self.resource = resource or boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url or None,
            region_name=region_name or None,
        )

    @classmethod
    def from_settings(cls, settings) -> "DynamoDBStore":
        return cls(
            endpoint_url=getattr(settings, "DYNAMODB_ENDPOINT_URL", None),
            region_name=getattr(settings, "AWS_REGION", None),
        )

    def _table(self, table: str):
        return self.resource.Table(table)

    def _call(self, op: str, table: str, fn, **kwargs):
        try:
            return fn(**kwargs)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code == "ConditionalCheckFailedException":
                raise ConditionFailed(f"{op} on {table}: condition failed") from e
            logger.error("DynamoDB %s on %s failed: %s", op, table, code or e)
            raise StoreError(f"{op} on {table} failed: {code or e}") from e
        except BotoCoreError as e:
            logger.error("DynamoDB %s on %s failed: %s", op, table, e)
            raise StoreError(f"{op} on {table} failed: {e}") from e

    # ── 읽기 ─────────────────────────────────────────────────────────────
    def get_item(self, table, key, *, consistent=False):
        resp = self._call(
            "get_item",
            table,
            self._table(table).get_item,
            Key=_coerce(dict(key)),
            ConsistentRead=consistent,
        )
        return resp.get("Item")

    def query(self, table, index, key, *, filters=None, limit=None) -> List[Dict[str, Any]]:
        """
        Limit 은 필터 적용 전 평가 개수라서, 필터가 있으면 조건에 맞는 아이템이
        limit 개 모일 때까지 LastEvaluatedKey 로 페이지를 넘긴다.
        """
        kwargs: Dict[str, Any] = {
            "IndexName": index,
            "KeyConditionExpression": _key_condition(key),
        }
        if filters:
            kwargs["FilterExpression"] = _attr_condition(filters)

        items: List[Dict[str, Any]] = []
        while True:
            resp = self._call("query", table, self._table(table).query, **kwargs)
            items.extend(resp.get("Items", []))
            if limit is not None and len(items) >= limit:
                return items[:limit]
            last = resp.get("LastEvaluatedKey")
            if not last:
                return items
            kwargs["ExclusiveStartKey"] = last

    # ── 쓰기 ─────────────────────────────────────────────────────────────
    def put_item(self, table, item, *, expected=None):
        body = _coerce(dict(item))
        kwargs: Dict[str, Any] = {"Item": body}
        if expected:
            kwargs["ConditionExpression"] = _expected_condition(expected)
        self._call("put_item", table, self._table(table).put_item, **kwargs)
        return body

    def update_item(self, table, key, fields, *, expected=None):
        if not fields:
            raise ValueError("update_item requires at least one field")
        names: Dict[str, str] = {}
        values: Dict[str, Any] = {}
        sets = []
        # 조건식 빌더가 #n0/:v0 를 쓰므로 다른 접두어 사용
        for i, (name, value) in enumerate(fields.items()):
            names[f"#u{i}"] = name
            values[f":u{i}"] = _coerce(value)
            sets.append(f"#u{i} = :u{i}")

        kwargs: Dict[str, Any] = {
            "Key": _coerce(dict(key)),
            "UpdateExpression": "SET " + ", ".join(sets),
            "ExpressionAttributeNames": names,
            "ExpressionAttributeValues": values,
            "ReturnValues": "ALL_NEW",
        }
        if expected:
            kwargs["ConditionExpression"] = _expected_condition(expected)
        resp = self._call("update_item", table, self._table(table).update_item, **kwargs)
        return resp.get("Attributes", {})

    def delete_item(self, table, key, *, expected=None):
        kwargs: Dict[str, Any] = {"Key": _coerce(dict(key))}
        if expected:
            kwargs["ConditionExpression"] = _expected_condition(expected)
        self._call("delete_item", table, self._table(table).delete_item, **kwargs)
