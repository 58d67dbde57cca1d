# shared/cleanup.py
"""
응답에 실리기 전 민감 필드를 제거하는 순수 함수.
원본 dict 는 건드리지 않고 항상 새 dict 를 반환한다.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

VENUE_PRIVATE_FIELDS = frozenset(
    {"cognitoId", "venueEmail", "bankBSB", "bankName", "bankAccountNo"}
)


def venue_cleanup(venue: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    if venue is None:
        return None
    return {k: v for k, v in venue.items() if k not in VENUE_PRIVATE_FIELDS}


__all__ = ["venue_cleanup", "VENUE_PRIVATE_FIELDS"]
