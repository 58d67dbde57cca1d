from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from rest_framework.exceptions import NotAuthenticated, NotFound

from shared.store import DocumentStore, table_name


class UserNotFound(NotFound):
    default_detail = "User Data Not Found.!"
    default_code = "user_not_found"


@dataclass(frozen=True)
class Caller:
    """인증된 요청의 주체 (JWT sub / email 클레임)"""

    sub: str
    email: Optional[str]


def caller_from_request(request) -> Caller:
    """
    simplejwt stateless 인증이 붙여준 TokenUser 에서 sub/email 을 꺼낸다.
    토큰 검증 자체는 인증 클래스가 이미 끝낸 상태.
    """
    user = getattr(request, "user", None)
    token = getattr(user, "token", None)
    if not getattr(user, "is_authenticated", False) or token is None:
        raise NotAuthenticated()
    sub = user.id
    if not sub:
        raise NotAuthenticated()
    return Caller(sub=str(sub), email=token.get("email"))


def load_user_profile(store: DocumentStore, caller: Caller) -> Dict[str, Any]:
    """users 테이블에서 (cognitoId, email) 로 프로필 조회. 없으면 UserNotFound."""
    if not caller.email:
        raise UserNotFound()
    item = store.get_item(
        table_name("users"),
        {"cognitoId": caller.sub, "email": caller.email},
    )
    if not item:
        raise UserNotFound()
    return item


__all__ = ["Caller", "UserNotFound", "caller_from_request", "load_user_profile"]
