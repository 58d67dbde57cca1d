# shared/views.py
from __future__ import annotations

from rest_framework import permissions
from rest_framework.views import APIView

from domains.accounts.services import caller_from_request, load_user_profile
from shared.store import DocumentStore, get_store


class StoreAPIView(APIView):
    """
    문서 저장소를 쓰는 뷰의 공통 베이스.
    - store 는 as_view(store=...) 또는 클래스 속성으로 주입, 없으면 프로세스 기본값
    - 모든 엔드포인트 로그인 필요
    """

    permission_classes = [permissions.IsAuthenticated]
    store: DocumentStore | None = None

    def get_store(self) -> DocumentStore:
        return self.store or get_store()

    def get_profile(self, request) -> dict:
        """토큰(sub/email) → users 테이블 프로필"""
        return load_user_profile(self.get_store(), caller_from_request(request))
