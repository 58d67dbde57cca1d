from django.http import JsonResponse
from django.urls import include, path
from django.views.decorators.http import require_GET
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

# 헬스체크 응답에 되돌려주지 않을 헤더
_HIDDEN_HEADERS = {"authorization", "cookie"}


@require_GET
def health_check(request):
    headers = {
        k: v for k, v in request.headers.items() if k.lower() not in _HIDDEN_HEADERS
    }
    return JsonResponse({"code": 200, "message": "success", "headers": headers})


urlpatterns = [
    # OpenAPI / Swagger
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="docs"),

    # 헬스체크
    path("health-check", health_check, name="health-check"),

    # 장바구니 / 주문
    path("", include("api.v1.urls")),
]
