"""WeChat identity passthrough.

Шлюз платформы подставляет ``x-wx-source`` и ``x-wx-openid``;
сервис только возвращает openid, не проверяя его.
"""

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse

from src.core.constants import WX_OPENID_HEADER, WX_SOURCE_HEADER

router = APIRouter(tags=["wechat"])


@router.get(
    "/wx_openid",
    summary="OpenID пользователя",
    response_class=PlainTextResponse,
    responses={204: {"description": "Запрос пришёл не через шлюз платформы"}},
)
async def wx_openid(request: Request) -> Response:
    """Вернуть openid из заголовков шлюза.

    Returns:
        openid как text/plain или 204 без заголовка источника

    """
    if WX_SOURCE_HEADER not in request.headers:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return PlainTextResponse(request.headers.get(WX_OPENID_HEADER, ""))
