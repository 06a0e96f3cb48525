"""FastAPI 로 구현한 RESTful 서비스 앱."""
from __future__ import annotations

from typing import Any, Iterable, Optional, Type, cast

from fastapi import Cookie, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from storehub.config import Config
from storehub.core import (
    AbstractUnitOfWork,
    BadRequest,
    InternalServerError,
    StoreHubError,
    Unauthorized,
    UnprocessableEntity,
)
from storehub.domain.models import Claims, Store
from storehub.hasher import Bcrypt
from storehub.logging import get_logger
from storehub.orm import SessionMaker, init_db
from storehub.response import Result
from storehub.tokens import TokenService
from storehub.uow import SqlAlchemyUnitOfWork

TOKEN_COOKIE = "token"
"""계정 토큰 쿠키 이름."""
STORE_TOKEN_COOKIE = "Store-token"
"""스토어 토큰 쿠키 이름."""

logger = get_logger("storehub.api")


def create_app(config: Optional[Config] = None, get_session: Optional[SessionMaker] = None) -> FastAPI:
    """FastAPI 앱을 초기화 합니다.

    설정을 읽어 DB, 해셔, 토큰 서비스를 한 번 만들고 ``app.state`` 에 보관한 뒤
    :mod:`storehub.routes` 의 엔드포인트를 등록합니다.
    """
    from storehub.routes import account, item, store  # noqa

    config = config or Config.from_env()

    app = FastAPI(title=config.title)
    app.state.config = config
    app.state.get_session = get_session or init_db(config)
    app.state.hasher = Bcrypt(config.get_hash_cost())
    app.state.tokens = TokenService(config.get_jwt_secret(), ttl=config.get_token_ttl())

    app.add_exception_handler(StoreHubError, handle_storehub_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(account.router)
    # `/store/items` 가 `/store/{user_id}` 보다 먼저 매칭되어야 합니다.
    app.include_router(item.router)
    app.include_router(store.router)

    return app


##############################################################################
# Dependencies
##############################################################################
def get_uow(request: Request) -> AbstractUnitOfWork:
    """요청마다 새 UnitOfWork 를 만듭니다. 엔진(커넥션 풀)은 앱 전체가 공유합니다."""
    return SqlAlchemyUnitOfWork(request.app.state.get_session)


def get_hasher(request: Request) -> Bcrypt:
    return request.app.state.hasher


def get_tokens(request: Request) -> TokenService:
    return request.app.state.tokens


def account_claims(request: Request, token: Optional[str] = Cookie(None)) -> Claims:
    """``token`` 쿠키의 계정 토큰을 검증합니다.

    스토어 토큰을 계정 토큰 자리에 쓰는 것은 허용하지 않습니다.
    """
    claims = get_tokens(request).verify(token or "")
    if claims.is_store_scoped or claims.user_id is None:
        raise Unauthorized()
    return claims


def store_claims(
    request: Request,
    store_token: Optional[str] = Cookie(None, alias=STORE_TOKEN_COOKIE),
) -> Claims:
    """``Store-token`` 쿠키의 스토어 토큰을 검증합니다.

    서명이 유효해도 스토어가 삭제되었거나 소유자가 다르면 거부합니다.
    """
    claims = get_tokens(request).verify(store_token or "")
    if not claims.is_store_scoped:
        raise Unauthorized()

    with get_uow(request) as uow:
        store = uow[Store].find(claims.store_id, owner_id=claims.user_id)
    if store is None:
        raise Unauthorized()
    return claims


def scoped_store_id(request: Request, store_token: Optional[str]) -> Optional[int]:
    """``Store-token`` 쿠키가 가리키는 스토어 id. 유효하지 않은 토큰이면 ``None`` 입니다."""
    if not store_token:
        return None
    try:
        return get_tokens(request).verify(store_token).store_id
    except Unauthorized:
        return None


##############################################################################
# Rendering
##############################################################################
def _dump(data: Any, schema: Optional[Type[BaseModel]]) -> Any:
    if schema is None or isinstance(data, str):
        return jsonable_encoder(data)
    if isinstance(data, list):
        return [schema.model_validate(it).model_dump(mode="json") for it in data]
    return schema.model_validate(data).model_dump(mode="json")


def render(
    result: Result,
    schema: Optional[Type[BaseModel]] = None,
    set_cookies: Optional[dict[str, str]] = None,
    delete_cookies: Iterable[str] = (),
) -> JSONResponse:
    """유스케이스 결과를 ``{status, data|error}`` JSON 응답으로 변환합니다.

    Args:
        schema: 성공 페이로드(엔티티 또는 리스트)를 직렬화할 응답 스키마.
        set_cookies: 응답에 심을 HTTP-only 쿠키.
        delete_cookies: 만료시킬 쿠키 이름.
    """
    data = _dump(result.data, schema) if result.ok else None
    response = JSONResponse(status_code=result.status, content=result.to_dict(data))

    for name, value in (set_cookies or {}).items():
        response.set_cookie(name, value, path="/", httponly=True)
    for name in delete_cookies:
        response.delete_cookie(name, path="/", httponly=True)

    return response


##############################################################################
# Exception handlers
##############################################################################
def handle_storehub_error(request: Request, exc: Exception) -> JSONResponse:
    return render(Result.failure(cast(StoreHubError, exc)))


def is_parse_error(exc: RequestValidationError) -> bool:
    """본문을 JSON 객체로 해석하지 못한 에러인지 판단합니다.

    잘못된 JSON, 빈 본문, 객체가 아닌 본문은 해석 실패(422)이고
    나머지 필드 검증 실패는 잘못된 요청(400)입니다.
    """
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            return True
        if tuple(error.get("loc", ())) == ("body",):
            return True
    return False


def handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
    invalid = cast(RequestValidationError, exc)
    error: StoreHubError = UnprocessableEntity() if is_parse_error(invalid) else BadRequest()
    reasons = [(tuple(e.get("loc", ())), e.get("type")) for e in invalid.errors()]
    logger.info("%s %s rejected: %r", request.method, request.url.path, reasons)
    return render(Result.failure(error))


def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc
    )
    return render(Result.failure(InternalServerError()))
