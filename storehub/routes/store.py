"""스토어 엔드포인트."""
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Request

from storehub import services
from storehub.api import (
    STORE_TOKEN_COOKIE,
    account_claims,
    get_tokens,
    get_uow,
    render,
    scoped_store_id,
)
from storehub.core import AbstractUnitOfWork
from storehub.domain.models import Claims
from storehub.schema import StoreRead, StoreSchema
from storehub.tokens import TokenService

router = APIRouter(tags=["store"])


@router.post("/account/store", status_code=201)
def create_store(
    payload: StoreSchema,
    claims: Claims = Depends(account_claims),
    uow: AbstractUnitOfWork = Depends(get_uow),
):
    """로그인한 계정 소유의 스토어를 만듭니다."""
    result = services.store.create_store(claims.user_id, payload, uow)
    return render(result, StoreRead)


@router.get("/account/store")
def get_store(
    store_id: Optional[int] = None,
    claims: Claims = Depends(account_claims),
    uow: AbstractUnitOfWork = Depends(get_uow),
    tokens: TokenService = Depends(get_tokens),
):
    """소유한 스토어 목록을 리턴하고 ``Store-token`` 쿠키를 심습니다.

    ``?store_id=`` 로 토큰을 한정할 스토어를 고를 수 있습니다.
    """
    result, token = services.store.read(claims.user_id, uow, tokens, store_id=store_id)
    if not token:
        return render(result)
    return render(result, StoreRead, set_cookies={STORE_TOKEN_COOKIE: token})


@router.patch("/account/store/{store_id}")
def edit_store(
    store_id: int,
    payload: StoreSchema,
    claims: Claims = Depends(account_claims),
    uow: AbstractUnitOfWork = Depends(get_uow),
):
    result = services.store.update_store(store_id, claims.user_id, payload, uow)
    return render(result, StoreRead)


@router.delete("/account/store/{store_id}")
def delete_store(
    request: Request,
    store_id: int,
    claims: Claims = Depends(account_claims),
    uow: AbstractUnitOfWork = Depends(get_uow),
    store_token: Optional[str] = Cookie(None, alias=STORE_TOKEN_COOKIE),
):
    """스토어를 삭제합니다. ``Store-token`` 이 이 스토어를 가리키면 쿠키도 만료시킵니다."""
    result = services.store.delete_store(store_id, claims.user_id, uow)
    if result.ok and scoped_store_id(request, store_token) == store_id:
        return render(result, delete_cookies=[STORE_TOKEN_COOKIE])
    return render(result)


@router.get("/store/{user_id}")
def list_stores(user_id: int, uow: AbstractUnitOfWork = Depends(get_uow)):
    """``user_id`` 계정의 스토어 목록을 공개 조회합니다. 토큰은 발급하지 않습니다."""
    return render(services.store.list_stores(user_id, uow), StoreRead)
