"""계정 엔드포인트."""
from fastapi import APIRouter, Depends

from storehub import services
from storehub.api import (
    STORE_TOKEN_COOKIE,
    TOKEN_COOKIE,
    account_claims,
    get_hasher,
    get_tokens,
    get_uow,
    render,
)
from storehub.core import AbstractUnitOfWork
from storehub.domain.models import Claims
from storehub.hasher import Bcrypt
from storehub.response import STATUS_OK, Result
from storehub.schema import AccountRead, AccountSchema, LoginSchema
from storehub.tokens import TokenService

router = APIRouter(tags=["account"])


@router.post("/register", status_code=201)
def register(
    payload: AccountSchema,
    uow: AbstractUnitOfWork = Depends(get_uow),
    hasher: Bcrypt = Depends(get_hasher),
):
    """``POST /register`` 요청을 처리하여 새 계정을 등록합니다."""
    return render(services.account.register(payload, uow, hasher), AccountRead)


@router.post("/login")
def login(
    payload: LoginSchema,
    uow: AbstractUnitOfWork = Depends(get_uow),
    hasher: Bcrypt = Depends(get_hasher),
    tokens: TokenService = Depends(get_tokens),
):
    """``POST /login`` 성공시 ``token`` 쿠키에 계정 토큰을 심습니다.

    실패하면 남아있던 ``token`` 쿠키를 만료시킵니다.
    """
    result, token = services.account.login(payload, uow, hasher, tokens)
    if not token:
        return render(result, delete_cookies=[TOKEN_COOKIE])
    return render(result, AccountRead, set_cookies={TOKEN_COOKIE: token})


@router.post("/logout")
def logout():
    """계정/스토어 토큰 쿠키를 모두 만료시킵니다."""
    result = Result.success(STATUS_OK, "Success Logout")
    return render(result, delete_cookies=[TOKEN_COOKIE, STORE_TOKEN_COOKIE])


@router.get("/account")
def read_account(
    claims: Claims = Depends(account_claims),
    uow: AbstractUnitOfWork = Depends(get_uow),
):
    return render(services.account.read_one(claims.user_id, uow), AccountRead)


@router.patch("/account/update")
def update_account(
    payload: AccountSchema,
    claims: Claims = Depends(account_claims),
    uow: AbstractUnitOfWork = Depends(get_uow),
    hasher: Bcrypt = Depends(get_hasher),
):
    """로그인한 계정의 정보를 수정합니다."""
    return render(services.account.update(claims.user_id, payload, uow, hasher), AccountRead)


@router.delete("/account")
def delete_account(
    claims: Claims = Depends(account_claims),
    uow: AbstractUnitOfWork = Depends(get_uow),
):
    """로그인한 계정을 삭제하고 토큰 쿠키를 만료시킵니다."""
    result = services.account.delete(claims.user_id, uow)
    if not result.ok:
        return render(result)
    return render(result, delete_cookies=[TOKEN_COOKIE, STORE_TOKEN_COOKIE])
