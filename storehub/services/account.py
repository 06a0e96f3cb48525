"""계정 서비스."""
from typing import Optional

from storehub.core import AbstractUnitOfWork, Conflict, Unauthorized
from storehub.domain.models import Account, Item, Store
from storehub.hasher import Bcrypt
from storehub.response import STATUS_CREATED, STATUS_OK, Result
from storehub.schema import AccountSchema, LoginSchema
from storehub.services import returns_result
from storehub.tokens import TokenService, account_claims
from storehub.utils import utcnow


@returns_result
def register(payload: AccountSchema, uow: AbstractUnitOfWork, hasher: Bcrypt) -> Result[Account]:
    """새 계정을 등록합니다.

    Errors:
        Conflict: 같은 이메일의 계정이 이미 있는 경우.
    """
    with uow:
        accounts = uow[Account]
        if accounts.find(by_email=payload.email):
            raise Conflict()

        account = Account(
            name=payload.name,
            email=payload.email,
            password=hasher.hash_password(payload.password),
            address=payload.address,
            created_at=utcnow(),
        )
        accounts.add(account)
        uow.commit()

    return Result.success(STATUS_CREATED, account.public())


@returns_result(with_token=True)
def login(
    payload: LoginSchema, uow: AbstractUnitOfWork, hasher: Bcrypt, tokens: TokenService
) -> tuple[Result[Account], Optional[str]]:
    """이메일/비밀번호를 확인하고 계정 토큰을 발급합니다.

    Errors:
        NotFound: 이메일에 해당하는 계정이 없는 경우.
        Unauthorized: 비밀번호가 틀린 경우.
    """
    with uow:
        account = uow[Account].get(by_email=payload.email)

    if not hasher.compare_password_hash(payload.password, account.password):
        raise Unauthorized()

    token = tokens.issue(account_claims(account))
    return Result.success(STATUS_OK, account.public()), token


@returns_result
def update(
    account_id: int, payload: AccountSchema, uow: AbstractUnitOfWork, hasher: Bcrypt
) -> Result[Account]:
    """계정 정보를 통째로 덮어씁니다. 비밀번호는 항상 다시 해싱합니다."""
    with uow:
        accounts = uow[Account]
        account = accounts.get(account_id)

        other = accounts.find(by_email=payload.email)
        if other and other.id != account.id:
            raise Conflict()

        account.name = payload.name
        account.password = hasher.hash_password(payload.password)
        account.email = payload.email
        account.address = payload.address
        account.updated_at = utcnow()
        uow.commit()

    return Result.success(STATUS_OK, account.public())


@returns_result
def read_one(account_id: int, uow: AbstractUnitOfWork) -> Result[Account]:
    with uow:
        account = uow[Account].get(account_id)

    return Result.success(STATUS_OK, account.public())


@returns_result
def delete(account_id: int, uow: AbstractUnitOfWork) -> Result[str]:
    """계정과 계정이 소유한 스토어, 아이템을 모두 삭제합니다."""
    with uow:
        account = uow[Account].get(account_id)

        for store in uow[Store].all(owner_id=account.id):
            for item in uow[Item].all(store_id=store.id):
                uow[Item].delete(item)
            uow[Store].delete(store)

        uow[Account].delete(account)
        uow.commit()

    return Result.success(STATUS_OK, "Success Delete Account")
