"""스토어 서비스."""
from typing import Optional

from storehub.core import AbstractUnitOfWork, Conflict, NotFound
from storehub.domain.models import Item, Store
from storehub.response import STATUS_CREATED, STATUS_OK, Result
from storehub.schema import StoreSchema
from storehub.services import returns_result
from storehub.tokens import TokenService, store_claims
from storehub.utils import utcnow


def _owned_stores(owner_id: int, uow: AbstractUnitOfWork) -> list[Store]:
    with uow:
        stores = uow[Store].all(owner_id=owner_id)

    if not stores:
        raise NotFound()
    return stores


@returns_result
def create_store(owner_id: int, payload: StoreSchema, uow: AbstractUnitOfWork) -> Result[Store]:
    """``owner_id`` 계정이 소유하는 새 스토어를 만듭니다.

    Errors:
        Conflict: 소유자와 상관없이 같은 이름의 스토어가 이미 있는 경우.
    """
    with uow:
        stores = uow[Store]
        if stores.find(by_name=payload.name):
            raise Conflict()

        store = Store(
            owner_id=owner_id,
            name=payload.name,
            description=payload.description,
            created_at=utcnow(),
        )
        stores.add(store)
        uow.commit()

    return Result.success(STATUS_CREATED, store)


@returns_result(with_token=True)
def read(
    owner_id: int,
    uow: AbstractUnitOfWork,
    tokens: TokenService,
    store_id: Optional[int] = None,
) -> tuple[Result[list[Store]], Optional[str]]:
    """소유한 스토어 목록을 조회하고 스토어 토큰을 발급합니다.

    토큰은 첫번째 스토어로 한정됩니다. ``store_id`` 를 주면 그 스토어로 한정하며,
    소유하지 않은 스토어라면 :class:`NotFound` 입니다.
    """
    stores = _owned_stores(owner_id, uow)

    if store_id is None:
        scoped = stores[0]
    else:
        scoped = next((s for s in stores if s.id == store_id), None)
        if scoped is None:
            raise NotFound()

    token = tokens.issue(store_claims(scoped))
    return Result.success(STATUS_OK, stores), token


@returns_result
def list_stores(owner_id: int, uow: AbstractUnitOfWork) -> Result[list[Store]]:
    """토큰 발급 없이 ``owner_id`` 계정의 스토어 목록만 조회합니다."""
    return Result.success(STATUS_OK, _owned_stores(owner_id, uow))


@returns_result
def update_store(
    store_id: int, owner_id: int, payload: StoreSchema, uow: AbstractUnitOfWork
) -> Result[Store]:
    """스토어 이름과 설명을 덮어씁니다. 다른 계정의 스토어는 찾을 수 없습니다."""
    with uow:
        stores = uow[Store]
        store = stores.get(store_id, owner_id=owner_id)

        other = stores.find(by_name=payload.name)
        if other and other.id != store.id:
            raise Conflict()

        store.name = payload.name
        store.description = payload.description
        store.updated_at = utcnow()
        uow.commit()

    return Result.success(STATUS_OK, store)


@returns_result
def delete_store(store_id: int, owner_id: int, uow: AbstractUnitOfWork) -> Result[str]:
    """스토어와 스토어의 모든 아이템을 삭제합니다."""
    with uow:
        store = uow[Store].get(store_id, owner_id=owner_id)

        for item in uow[Item].all(store_id=store.id):
            uow[Item].delete(item)

        uow[Store].delete(store)
        uow.commit()

    return Result.success(STATUS_OK, "Success Delete Store")
