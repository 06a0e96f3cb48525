"""아이템 엔드포인트. 모든 요청에 ``Store-token`` 쿠키가 필요합니다."""
from fastapi import APIRouter, Depends

from storehub import services
from storehub.api import get_uow, render, store_claims
from storehub.core import AbstractUnitOfWork
from storehub.domain.models import Claims
from storehub.schema import ItemRead, ItemSchema

router = APIRouter(prefix="/store/items", tags=["item"])


@router.post("")
def add_item(
    payload: ItemSchema,
    claims: Claims = Depends(store_claims),
    uow: AbstractUnitOfWork = Depends(get_uow),
):
    """아이템을 추가합니다. 같은 이름이 있으면 수량을 더하고 ``200`` 을 리턴합니다."""
    return render(services.item.add_item(claims.store_id, payload, uow), ItemRead)


@router.get("")
def get_all_items(
    claims: Claims = Depends(store_claims),
    uow: AbstractUnitOfWork = Depends(get_uow),
):
    return render(services.item.get_all_items(claims.store_id, uow), ItemRead)


@router.get("/{item_id}")
def get_one_item(
    item_id: int,
    claims: Claims = Depends(store_claims),
    uow: AbstractUnitOfWork = Depends(get_uow),
):
    return render(services.item.get_one_item(item_id, claims.store_id, uow), ItemRead)


@router.patch("/{item_id}")
def update_item(
    item_id: int,
    payload: ItemSchema,
    claims: Claims = Depends(store_claims),
    uow: AbstractUnitOfWork = Depends(get_uow),
):
    result = services.item.update_item(item_id, claims.store_id, payload, uow)
    return render(result, ItemRead)


@router.delete("/{item_id}")
def delete_item(
    item_id: int,
    claims: Claims = Depends(store_claims),
    uow: AbstractUnitOfWork = Depends(get_uow),
):
    return render(services.item.delete_item(item_id, claims.store_id, uow))
