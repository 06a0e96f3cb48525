"""아이템(재고) 서비스.

모든 조회와 변경은 ``(id, store_id)`` 로 스토어 소유 여부를 함께 확인합니다.
"""
from datetime import datetime
from typing import Protocol, cast

from storehub.core import AbstractUnitOfWork, Conflict, NotFound
from storehub.domain.models import Item
from storehub.response import STATUS_CREATED, STATUS_OK, Result
from storehub.schema import ItemSchema
from storehub.services import returns_result
from storehub.utils import utcnow


class Restockable(Protocol):
    def increment_quantity(self, item: Item, qty: int, now: datetime) -> Item:
        ...


@returns_result
def add_item(store_id: int, payload: ItemSchema, uow: AbstractUnitOfWork) -> Result[Item]:
    """스토어에 아이템을 추가합니다.

    같은 스토어에 같은 이름의 아이템이 있으면 실패하지 않고 수량을 더합니다(입고).
    이 경우 ``200`` 을, 새로 만든 경우 ``201`` 을 리턴합니다.
    """
    with uow:
        items = uow[Item]
        item = items.find(store_id=store_id, name=payload.name)

        if item:
            cast(Restockable, items).increment_quantity(item, payload.quantity, utcnow())
            uow.commit()
            return Result.success(STATUS_OK, item)

        item = Item(
            store_id=store_id,
            name=payload.name,
            description=payload.description,
            quantity=payload.quantity,
            created_at=utcnow(),
        )
        items.add(item)
        uow.commit()

    return Result.success(STATUS_CREATED, item)


@returns_result
def get_all_items(store_id: int, uow: AbstractUnitOfWork) -> Result[list[Item]]:
    with uow:
        items = uow[Item].all(store_id=store_id)

    if not items:
        raise NotFound()
    return Result.success(STATUS_OK, items)


@returns_result
def get_one_item(item_id: int, store_id: int, uow: AbstractUnitOfWork) -> Result[Item]:
    with uow:
        item = uow[Item].get(item_id, store_id=store_id)

    return Result.success(STATUS_OK, item)


@returns_result
def update_item(
    item_id: int, store_id: int, payload: ItemSchema, uow: AbstractUnitOfWork
) -> Result[Item]:
    """아이템의 이름, 설명, 수량을 덮어씁니다."""
    with uow:
        items = uow[Item]
        item = items.get(item_id, store_id=store_id)

        other = items.find(store_id=store_id, name=payload.name)
        if other and other.id != item.id:
            raise Conflict()

        item.name = payload.name
        item.description = payload.description
        item.quantity = payload.quantity
        item.updated_at = utcnow()
        uow.commit()

    return Result.success(STATUS_OK, item)


@returns_result
def delete_item(item_id: int, store_id: int, uow: AbstractUnitOfWork) -> Result[str]:
    with uow:
        item = uow[Item].get(item_id, store_id=store_id)
        uow[Item].delete(item)
        uow.commit()

    return Result.success(STATUS_OK, "Success Delete Item")
