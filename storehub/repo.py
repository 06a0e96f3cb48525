"""레포지터리 패턴 구현."""
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Generator, Optional, Type, TypeVar

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storehub.core import (
    AbstractRepository,
    BadRequest,
    Entity,
    InternalServerError,
    NotFound,
)
from storehub.domain.models import MAX_QUANTITY, Account, Item, Store
from storehub.logging import get_logger

E = TypeVar("E", bound=Entity)

logger = get_logger("storehub.repo")


@contextmanager
def translate_errors(action: str) -> Generator[None, None, None]:
    """SqlAlchemy 예외를 로그로 남기고 :class:`InternalServerError` 로 변환합니다.

    원본 에러(SQL 문 등)는 응답에 노출되지 않고 로그에만 남습니다.
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("persistence failure while %s", action)
        raise InternalServerError() from e


class SqlAlchemyRepository(AbstractRepository[E]):
    """SqlAlchemy ORM을 저장소로 하는 :class:`AbstractRepository` 구현입니다."""

    def __init__(self, entity_class: Type[E], session: Session):
        """임의의 엔티티 E 를 받아 E에대한 Repostiory를 초기화합니다."""
        super().__init__()
        self.entity_class = entity_class
        self.session = session

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}[{self.entity_class.__name__}]"

    def close(self) -> None:
        self.session.close()

    def _add(self, item: E) -> None:
        with translate_errors(f"adding {item!r}"):
            self.session.add(item)
            self.session.flush()  # id 를 할당 받습니다.

    def _get(self, id: Any = None, **kwargs: Any) -> Optional[E]:
        with translate_errors(f"reading {self.entity_class.__name__}"):
            if id is not None:
                filter_by = dict(id=id, **kwargs)
            else:
                filter_by = {k: v for k, v in kwargs.items() if v is not None}
                if not filter_by:
                    return None
            stmt = select(self.entity_class).filter_by(**filter_by).limit(1)
            return self.session.scalars(stmt).first()

    def all(self, **kwargs: Any) -> list[E]:
        with translate_errors(f"listing {self.entity_class.__name__}"):
            stmt = select(self.entity_class).filter_by(**kwargs)
            stmt = stmt.order_by(getattr(self.entity_class, "id"))
            return list(self.session.scalars(stmt).all())

    def delete(self, item: E) -> None:
        with translate_errors(f"deleting {item!r}"):
            self.session.delete(item)
            self.session.flush()

    def clear(self) -> None:
        with translate_errors(f"clearing {self.entity_class.__name__}"):
            self.session.query(self.entity_class).delete()


class SqlAlchemyAccountRepository(SqlAlchemyRepository[Account]):
    def __init__(self, session: Session):
        super().__init__(Account, session)

    def _get_by_email(self, email: str) -> Optional[Account]:
        return self._get(email=email)


class SqlAlchemyStoreRepository(SqlAlchemyRepository[Store]):
    def __init__(self, session: Session):
        super().__init__(Store, session)

    def _get_by_name(self, name: str) -> Optional[Store]:
        return self._get(name=name)


class SqlAlchemyItemRepository(SqlAlchemyRepository[Item]):
    def __init__(self, session: Session):
        super().__init__(Item, session)

    def increment_quantity(self, item: Item, qty: int, now: datetime) -> Item:
        """``quantity = quantity + qty`` 를 한 번의 UPDATE 문으로 수행합니다.

        읽고-쓰기 사이의 경쟁 상태 없이 동시 입고 요청이 모두 반영됩니다.

        Raises:
            NotFound: 그 사이 아이템이 삭제된 경우.
            BadRequest: 합계가 :data:`MAX_QUANTITY` 를 넘는 경우.
        """
        with translate_errors(f"restocking {item!r}"):
            stmt = (
                update(Item)
                .where(Item.id == item.id, Item.quantity <= MAX_QUANTITY - qty)
                .values(quantity=Item.quantity + qty, updated_at=now)
                .execution_options(synchronize_session=False)
            )
            result = self.session.execute(stmt)
            if result.rowcount < 1:
                exists = self.session.scalar(select(Item.id).where(Item.id == item.id))
                raise NotFound() if exists is None else BadRequest()
            self.session.refresh(item)
        return item
