from __future__ import annotations

import abc
from contextlib import AbstractContextManager, ContextDecorator
from typing import Any, Generic, Literal, Optional, Protocol, Type, TypeVar

from storehub.core.errors import NotFound, StoreHubError


class Entity(Protocol):
    """Entity 프로토콜 명세."""

    id: Any  # PK 컬럼으로 id 라는 필드를 제공해야 합니다.


E = TypeVar("E", bound=Entity)


class AbstractRepository(Generic[E], abc.ABC, ContextDecorator):
    """Repository 패턴의 추상 인터페이스 입니다."""

    entity_class: Type[E]

    def __enter__(self) -> AbstractRepository[E]:
        """`module`:contextmanager`의 필수 인터페이스 구현."""
        return self

    def __exit__(
        self, typ: Any = None, value: Any = None, traceback: Any = None
    ) -> Literal[False]:
        self.close()
        return False

    def close(self) -> None:
        """레포지터리와 연결된 저장소 객체를 종료합니다."""
        return

    def add(self, item: E) -> E:
        """레포지터리에 :class:`E` 객체를 추가합니다."""
        self._add(item)
        return item

    @abc.abstractmethod
    def _add(self, item: E) -> None:
        raise NotImplementedError

    def find(self, id: Any = None, **kwargs: Any) -> Optional[E]:
        """주어진 id 또는 필드 조건에 해당하는 :class:`E` 객체를 조회합니다.

        못 찾을 경우 ``None`` 을 리턴합니다.
        """
        if not kwargs:
            return self._get(id)

        # find(by_field=value) 처럼 이름있는 파라메터에 `by_` 가 붙어있는 경우
        # _get_by_field 메소드를 호출하도록 라우팅 합니다.
        k, v = next((k, v) for k, v in kwargs.items())
        if k.startswith("by_"):
            return getattr(self, "_get_" + k)(v)

        return self._get(id, **kwargs)

    def get(self, id: Any = None, **kwargs: Any) -> E:
        """:meth:`find` 와 같지만 못 찾을 경우 :class:`NotFound` 예외를 발생시킵니다."""
        item = self.find(id, **kwargs)
        if item is None:
            raise NotFound()
        return item

    @abc.abstractmethod
    def _get(self, id: Any = None, **kwargs: Any) -> Optional[E]:
        """주어진 id 에 해당하는 :class:`E` 객체를 조회합니다.

        ``id`` 가 없으면 ``kwargs`` 를 필드 조건으로 사용합니다.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def all(self, **kwargs: Any) -> list[E]:
        """조건(``kwargs``)에 맞는 모든 엔티티 리스트를 id 순으로 조회합니다."""
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, item: E) -> None:
        """레포지터리에서 :class:`E` 객체를 삭제합니다."""
        raise NotImplementedError

    @abc.abstractmethod
    def clear(self) -> None:
        """레포지터리 내의 모든 엔티티 데이터를 지웁니다."""
        raise NotImplementedError


ReposMap = dict[Type[Any], AbstractRepository]


class AbstractUnitOfWork(AbstractContextManager["AbstractUnitOfWork"]):
    """UnitOfWork 패턴의 추상 인터페이스입니다.

    UnitOfWork(UoW)는 영구 저장소의 유일한 진입점이며, 하나의 유스케이스 실행을
    하나의 세션과 하나의 커밋으로 묶습니다.
    """

    repos: ReposMap
    committed: bool = False

    def __enter__(self) -> AbstractUnitOfWork:
        """``with`` 블록에 진입했을때 실행되는 메소드입니다."""
        return self

    def __exit__(self, *args: Any) -> None:
        """``with`` 블록에서 빠져나갈 때 실행되는 메소드입니다."""
        self.rollback()  # commit() 안되었을때 변경을 롤백합니다.
        # (이미 커밋 되었을 경우 rollback은 아무 효과도 없음)

    def __getitem__(self, key: Type[E]) -> AbstractRepository[E]:
        if key not in self.repos:
            raise StoreHubError("repository not found for: %r" % key)
        return self.repos[key]

    def commit(self) -> None:
        """세션을 커밋합니다."""
        self._commit()

    @abc.abstractmethod
    def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self) -> None:
        """세션을 롤백합니다."""
        raise NotImplementedError
