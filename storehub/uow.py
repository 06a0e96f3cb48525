"""UnitOfWork 패턴 모듈.

SqlAlchemy를 이용한 기본 구현체를 제공합니다.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Type

from sqlalchemy.orm import Session

from storehub.core import AbstractRepository, AbstractUnitOfWork, ReposMap
from storehub.domain.models import Account, Item, Store
from storehub.orm import SessionMaker
from storehub.repo import (
    SqlAlchemyAccountRepository,
    SqlAlchemyItemRepository,
    SqlAlchemyStoreRepository,
    translate_errors,
)

RepoMakerFunc = Callable[[Session], AbstractRepository]
RepoMakerDict = dict[Type[Any], RepoMakerFunc]

DEFAULT_REPO_MAKER: RepoMakerDict = {
    Account: SqlAlchemyAccountRepository,
    Store: SqlAlchemyStoreRepository,
    Item: SqlAlchemyItemRepository,
}


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """``SqlAlchemy`` ORM을 이용한 UnitOfWork 패턴 구현입니다."""

    # pylint: disable=super-init-not-called
    def __init__(
        self,
        get_session: SessionMaker,
        repo_maker: Optional[RepoMakerDict] = None,
    ) -> None:
        """``SqlAlchemy`` 기반의 UoW를 초기화합니다."""
        self.get_session = get_session
        self.repo_maker = repo_maker or DEFAULT_REPO_MAKER
        self.repos: ReposMap = {}
        self.committed = False
        self.session: Optional[Session] = None

    def __repr__(self):
        return f"SqlAlchemyUnitOfWork[{list(self.repo_maker)}]"

    def __enter__(self) -> AbstractUnitOfWork:
        """``with`` 블록에 진입했을 때 필요한 작업을 수행합니다.

        세션을 할당하고, 엔티티별 레포지터리를 초기화합니다.
        """
        super().__enter__()
        self.committed = False
        self.session = self.get_session()
        self.repos = {
            entity_class: make_repo(self.session)
            for entity_class, make_repo in self.repo_maker.items()
        }
        return self

    def __exit__(self, *args: Any) -> None:
        """``with`` 블록을 빠져나갈 때 필요한 작업을 수행합니다.

        반환된 엔티티를 세션에서 분리한 뒤 롤백하고 세션을 close합니다.
        """
        try:
            if self.session:
                self.session.expunge_all()
            super().__exit__(*args)
        finally:
            if self.session:
                self.session.close()
                self.session = None

    def _commit(self) -> None:
        """세션을 커밋합니다."""
        if self.session:
            with translate_errors("committing"):
                self.session.commit()
        self.committed = True

    def rollback(self) -> None:
        """세션을 롤백합니다."""
        if self.session:
            self.session.rollback()
