"""ORM 어댑터 모듈"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Type, cast

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import clear_mappers as _clear_mappers
from sqlalchemy.orm import registry, sessionmaker
from sqlalchemy.orm.session import Session
from sqlalchemy.pool import Pool
from tenacity import Retrying, before_sleep_log, stop_after_attempt, wait_exponential

from storehub.config import Config
from storehub.core.errors import StoreHubInitError
from storehub.domain.models import Account, Item, Store
from storehub.logging import get_logger

SessionMaker = Callable[[], Session]
"""Session 팩토리 타입."""

logger = get_logger("storehub.orm")

metadata = MetaData()

accounts = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("password", String(255), nullable=False),
    Column("email", String(255), nullable=False, index=True),
    Column("address", String(255), nullable=False, default=""),
    Column("created_at", DateTime),
    Column("updated_at", DateTime, nullable=True),
    # SQLite 에서도 삭제된 행의 id 를 재사용하지 않습니다.
    sqlite_autoincrement=True,
)

stores = Table(
    "stores",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("owner_id", Integer, ForeignKey("accounts.id"), nullable=False, index=True),
    Column("name", String(255), nullable=False, index=True),
    Column("description", Text, nullable=False, default=""),
    Column("created_at", DateTime),
    Column("updated_at", DateTime, nullable=True),
    sqlite_autoincrement=True,
)

items = Table(
    "items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("store_id", Integer, ForeignKey("stores.id"), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("description", Text, nullable=False, default=""),
    Column("quantity", Integer, nullable=False, default=0),
    Column("created_at", DateTime),
    Column("updated_at", DateTime, nullable=True),
    sqlite_autoincrement=True,
)

mapper_registry = registry(metadata=metadata)


def start_mappers() -> MetaData:
    """도메인 객체들을 SqlAlchemy ORM 매퍼에 등록합니다.

    이미 매핑된 경우 아무 것도 하지 않습니다.
    """
    if not mapper_registry.mappers:
        mapper_registry.map_imperatively(Account, accounts)
        mapper_registry.map_imperatively(Store, stores)
        mapper_registry.map_imperatively(Item, items)

    return metadata


def clear_mappers() -> None:
    """ORM 매핑을 초기화 합니다."""
    _clear_mappers()


def init_engine(
    meta: MetaData,
    url: str,
    connect_args: Optional[dict[str, Any]] = None,
    poolclass: Optional[Type[Pool]] = None,
    show_log: bool = False,
    drop_all: bool = False,
    retries: int = 1,
) -> Engine:
    """ORM Engine을 초기화 하고 테이블을 생성합니다.

    DB 서버가 아직 뜨지 않았을 수 있으므로 최대 ``retries`` 번까지
    지수 백오프로 연결을 재시도합니다.
    """
    kwargs: dict[str, Any] = dict(connect_args=connect_args or {}, echo=show_log)
    if poolclass:
        kwargs["poolclass"] = poolclass
    engine = create_engine(url, **kwargs)

    wait_for_db(engine, retries)

    if drop_all:
        meta.drop_all(engine)

    meta.create_all(engine)

    return engine


def wait_for_db(engine: Engine, retries: int = 1) -> None:
    """``SELECT 1`` 이 성공할 때까지 기다립니다.

    Raises:
        StoreHubInitError: 재시도 횟수를 모두 소진한 경우.
    """
    retrying = Retrying(
        stop=stop_after_attempt(max(retries, 1)),
        wait=wait_exponential(multiplier=0.5, max=10),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    try:
        for attempt in retrying:
            with attempt:
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("database is not reachable: %s", engine.url)
        raise StoreHubInitError(f"cannot connect to database: {engine.url}") from e


def init_db(config: Config, drop_all: bool = False, show_log: bool = False) -> SessionMaker:
    """DB 엔진을 초기화 하고 :class:`.Session` 팩토리를 리턴합니다.

    엔진(커넥션 풀)은 이 팩토리를 통해 모든 레포지터리가 공유합니다.
    """
    engine = init_engine(
        start_mappers(),
        config.get_db_url(),
        connect_args=config.get_db_connect_args(),
        poolclass=config.get_db_poolclass(),
        show_log=show_log,
        drop_all=drop_all,
        retries=config.get_db_connect_retries(),
    )
    # 커밋 후에도 엔티티를 직렬화할 수 있도록 만료시키지 않습니다.
    return cast(SessionMaker, sessionmaker(engine, expire_on_commit=False))
