# pylint: disable=redefined-outer-name
"""pytest 에서 사용될 전역 Fixture들을 정의합니다."""
from __future__ import annotations

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from storehub.api import create_app
from storehub.config import Config
from storehub.hasher import Bcrypt
from storehub.orm import SessionMaker, init_db
from storehub.test.unit import FakeUnitOfWork
from storehub.tokens import TokenService
from storehub.uow import SqlAlchemyUnitOfWork

TEST_ENV = {
    "DATABASE_URL": "sqlite://",
    "HASH_COST": "4",
    "JWT_SECRET": "test-secret",
    "DB_CONNECT_RETRIES": "1",
}


@pytest.fixture
def config() -> Config:
    """메모리 SQLite 를 사용하는 테스트용 설정."""
    return Config.from_env(TEST_ENV)


@pytest.fixture
def get_session(config: Config) -> SessionMaker:
    """:class:`.Session` 팩토리 픽스쳐 입니다.

    호출시마다 새 메모리 DB 를 만들기 때문에 테스트끼리 데이터를 공유하지 않습니다.
    """
    return init_db(config)


@pytest.fixture
def session(get_session: SessionMaker) -> Generator[Session, None, None]:
    session = get_session()
    yield session
    session.close()


@pytest.fixture
def sql_uow(get_session: SessionMaker) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(get_session)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def hasher() -> Bcrypt:
    return Bcrypt(cost=4)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService("test-secret")


@pytest.fixture
def app(config: Config, get_session: SessionMaker) -> FastAPI:
    return create_app(config, get_session)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as client:
        yield client
