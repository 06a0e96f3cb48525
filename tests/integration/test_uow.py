from pathlib import Path

import pytest

from storehub.config import Config
from storehub.core import BadRequest, InternalServerError, NotFound
from storehub.domain.models import MAX_QUANTITY, Account, Item, Store
from storehub.orm import init_db
from storehub.repo import SqlAlchemyItemRepository
from storehub.uow import SqlAlchemyUnitOfWork
from storehub.utils import utcnow


def insert_store(uow: SqlAlchemyUnitOfWork) -> Store:
    with uow:
        account = uow[Account].add(Account(name="kim", email="kim@example.com", password="h"))
        store = uow[Store].add(Store(owner_id=account.id, name="S1"))
        uow.commit()
    return store


def test_uow_can_commit(sql_uow: SqlAlchemyUnitOfWork):
    store = insert_store(sql_uow)
    assert sql_uow.committed

    with sql_uow:
        assert sql_uow[Store].get(store.id).name == "S1"
        assert not sql_uow.committed


def test_uow_rolls_back_uncommitted_work(sql_uow: SqlAlchemyUnitOfWork):
    with sql_uow:
        sql_uow[Account].add(Account(name="kim", email="kim@example.com", password="h"))

    with sql_uow:
        assert sql_uow[Account].all() == []


def test_uow_rolls_back_on_error(sql_uow: SqlAlchemyUnitOfWork):
    with pytest.raises(NotFound):
        with sql_uow:
            sql_uow[Account].add(Account(name="kim", email="kim@example.com", password="h"))
            sql_uow[Account].get(12345)

    with sql_uow:
        assert sql_uow[Account].all() == []


def test_entities_are_readable_after_exit(sql_uow: SqlAlchemyUnitOfWork):
    store = insert_store(sql_uow)

    with sql_uow:
        loaded = sql_uow[Store].get(store.id)

    assert loaded.name == "S1"
    assert loaded.owner_id == store.owner_id


def test_increment_quantity_is_applied_in_sql(tmp_path: Path):
    # 커넥션을 공유하지 않도록 파일 DB 를 사용합니다.
    config = Config.from_env(
        {"DATABASE_URL": f"sqlite:///{tmp_path / 'hub.db'}", "JWT_SECRET": "x"}
    )
    get_session = init_db(config)
    uow = SqlAlchemyUnitOfWork(get_session)
    store = insert_store(uow)
    with uow:
        item = uow[Item].add(Item(store_id=store.id, name="Widget", quantity=3))
        uow.commit()

    # 두 요청이 같은 아이템을 읽은 뒤 각각 입고해도 모두 반영되어야 합니다.
    first, second = SqlAlchemyUnitOfWork(get_session), SqlAlchemyUnitOfWork(get_session)
    with first, second:
        a = first[Item].get(item.id)
        b = second[Item].get(item.id)
        repo_a, repo_b = first[Item], second[Item]
        assert isinstance(repo_a, SqlAlchemyItemRepository)
        assert isinstance(repo_b, SqlAlchemyItemRepository)
        repo_a.increment_quantity(a, 2, utcnow())
        first.commit()
        repo_b.increment_quantity(b, 4, utcnow())
        second.commit()

    with uow:
        assert uow[Item].get(item.id).quantity == 9


def test_increment_quantity_of_deleted_item(sql_uow: SqlAlchemyUnitOfWork):
    store = insert_store(sql_uow)
    with sql_uow:
        item = sql_uow[Item].add(Item(store_id=store.id, name="Widget", quantity=3))
        sql_uow.commit()
    with sql_uow:
        sql_uow[Item].delete(sql_uow[Item].get(item.id))
        sql_uow.commit()

    with sql_uow:
        repo = sql_uow[Item]
        assert isinstance(repo, SqlAlchemyItemRepository)
        with pytest.raises(NotFound):
            repo.increment_quantity(item, 1, utcnow())


def test_integrity_error_becomes_internal_error(sql_uow: SqlAlchemyUnitOfWork):
    with sql_uow:
        with pytest.raises(InternalServerError):
            sql_uow[Account].add(Account(name=None, email="x@example.com", password="h"))  # type: ignore


def test_restock_past_max_quantity_keeps_quantity(sql_uow: SqlAlchemyUnitOfWork):
    store = insert_store(sql_uow)
    with sql_uow:
        item = sql_uow[Item].add(Item(store_id=store.id, name="Widget", quantity=MAX_QUANTITY))
        sql_uow.commit()

    with sql_uow:
        repo = sql_uow[Item]
        assert isinstance(repo, SqlAlchemyItemRepository)
        with pytest.raises(BadRequest):
            repo.increment_quantity(repo.get(item.id), 1, utcnow())

    with sql_uow:
        assert sql_uow[Item].get(item.id).quantity == MAX_QUANTITY


def test_session_is_closed_when_rollback_fails(
    sql_uow: SqlAlchemyUnitOfWork, monkeypatch: pytest.MonkeyPatch
):
    closed = []

    def fail_rollback():
        raise RuntimeError("rollback failed")

    with pytest.raises(RuntimeError):
        with sql_uow:
            assert sql_uow.session is not None
            monkeypatch.setattr(sql_uow.session, "rollback", fail_rollback)
            monkeypatch.setattr(sql_uow.session, "close", lambda: closed.append(True))

    assert closed == [True]
    assert sql_uow.session is None
