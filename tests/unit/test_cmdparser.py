from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect

from storehub import command
from storehub.command import StoreHubCommand, StoreHubCommandParser
from storehub.config import Config


def make_parser(**env: str) -> StoreHubCommandParser:
    return StoreHubCommandParser(StoreHubCommand(Config.from_env(env)))


def test_no_args_prints_help(capsys: pytest.CaptureFixture):
    assert make_parser().parse_args([]) == 0
    assert "initdb" in capsys.readouterr().out


def test_info_hides_db_password(capsys: pytest.CaptureFixture):
    parser = make_parser(DATABASE_URL="postgresql://hub:pw@db/hub")
    assert parser.parse_args(["info"]) == 0

    out = capsys.readouterr().out
    assert "StoreHub Information" in out
    assert "hub:***@db/hub" in out
    assert ":pw@" not in out


def test_initdb_creates_tables(tmp_path: Path):
    url = f"sqlite:///{tmp_path / 'hub.db'}"
    assert make_parser(DATABASE_URL=url).parse_args(["initdb", "--drop"]) == 0

    tables = inspect(create_engine(url)).get_table_names()
    assert {"accounts", "stores", "items"} <= set(tables)


def test_run_starts_app_factory(monkeypatch: pytest.MonkeyPatch):
    calls = []
    monkeypatch.setattr(command.uvicorn, "run", lambda *a, **kw: calls.append((a, kw)))

    assert make_parser(PORT="8080").parse_args(["run", "--reload"]) == 0

    (args, kwargs), = calls
    assert args == ("storehub.api:create_app",)
    assert kwargs["factory"] is True
    assert kwargs["port"] == 8080
    assert kwargs["reload"] is True


def test_init_error_is_reported(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
):
    # prod 모드에서 JWT_SECRET 이 없으면 설정 로드에 실패합니다.
    monkeypatch.setenv("ENV", "prod")
    monkeypatch.delenv("JWT_SECRET", raising=False)

    assert StoreHubCommandParser(StoreHubCommand()).parse_args(["info"]) == 1
    assert "JWT_SECRET" in capsys.readouterr().err
