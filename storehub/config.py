"""기본 환경 설정.

모든 설정은 프로세스 시작 시 한 번 OS 환경변수에서 읽습니다.
"""

from __future__ import annotations

import os
import secrets
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Mapping, Optional, Type

from sqlalchemy.pool import Pool, StaticPool

from storehub.core.errors import StoreHubInitError

MIN_HASH_COST, MAX_HASH_COST = 4, 31
"""bcrypt 가 허용하는 cost factor 범위."""


@dataclass
class Config:
    """StoreHub App 설정."""

    title: str = "StoreHub"
    env: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    """설정값을 읽을 환경변수 맵. 테스트에서는 임의의 dict 를 넘길 수 있습니다."""
    _jwt_secret: Optional[str] = field(default=None, repr=False)

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None) -> Config:
        """환경변수로부터 설정을 로드하고 검증합니다."""
        config = Config(env=dict(os.environ if env is None else env))
        config.validate()
        return config

    @property
    def mode(self) -> str:
        return self.env.get("ENV", "dev")

    def validate(self) -> None:
        """운영(prod) 모드에서 필수 설정이 빠졌는지 확인합니다."""
        if self.mode == "prod" and not self.env.get("JWT_SECRET"):
            raise StoreHubInitError("JWT_SECRET must be set in prod mode")

    def get_api_host(self) -> str:
        """Get API server's host address."""
        return self.env.get("HOST", "127.0.0.1")

    def get_api_port(self) -> int:
        """Get API server's host port."""
        return int(self.env.get("PORT", "5000"))

    def get_api_url(self) -> str:
        """Get API server's full url."""
        return f"http://{self.get_api_host()}:{self.get_api_port()}"

    def get_db_url(self) -> str:
        """SqlAlchemy 에서 사용 가능한 형식의 DB URL을 리턴합니다.

        ``DATABASE_URL`` 이 있으면 그대로 사용하고, 없으면 prod 모드에서는
        ``DB_*`` 환경변수로 PostgreSQL URL 을 만듭니다.
        """
        if self.env.get("DATABASE_URL"):
            return self.env["DATABASE_URL"]

        if self.mode == "prod":
            db_host = self.env.get("DB_HOST", "localhost")
            db_user = self.env.get("DB_USER", "postgres")
            db_pass = self.env.get("DB_PASS", "password")
            db_name = self.env.get("DB_NAME", db_user)
            return f"postgresql://{db_user}:{db_pass}@{db_host}/{db_name}"

        return "sqlite:///storehub.db"

    def get_db_connect_args(self) -> dict[str, Any]:
        """Get db connection arguments for SQLAlchemy's engine creation.

        Example:
            For SQLite dbs, it could be: ::

                {'check_same_thread': False}
        """
        if self.get_db_url().startswith("sqlite"):
            return {"check_same_thread": False}
        return {}

    def get_db_poolclass(self) -> Optional[Type[Pool]]:
        """Get db poolclass arguemnt for SQLAlchemy's engine creation.

        메모리 SQLite 는 커넥션마다 DB가 새로 생기므로 하나의 커넥션을 공유합니다.
        그 외에는 드라이버 기본 풀을 사용합니다.
        """
        if self.get_db_url() in ("sqlite://", "sqlite:///:memory:"):
            return StaticPool
        return None

    def get_db_connect_retries(self) -> int:
        """시작 시 DB 연결을 시도할 최대 횟수."""
        return int(self.env.get("DB_CONNECT_RETRIES", "5"))

    def get_hash_cost(self) -> int:
        """비밀번호 해싱(bcrypt) cost factor."""
        cost = int(self.env.get("HASH_COST", "10"))
        return min(max(cost, MIN_HASH_COST), MAX_HASH_COST)

    def get_jwt_secret(self) -> str:
        """토큰 서명용 대칭키.

        dev 모드에서 ``JWT_SECRET`` 이 없으면 프로세스마다 임의의 키를 한 번 생성합니다.
        """
        if not self._jwt_secret:
            self._jwt_secret = self.env.get("JWT_SECRET") or secrets.token_hex(32)
        return self._jwt_secret

    def get_token_ttl(self) -> timedelta:
        """발급 토큰의 유효 기간."""
        return timedelta(hours=float(self.env.get("TOKEN_TTL_HOURS", "24")))
