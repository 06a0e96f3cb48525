"""서명된 클레임 토큰(JWT) 발급/검증 모듈.

서버에는 세션 저장소가 없으며, 모든 인증 상태는 토큰 자체에 담깁니다.

인증 상태 전이::

    Anonymous --(login)--> AccountAuthenticated  (``token`` 쿠키)
              --(store lookup)--> StoreAuthenticated  (``Store-token`` 쿠키)
"""
from __future__ import annotations

import time
from datetime import timedelta
from typing import Any, Optional

from jose import jwt
from jose.exceptions import JWTError

from storehub.core.errors import InternalServerError, Unauthorized
from storehub.domain.models import Account, Claims, Store
from storehub.logging import get_logger

logger = get_logger("storehub.tokens")

DEFAULT_TTL = timedelta(hours=24)


def account_claims(account: Account) -> Claims:
    """로그인한 계정을 나타내는 클레임을 만듭니다."""
    if account.id is None:
        raise InternalServerError()
    return Claims(
        subject_id=account.id,
        user_id=account.id,
        email=account.email,
        name=account.name,
    )


def store_claims(store: Store) -> Claims:
    """``store`` 에 대한 아이템 작업을 허가하는 스토어 클레임을 만듭니다."""
    if store.id is None:
        raise InternalServerError()
    return Claims(
        subject_id=store.id,
        user_id=store.owner_id,
        store_id=store.id,
        name=store.name,
    )


class TokenService:
    """대칭키(HS256)로 서명된 클레임 토큰을 발급하고 검증합니다.

    서명키는 생성자로 주입되며 실행 중에 바뀌지 않습니다.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = DEFAULT_TTL):
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, claims: Claims, ttl: Optional[timedelta] = None) -> str:
        """``claims`` 에 발급/만료 시각을 찍고 서명된 토큰 문자열을 리턴합니다."""
        now = int(time.time())
        ttl = self.ttl if ttl is None else ttl
        claims.issued_at = now
        claims.expires_at = now + int(ttl.total_seconds())

        payload: dict[str, Any] = {
            "sub": str(claims.subject_id),
            "email": claims.email,
            "name": claims.name,
            "iat": claims.issued_at,
            "exp": claims.expires_at,
        }
        if claims.user_id is not None:
            payload["user_id"] = claims.user_id
        if claims.store_id is not None:
            payload["store_id"] = claims.store_id

        try:
            return jwt.encode(payload, self._secret, algorithm=self.algorithm)
        except JWTError as e:
            logger.error("failed to sign token: %s", e)
            raise InternalServerError() from e

    def verify(self, token: str) -> Claims:
        """토큰의 서명과 만료 시각을 검증하고 클레임을 리턴합니다.

        Raises:
            Unauthorized: 서명이 틀렸거나, 형식이 잘못되었거나, 만료된 토큰.
        """
        if not token:
            raise Unauthorized()

        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
            claims = Claims(
                subject_id=int(payload["sub"]),
                email=payload.get("email", ""),
                name=payload.get("name", ""),
                user_id=payload.get("user_id"),
                store_id=payload.get("store_id"),
                issued_at=payload["iat"],
                expires_at=payload["exp"],
            )
        except (JWTError, KeyError, TypeError, ValueError) as e:
            logger.info("rejected token: %s", e)
            raise Unauthorized() from e

        # 만료 시각과 같은 초에 도착한 토큰도 거부합니다 (ttl=0 토큰).
        if claims.expires_at <= int(time.time()):
            raise Unauthorized()

        return claims
