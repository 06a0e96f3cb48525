"""도메인 모델."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from storehub.core.errors import BadRequest

MAX_QUANTITY = 2**31 - 1
"""재고 수량의 최대값. ``items.quantity`` 컬럼(32비트 정수)의 범위와 같습니다."""


@dataclass
class Account:
    """가입한 사용자 계정입니다.

    ``password`` 에는 항상 해시된 값이 저장됩니다. 외부로 내보낼 때는
    :meth:`public` 으로 비밀번호를 지운 사본을 사용합니다.
    """

    name: str
    email: str
    password: str
    address: str = ""
    id: Optional[int] = None  # pylint: disable=invalid-name
    """매핑된 DB가 할당한 고유 ID. 세션 commit이 될 경우에만 값이 부여됩니다."""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def public(self) -> Account:
        """비밀번호를 비운 사본을 리턴합니다."""
        return Account(
            name=self.name,
            email=self.email,
            password="",
            address=self.address,
            id=self.id,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


@dataclass
class Store:
    """계정(:class:`Account`)이 소유한 스토어."""

    owner_id: int
    name: str
    description: str = ""
    id: Optional[int] = None  # pylint: disable=invalid-name
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Item:
    """스토어(:class:`Store`)의 재고 품목."""

    store_id: int
    name: str
    description: str = ""
    quantity: int = 0
    id: Optional[int] = None  # pylint: disable=invalid-name
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def restock(self, qty: int) -> None:
        """재고 수량을 ``qty`` 만큼 늘립니다.

        Raises:
            BadRequest: 합계가 :data:`MAX_QUANTITY` 를 넘는 경우.
        """
        if self.quantity > MAX_QUANTITY - qty:
            raise BadRequest()
        self.quantity += qty


@dataclass
class Claims:
    """서명된 토큰에 담기는 호출자 정보입니다. DB에 저장되지 않습니다.

    계정 토큰은 ``subject_id == user_id == 계정 id`` 이고 ``store_id`` 가 없습니다.
    스토어 토큰은 ``subject_id == store_id`` 이고 ``user_id`` 는 스토어 소유자입니다.
    """

    subject_id: int
    email: str = ""
    name: str = ""
    user_id: Optional[int] = None
    store_id: Optional[int] = None
    issued_at: Optional[int] = None
    """발급 시각 (UNIX timestamp)."""
    expires_at: Optional[int] = None
    """만료 시각 (UNIX timestamp)."""

    @property
    def is_store_scoped(self) -> bool:
        return self.store_id is not None
