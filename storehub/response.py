"""모든 유스케이스가 리턴하는 공통 결과(Result envelope) 모듈."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from storehub.core.errors import StoreHubError

T = TypeVar("T")

STATUS_OK = 200
STATUS_CREATED = 201


@dataclass
class Result(Generic[T]):
    """``{status, data | error}`` 형태의 유스케이스 결과.

    성공이면 ``data`` 에 도메인 엔티티(또는 그 리스트, 메세지 문자열)가,
    실패면 ``error`` 에 외부 노출용 고정 메세지가 담깁니다.
    """

    status: int
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, status: int, data: T) -> Result[T]:
        return cls(status=status, data=data)

    @classmethod
    def failure(cls, error: StoreHubError) -> Result[Any]:
        return cls(status=error.status_code, error=error.message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self, data: Any = None) -> dict[str, Any]:
        """JSON 응답 본문을 만듭니다. ``data`` 로 직렬화된 페이로드를 넘길 수 있습니다."""
        if not self.ok:
            return {"status": self.status, "error": self.error}
        return {"status": self.status, "data": self.data if data is None else data}
