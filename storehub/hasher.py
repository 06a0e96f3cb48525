"""비밀번호 해싱 모듈."""

import bcrypt

from storehub.core.errors import InternalServerError
from storehub.logging import get_logger

logger = get_logger("storehub.hasher")


class Bcrypt:
    """``bcrypt`` 를 이용한 단방향 솔트 해시.

    Args:
        cost: bcrypt cost factor (log2 라운드 수).
    """

    def __init__(self, cost: int = 10):
        self.cost = cost

    def hash_password(self, password: str) -> str:
        try:
            hashed = bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.cost))
        except (ValueError, TypeError) as e:
            logger.error("failed to hash password: %s", e)
            raise InternalServerError() from e
        return hashed.decode()

    def compare_password_hash(self, password: str, hashed: str) -> bool:
        """비밀번호가 해시와 일치하면 참을 리턴합니다.

        해시 형식이 잘못된 경우에도 ``False`` 를 리턴하지만, 비밀번호 불일치와
        구분할 수 있도록 경고 로그를 남깁니다.
        """
        try:
            return bcrypt.checkpw(password.encode(), hashed.encode())
        except ValueError as e:
            logger.warning("malformed password hash: %s", e)
            return False
