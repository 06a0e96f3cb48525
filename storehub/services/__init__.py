"""유스케이스(서비스) 레이어.

모든 유스케이스는 "조회 후 실행" 패턴을 따릅니다. 조회 실패는 타입이 있는
에러(:class:`NotFound` 등)로 즉시 중단되고, 영구 저장소 오류는
:class:`InternalServerError` 로 변환됩니다. 에러는 :func:`returns_result` 가
공통 결과(:class:`Result`)로 바꿔 리턴하며, 재시도는 하지 않습니다.
"""
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from storehub.core.errors import StoreHubError
from storehub.logging import get_logger
from storehub.response import Result

F = TypeVar("F", bound=Callable[..., Any])

logger = get_logger("storehub.services")


def returns_result(func: F = None, *, with_token: bool = False):  # type: ignore
    """:class:`StoreHubError` 를 실패 결과로 변환하는 데코레이터.

    ``with_token=True`` 이면 ``(Result, token)`` 튜플을 리턴하는 유스케이스로 보고
    실패시 ``(Result, None)`` 을 리턴합니다.
    """

    def _decorator(func: F) -> F:
        @wraps(func)
        def _wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except StoreHubError as e:
                logger.debug("%s failed: %s (%d)", func.__name__, e.message, e.status_code)
                result = Result.failure(e)
                return (result, None) if with_token else result

        return cast(F, _wrapper)

    if func is not None:
        return _decorator(func)
    return _decorator


from . import account, item, store  # noqa: E402
