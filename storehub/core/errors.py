"""StoreHub 에러 분류 체계.

모든 에러는 HTTP 상태 코드와 외부에 노출해도 안전한 고정 메시지를 가집니다.
"""


class StoreHubError(Exception):
    """``StoreHub`` 와 관련된 모든 에러의 기본 클래스."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str = ""):
        message = message or self.default_message
        super().__init__(message)
        self.message = message


class StoreHubInitError(StoreHubError):
    """앱 초기화(설정 로드, DB 연결) 실패 에러."""

    ...


class BadRequest(StoreHubError):
    """요청 데이터가 스키마 검증을 통과하지 못했을 때 발생합니다."""

    status_code = 400
    default_message = "Bad Request"


class Unauthorized(StoreHubError):
    """토큰이 없거나 유효하지 않거나, 비밀번호가 틀렸을 때 발생합니다."""

    status_code = 401
    default_message = "Unauthorized"


class NotFound(StoreHubError):
    """엔티티를 찾을 수 없을 때 발생합니다."""

    status_code = 404
    default_message = "Not Found"


class Conflict(StoreHubError):
    """유일성 제약(이메일, 스토어 이름 등)을 위반했을 때 발생합니다."""

    status_code = 409
    default_message = "Conflict"


class UnprocessableEntity(StoreHubError):
    """요청 본문을 해석(JSON 디코딩)할 수 없을 때 발생합니다."""

    status_code = 422
    default_message = "Unprocessable Entity"


class InternalServerError(StoreHubError):
    """영구 저장소, 해싱, 서명 실패 등 내부 오류."""

    status_code = 500
    default_message = "Internal Server Error"
