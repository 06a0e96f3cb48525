"""요청/응답 스키마 모듈입니다.

요청 스키마는 HTTP 본문 검증에, 응답 스키마는 도메인 엔티티 직렬화에 사용됩니다.
"""
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

from storehub.domain.models import MAX_QUANTITY

MAX_PASSWORD_LENGTH = 72
"""bcrypt 가 처리할 수 있는 최대 비밀번호 길이."""


class AccountSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_LENGTH)
    email: EmailStr
    address: str = Field(..., min_length=1, max_length=255)


class LoginSchema(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_LENGTH)


class StoreSchema(BaseModel):
    """스토어 생성/수정 스키마.

    이전 클라이언트 호환을 위해 ``nameStore`` 키도 이름으로 받습니다.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("name", "nameStore"),
    )
    description: str = ""


class ItemSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    quantity: int = Field(..., ge=0, le=MAX_QUANTITY)


class AccountRead(BaseModel):
    """읽기용 계정 스키마. ``password`` 는 항상 빈 문자열입니다."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    password: str = ""
    email: str
    address: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("password", mode="before")
    @classmethod
    def hide_password(cls, value: object) -> str:
        return ""


class StoreRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    name: str
    description: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    store_id: int
    name: str
    description: str
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
