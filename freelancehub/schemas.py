# freelancehub/schemas.py
"""
요청 본문 검증용 스키마.

역할(role)과 상태(status)는 닫힌 열거형으로 검증하며, 허용되지 않은 값은 변환하지 않고 거부합니다.
JSON 키는 기존 프론트엔드와 맞추기 위해 camelCase 를 그대로 사용합니다.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from freelancehub.domain import (
    UserRole, ProjectStatus, DEFAULT_ROLE, DEFAULT_STATUS,
    DEFAULT_COMPLETION_PERCENTAGE, MIN_COMPLETION_PERCENTAGE, MAX_COMPLETION_PERCENTAGE,
)


class _RequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=False)


def _reject_bool(value):
    # lax 모드에서는 true/false 가 1/0 으로 변환되므로 직접 막습니다. 숫자 문자열은 허용합니다.
    if isinstance(value, bool):
        raise ValueError("boolean is not a valid integer")
    return value


class LoginRequest(_RequestModel):
    email: EmailStr
    password: str = Field(min_length=1)


class SignupRequest(_RequestModel):
    email: EmailStr
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: UserRole = DEFAULT_ROLE


class ProjectCreateRequest(_RequestModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    clientId: int = Field(ge=1)
    status: ProjectStatus = DEFAULT_STATUS
    completionPercentage: int = Field(
        default=DEFAULT_COMPLETION_PERCENTAGE,
        ge=MIN_COMPLETION_PERCENTAGE, le=MAX_COMPLETION_PERCENTAGE,
    )
    notes: Optional[str] = None

    @field_validator("clientId", "completionPercentage", mode="before")
    @classmethod
    def _no_bool(cls, value):
        return _reject_bool(value)


class ProjectUpdateRequest(_RequestModel):
    """부분 수정. 실제로 전달된 필드만 반영합니다 (model_fields_set 참고)."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    status: Optional[ProjectStatus] = None
    completionPercentage: Optional[int] = Field(
        default=None, ge=MIN_COMPLETION_PERCENTAGE, le=MAX_COMPLETION_PERCENTAGE,
    )
    notes: Optional[str] = None

    @field_validator("name", "description", "status", "completionPercentage", mode="before")
    @classmethod
    def _reject_null(cls, value):
        # notes 를 제외한 필드는 null 로 지울 수 없습니다.
        if value is None:
            raise ValueError("field cannot be null")
        return value

    @field_validator("completionPercentage", mode="before")
    @classmethod
    def _no_bool(cls, value):
        return _reject_bool(value)


class DriveLinkRequest(_RequestModel):
    # 키 자체는 필수입니다. null 이나 빈 문자열을 보내야 링크가 지워집니다.
    driveLink: Optional[str]

    @field_validator("driveLink")
    @classmethod
    def _blank_to_none(cls, value):
        if value is not None and not value.strip():
            return None
        return value
