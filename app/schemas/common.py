"""공통 Pydantic 응답 스키마 정의.

Common Pydantic schema definitions.
Every endpoint answers with the same envelope:
{"success": bool, "data": ..., "message": str}.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """camelCase JSON 필드명을 사용하는 베이스 스키마.

    Base schema exposing camelCase JSON field names (createdAt, creatorId)
    while still accepting snake_case input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """표준 응답 엔벨로프.

    Standard response envelope shared by success and error responses.

    Attributes:
        success: 처리 성공 여부 (Whether the request succeeded)
        data: 응답 데이터 (Payload, null on error)
        message: 사람이 읽을 수 있는 메시지 (Human-readable message)
    """

    success: bool = True
    data: T | None = None
    message: str | None = None
