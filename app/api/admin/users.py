"""관리자 사용자 라우터 — 사용자 CRUD 및 활성화 엔드포인트.

Admin User Router — CRUD and activation endpoints for user management.
Every route requires ROLE_ADMIN.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.user import UserActivate, UserAdminResponse, UserCreate, UserUpdate
from app.services.user_service import user_service

router: APIRouter = APIRouter()


@router.get("/users", response_model=ApiResponse[list[UserAdminResponse]])
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    is_active: Annotated[bool | None, Query(alias="isActive", description="활성 상태 필터")] = None,
) -> ApiResponse[list[UserAdminResponse]]:
    """사용자 목록을 조회합니다 (활성 상태 필터 선택)."""
    users: list[UserAdminResponse] = await user_service.list_users(db, is_active)
    return ApiResponse(data=users, message="Users retrieved successfully")


@router.get("/users/{user_id}", response_model=ApiResponse[UserAdminResponse])
async def get_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ApiResponse[UserAdminResponse]:
    """사용자 상세 정보를 조회합니다."""
    user: User = await user_service.get_user(db, user_id)
    return ApiResponse(data=user_service.to_admin(user), message="User retrieved successfully")


@router.post("/user", response_model=ApiResponse[UserAdminResponse], status_code=201)
async def create_user(
    data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ApiResponse[UserAdminResponse]:
    """새 사용자를 생성합니다 (역할 지정 가능)."""
    result: UserAdminResponse = await user_service.admin_create_user(db, data)
    await db.commit()
    return ApiResponse(data=result, message="User created successfully")


@router.put("/user/activate/{user_id}", response_model=ApiResponse[UserAdminResponse])
async def activate_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    data: Annotated[UserActivate | None, Body()] = None,
) -> ApiResponse[UserAdminResponse]:
    """사용자 활성/비활성 상태를 설정하거나 토글합니다.

    Set the user's active flag from {"isActive": bool}, or toggle it when
    the body is empty.
    """
    result: UserAdminResponse = await user_service.set_active(db, user_id, data, current_user)
    await db.commit()
    return ApiResponse(data=result, message="User updated successfully")


@router.put("/user/{user_id}", response_model=ApiResponse[UserAdminResponse])
async def update_user(
    user_id: int,
    data: UserUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> ApiResponse[UserAdminResponse]:
    """사용자 정보를 수정합니다 (부분 업데이트)."""
    result: UserAdminResponse = await user_service.admin_update_user(db, user_id, data, current_user)
    await db.commit()
    return ApiResponse(data=result, message="User updated successfully")


@router.delete("/user/{user_id}", status_code=204)
async def delete_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> None:
    """사용자를 삭제합니다 — 작성한 게시글도 함께 삭제."""
    await user_service.delete_user(db, user_id, current_user)
    await db.commit()
