"""프로필 라우터 — 본인 프로필 조회/수정.

Profile Router — Read and update the authenticated user's own profile.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.user import ProfileUpdate, UserProfileResponse
from app.services.user_service import user_service

router: APIRouter = APIRouter()


@router.get("/users/me", response_model=ApiResponse[UserProfileResponse])
async def get_profile(
    current_user: Annotated[User, Depends(require_user)],
) -> ApiResponse[UserProfileResponse]:
    """내 프로필 조회."""
    return ApiResponse(
        data=user_service.to_profile(current_user),
        message="Profile retrieved successfully",
    )


@router.put("/users/me", response_model=ApiResponse[UserProfileResponse])
async def update_profile(
    data: ProfileUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_user)],
) -> ApiResponse[UserProfileResponse]:
    """내 프로필 수정 — 비밀번호 변경 시 현재 비밀번호 필요.

    Update my profile. Changing the password requires currentPassword.
    """
    result: UserProfileResponse = await user_service.update_profile(db, current_user, data)
    await db.commit()
    return ApiResponse(data=result, message="Profile updated successfully")
