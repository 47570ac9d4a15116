"""Superadmin router - user management across every organization"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import TenantContext, require_superadmin
from ...database import get_db
from ...i18n import get_language, translate
from .router import get_user_service
from .schemas import SuperadminUserCreate, SuperadminUserUpdate, UserListResponse, UserResponse
from .service import UserService

router = APIRouter(prefix="/superadmin", tags=["Superadmin"])


@router.get("/users", response_model=UserListResponse)
async def get_all_users(
    organizationId: Optional[int] = Query(None, description="Only users of this organization"),
    page: Optional[int] = Query(1),
    limit: Optional[int] = Query(None),
    _: TenantContext = Depends(require_superadmin),
    service: UserService = Depends(get_user_service),
):
    result = service.list_all_users(organization_id=organizationId, page=page, limit=limit)
    return UserListResponse(
        users=[UserResponse.from_model(u) for u in result["users"]],
        pagination=result["pagination"],
    )


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_any_user(
    user_id: int,
    _: TenantContext = Depends(require_superadmin),
    service: UserService = Depends(get_user_service),
):
    return UserResponse.from_model(service.get_any_user(user_id))


@router.post("/users", response_model=UserResponse, status_code=201)
async def create_any_user(
    data: SuperadminUserCreate,
    context: TenantContext = Depends(require_superadmin),
    service: UserService = Depends(get_user_service),
):
    """Create a user in any organization, or another superadmin"""
    return UserResponse.from_model(service.create_any_user(data, context))


@router.put("/users/{user_id}", response_model=UserResponse)
async def update_any_user(
    user_id: int,
    data: SuperadminUserUpdate,
    context: TenantContext = Depends(require_superadmin),
    service: UserService = Depends(get_user_service),
):
    return UserResponse.from_model(service.update_any_user(user_id, data, context))


@router.delete("/users/{user_id}")
async def delete_any_user(
    user_id: int,
    context: TenantContext = Depends(require_superadmin),
    service: UserService = Depends(get_user_service),
    language: str = Depends(get_language),
):
    service.delete_any_user(user_id, context)
    return {"message": translate("success.userDeleted", language)}
