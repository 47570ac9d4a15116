"""User router - organization admins managing their own users"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import TenantContext, get_tenant_context, require_admin
from ...database import get_db
from ...i18n import get_language, translate
from .schemas import UserCreate, UserResponse, UserUpdate
from .service import UserService

router = APIRouter(prefix="/users", tags=["Users"], dependencies=[Depends(require_admin)])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


@router.get("", response_model=list[UserResponse])
async def get_users(
    context: TenantContext = Depends(get_tenant_context),
    service: UserService = Depends(get_user_service),
):
    """Users of the admin's organization, newest first"""
    return [UserResponse.from_model(u) for u in service.get_users(context)]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    context: TenantContext = Depends(get_tenant_context),
    service: UserService = Depends(get_user_service),
):
    return UserResponse.from_model(service.get_user(user_id, context))


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    context: TenantContext = Depends(get_tenant_context),
    service: UserService = Depends(get_user_service),
):
    return UserResponse.from_model(service.create_user(data, context))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: UserUpdate,
    context: TenantContext = Depends(get_tenant_context),
    service: UserService = Depends(get_user_service),
):
    return UserResponse.from_model(service.update_user(user_id, data, context))


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    context: TenantContext = Depends(get_tenant_context),
    service: UserService = Depends(get_user_service),
    language: str = Depends(get_language),
):
    service.delete_user(user_id, context)
    return {"message": translate("success.userDeleted", language)}
