"""Auth router - login, logout and session endpoints"""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from ...auth import TenantContext, clear_session_cookie, get_auth_context, set_session_cookie
from ...config import TOKEN_COOKIE_NAME
from ...database import get_db
from ...i18n import get_language, translate
from ...models import Role
from .schemas import CurrentOrganization, LoginRequest, MeResponse, MessageResponse, SessionResponse
from .service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db)


@router.post("/login", response_model=MessageResponse)
async def login(
    data: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
    language: str = Depends(get_language),
):
    """Check credentials and set the session cookie"""
    token = service.login(data)
    set_session_cookie(response, token)
    return MessageResponse(message=translate("success.loggedIn", language))


@router.get("/logout", response_model=MessageResponse)
async def logout(response: Response, language: str = Depends(get_language)):
    clear_session_cookie(response)
    return MessageResponse(message=translate("success.loggedOut", language))


@router.get("/session", response_model=SessionResponse)
async def session(request: Request, service: AuthService = Depends(get_auth_service)):
    """Whether the caller holds a valid session; never fails"""
    return SessionResponse(authenticated=service.has_valid_session(request.cookies.get(TOKEN_COOKIE_NAME)))


@router.get("/me", response_model=MeResponse)
async def me(
    context: TenantContext = Depends(get_auth_context),
    service: AuthService = Depends(get_auth_service),
):
    """The signed-in user and their organization's calendar settings"""
    user = service.get_current_user(context)
    organization = user.organization
    return MeResponse(
        id=user.id,
        username=user.username,
        role=Role(user.role).value,
        organization=(
            CurrentOrganization(
                id=organization.id,
                name=organization.name,
                slug=organization.slug,
                timezone=organization.timezone,
                bookingInterval=organization.booking_interval,
                displayStartTime=organization.display_start_time,
                displayEndTime=organization.display_end_time,
            )
            if organization
            else None
        ),
    )
