"""
Admin authentication API.

Sign-in sets the ``auth_token`` cookie and also returns the token for
clients that prefer an ``Authorization: Bearer`` header.
"""
from fastapi import APIRouter, Depends, Response

from suryaghar.api.deps import AUTH_COOKIE, get_app_settings, get_session_context, require_admin
from suryaghar.core.config import Settings
from suryaghar.core.exceptions import UnauthorizedException
from suryaghar.core.response import DictResponse, success_response
from suryaghar.core.session import SessionContext
from suryaghar.models import LoginRequest, ProfileUpdate, RegisterRequest, SendOtpRequest
from suryaghar.services.auth import Identity, Session

router = APIRouter()


def _set_cookie(response: Response, session: Session, settings: Settings) -> None:
    response.set_cookie(
        AUTH_COOKIE,
        session.access_token,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=not settings.is_development,
    )


@router.post("/login", summary="Sign in with email and password", response_model=DictResponse)
async def login(
    data: LoginRequest,
    response: Response,
    context: SessionContext = Depends(get_session_context),
    settings: Settings = Depends(get_app_settings),
):
    session = await context.login(data.email, data.password)
    _set_cookie(response, session, settings)
    return success_response(data=session.to_dict(), message="Signed in")


@router.post("/logout", summary="Sign out", response_model=DictResponse)
async def logout(response: Response, context: SessionContext = Depends(get_session_context)):
    await context.logout()
    response.delete_cookie(AUTH_COOKIE)
    return success_response(message="Signed out")


@router.get("/session", summary="Current session", response_model=DictResponse)
async def get_session(context: SessionContext = Depends(get_session_context)):
    """Anonymous callers get ``authenticated: false`` rather than an error."""
    return success_response(data={
        "state": context.state.value,
        "authenticated": context.is_authenticated,
        "user": context.user.to_dict() if context.user else None,
    })


@router.get("/me", summary="Signed-in admin", response_model=DictResponse)
async def get_me(user: Identity = Depends(require_admin)):
    return success_response(data=user.to_dict())


@router.post("/register/send-otp", summary="Send a registration code", response_model=DictResponse)
async def send_otp(data: SendOtpRequest, context: SessionContext = Depends(get_session_context)):
    await context.provider.send_otp(data.email)
    return success_response(message="Verification code sent")


@router.post("/register/verify", summary="Verify the code and set credentials", response_model=DictResponse)
async def verify(
    data: RegisterRequest,
    response: Response,
    context: SessionContext = Depends(get_session_context),
    settings: Settings = Depends(get_app_settings),
):
    """
    Confirms the one-time code, then stores the chosen username and
    password on the new identity. The caller ends up signed in.
    """
    session = await context.provider.verify_otp(data.email, data.code)
    user = await context.provider.update_user(
        session.access_token, username=data.username, password=data.password
    )
    session = Session(session.access_token, user, session.expires_at)
    _set_cookie(response, session, settings)
    return success_response(data=session.to_dict(), message="Registration complete")


@router.patch("/profile", summary="Update username, avatar or password", response_model=DictResponse)
async def update_profile(
    data: ProfileUpdate,
    context: SessionContext = Depends(get_session_context),
):
    if not context.is_authenticated:
        raise UnauthorizedException("Please sign in to continue")
    user = await context.provider.update_user(context.token, **data.model_dump(exclude_unset=True))
    return success_response(data=user.to_dict(), message="Profile updated")
