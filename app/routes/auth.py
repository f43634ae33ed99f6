import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator

from ..auth import AuthUser, get_current_user
from ..rate_limiter import create_rate_limiter
from ..services.supabase_auth_service import (
    SupabaseAuthError,
    SupabaseAuthService,
    get_supabase_auth_service,
)
from ..shared.validators import validate_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

login_rate_limiter = create_rate_limiter(limit=10, window_seconds=300, key_prefix="login")
signup_rate_limiter = create_rate_limiter(limit=5, window_seconds=3600, key_prefix="signup")

GENERIC_AUTH_ERROR = "An unexpected error occurred. Please try again later."


class Credentials(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: str) -> str:
        return validate_email(v)


@router.post("/signup")
async def signup(
    data: Credentials,
    _: None = Depends(signup_rate_limiter),
    service: SupabaseAuthService = Depends(get_supabase_auth_service),
):
    """Create an email/password account"""
    try:
        return await service.sign_up(data.email, data.password)
    except SupabaseAuthError as e:
        logger.error(f"Signup error for {data.email}: {e.message}")
        if "password" in e.message.lower():
            raise HTTPException(
                status_code=400, detail="Invalid password. Please choose a stronger password."
            ) from e
        raise HTTPException(status_code=400, detail=GENERIC_AUTH_ERROR) from e


@router.post("/login")
async def login(
    data: Credentials,
    _: None = Depends(login_rate_limiter),
    service: SupabaseAuthService = Depends(get_supabase_auth_service),
):
    """Sign in and return the provider session (access_token, refresh_token, user)"""
    try:
        return await service.sign_in_with_password(data.email, data.password)
    except SupabaseAuthError as e:
        if "Invalid login credentials" in e.message:
            logger.info(f"🚫 Failed login for {data.email}")
            raise HTTPException(status_code=401, detail="Incorrect email or password.") from e
        raise HTTPException(status_code=400, detail=GENERIC_AUTH_ERROR) from e


@router.post("/signout")
async def signout(
    current_user: AuthUser = Depends(get_current_user),
    service: SupabaseAuthService = Depends(get_supabase_auth_service),
):
    """Revoke the caller's session"""
    try:
        await service.sign_out(current_user.access_token)
    except SupabaseAuthError as e:
        # Session already gone at the provider; the client drops its token either way
        logger.warning(f"⚠️ Sign-out for {current_user.id} failed at provider: {e.message}")
    logger.info(f"👋 User {current_user.id} signed out")
    return {"message": "Signed out"}
