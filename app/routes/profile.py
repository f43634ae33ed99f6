import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth import AuthUser, get_current_user
from ..database import get_db
from ..models import Profile
from ..shared.validators import require_fields, sanitize_field, validate_username

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["Profile"])


class ProfileUpsert(BaseModel):
    fullName: Optional[str] = None
    username: Optional[str] = None
    website: Optional[str] = None
    avatarUrl: Optional[str] = None

    @field_validator("username")
    @classmethod
    def validate_username_field(cls, v: Optional[str]) -> Optional[str]:
        return validate_username(v)

    @field_validator("website", "avatarUrl")
    @classmethod
    def validate_url_field(cls, v: Optional[str]) -> Optional[str]:
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("Must be an http(s) URL")
        return v or None


class ProfileResponse(BaseModel):
    id: str
    userId: str
    fullName: Optional[str]
    username: str
    website: Optional[str]
    avatarUrl: Optional[str]


def to_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        userId=profile.user_id,
        fullName=profile.full_name,
        username=profile.username,
        website=profile.website,
        avatarUrl=profile.avatar_url,
    )


@router.get("")
def get_profile(
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get the current user's profile, or flag a first-time user"""
    profile = db.query(Profile).filter(Profile.user_id == current_user.id).first()
    if not profile:
        return {"isNewUser": True}
    return to_response(profile)


@router.post("", response_model=ProfileResponse)
def upsert_profile(
    data: ProfileUpsert,
    current_user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create the current user's profile or update it in place"""
    require_fields(data, "fullName", "username")

    taken = (
        db.query(Profile)
        .filter(Profile.username == data.username, Profile.user_id != current_user.id)
        .first()
    )
    if taken:
        raise HTTPException(status_code=409, detail="Username is already taken")

    full_name = sanitize_field(data.fullName, "Full name", max_length=255)

    profile = db.query(Profile).filter(Profile.user_id == current_user.id).first()
    if profile:
        logger.info(f"📝 Updating profile for {current_user.id}")
    else:
        logger.info(f"🆕 Creating profile for {current_user.id}")
        profile = Profile(user_id=current_user.id)
        db.add(profile)

    profile.full_name = full_name
    profile.username = data.username
    profile.website = data.website
    if data.avatarUrl is not None:
        profile.avatar_url = data.avatarUrl

    try:
        db.commit()
    except IntegrityError as e:
        # Username claimed by another user between the check and the commit
        db.rollback()
        logger.error(f"❌ Profile upsert conflict for {current_user.id}: {str(e)}")
        raise HTTPException(status_code=409, detail="Username is already taken") from e

    db.refresh(profile)
    return to_response(profile)
