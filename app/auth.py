import base64
import json
import logging
import time
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, hmac
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.orm import Session

from .config import SUPABASE_JWT_AUDIENCE, SUPABASE_JWT_SECRET
from .database import get_db
from .models import Profile

logger = logging.getLogger(__name__)

security = HTTPBearer()


class AuthUser(BaseModel):
    """Identity taken from a verified access token"""

    id: str
    email: Optional[str] = None
    access_token: str


def _b64url_decode(segment: str) -> bytes:
    padding = 4 - len(segment) % 4
    return base64.urlsafe_b64decode(segment + ("=" * padding if padding != 4 else ""))


def verify_supabase_token(token: str, secret: Optional[str] = None) -> dict:
    """
    Verify a Supabase access token (HS256 JWT) and return its claims.
    Checks the HMAC signature, expiry, audience and subject.
    """
    secret = secret or SUPABASE_JWT_SECRET

    parts = token.split(".")
    if len(parts) != 3:
        logger.error("❌ Invalid token format: wrong number of parts")
        raise HTTPException(status_code=401, detail="Invalid token format")

    header_b64, payload_b64, signature_b64 = parts

    try:
        header = json.loads(_b64url_decode(header_b64))
    except Exception as e:
        logger.error(f"❌ Failed to decode token header: {str(e)}")
        raise HTTPException(status_code=401, detail="Invalid token header") from e

    if header.get("alg") != "HS256":
        logger.error(f"❌ Invalid token algorithm: {header.get('alg')}")
        raise HTTPException(status_code=401, detail="Invalid token algorithm")

    try:
        signature = _b64url_decode(signature_b64)
    except Exception as e:
        logger.error(f"❌ Failed to decode token signature: {str(e)}")
        raise HTTPException(status_code=401, detail="Invalid token signature format") from e

    mac = hmac.HMAC(secret.encode(), hashes.SHA256())
    mac.update(f"{header_b64}.{payload_b64}".encode())
    try:
        mac.verify(signature)
    except InvalidSignature as e:
        logger.error("❌ Token signature verification failed")
        raise HTTPException(status_code=401, detail="Invalid token signature") from e

    try:
        claims = json.loads(_b64url_decode(payload_b64))
    except Exception as e:
        logger.error(f"❌ Failed to decode token payload: {str(e)}")
        raise HTTPException(status_code=401, detail="Invalid token payload") from e

    aud = claims.get("aud")
    audiences = aud if isinstance(aud, list) else [aud]
    if SUPABASE_JWT_AUDIENCE not in audiences:
        logger.error("❌ Token audience mismatch")
        raise HTTPException(status_code=401, detail="Invalid token audience")

    exp = claims.get("exp", 0)
    if exp < time.time():
        raise HTTPException(
            status_code=401,
            detail="Token has expired. Please refresh your session.",
            headers={"X-Token-Expired": "true"},
        )

    if not claims.get("sub"):
        logger.error(f"❌ Token missing subject. Available claims: {list(claims.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    return claims


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AuthUser:
    """Get the authenticated user from the bearer token"""
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    token = credentials.credentials
    claims = verify_supabase_token(token)
    logger.debug(f"✅ User authenticated: {claims['sub']}")
    return AuthUser(id=claims["sub"], email=claims.get("email"), access_token=token)


async def get_current_profile(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Profile:
    """
    Get the authenticated user's profile.
    Use this dependency for routes that publish content under the user's name.
    """
    profile = db.query(Profile).filter(Profile.user_id == user.id).first()
    if not profile:
        logger.warning(f"⚠️ User {user.id} has no profile")
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile
