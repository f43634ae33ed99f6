"""Shared validation utilities"""

import html
import re
from datetime import date, datetime
from typing import Any, Optional

from fastapi import HTTPException


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_username(username: Optional[str]) -> Optional[str]:
    """Usernames are 3-30 characters of letters, digits, dots, dashes or underscores"""
    # Blank counts as missing; callers report it with require_fields
    if not username or not username.strip():
        return None

    username = username.strip()
    if not re.match(r"^[A-Za-z0-9._-]{3,30}$", username):
        raise ValueError(
            "Username must be 3-30 characters: letters, numbers, '.', '-' or '_'"
        )
    return username


def sanitize_text(value: Optional[str], max_length: int = 20000) -> Optional[str]:
    """
    Escape HTML special characters and strip control characters from user text.
    Returns None if input is None.

    Raises:
        ValueError: If the escaped text is longer than max_length
    """
    if value is None:
        return None

    value = html.escape(str(value).strip(), quote=True)
    value = re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]", "", value)

    # Limit applies to the escaped text, as stored
    if len(value) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")
    return value


def sanitize_field(value: Optional[str], field: str, max_length: int = 20000) -> Optional[str]:
    """sanitize_text for request fields; raises 400 when the stored text would be too long"""
    try:
        return sanitize_text(value, max_length=max_length)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"{field} is too long") from e


def parse_iso_date(value: str, field: str = "date") -> date:
    """
    Parse a calendar date from "YYYY-MM-DD" or a full ISO timestamp.

    Raises:
        HTTPException: 400 if the value is not a date
    """
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except (ValueError, AttributeError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid {field}: expected YYYY-MM-DD") from e


def require_fields(data: Any, *fields: str, detail: str = "Missing required fields") -> None:
    """Raise 400 when any of ``fields`` is missing or blank on ``data``"""
    missing = [f for f in fields if not getattr(data, f, None) or not str(getattr(data, f)).strip()]
    if missing:
        raise HTTPException(status_code=400, detail=detail)
