from datetime import datetime
from zoneinfo import ZoneInfo

from ...config import CLINIC_TIMEZONE


def clinic_now() -> datetime:
    """Current wall-clock time in the clinic's timezone, without tzinfo"""
    return datetime.now(ZoneInfo(CLINIC_TIMEZONE)).replace(tzinfo=None)


def get_now() -> datetime:
    """FastAPI dependency for the current instant (override in tests)"""
    return clinic_now()
