"""Appointments domain - booking and listing a patient's appointments"""

from .router import router

__all__ = ["router"]
