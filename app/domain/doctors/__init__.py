"""Doctors domain - directory of doctors patients can book with"""

from .router import router

__all__ = ["router"]
