"""Articles domain - health articles with likes and threaded comments"""

from .router import router

__all__ = ["router"]
