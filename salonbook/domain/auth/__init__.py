"""Auth domain - cookie sessions"""

from .router import router

__all__ = ["router"]
