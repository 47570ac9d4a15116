"""Services domain - the salon's priced, timed offerings"""

from .router import router

__all__ = ["router"]
