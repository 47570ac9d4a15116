"""Clients domain - salon customers, search, bulk import and booking history"""

from .router import router

__all__ = ["router"]
