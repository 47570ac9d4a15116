"""Users domain - login accounts, per organization and across organizations"""

from .router import router
from .superadmin_router import router as superadmin_router

__all__ = ["router", "superadmin_router"]
