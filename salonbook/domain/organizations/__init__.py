"""Organizations domain - tenants and their booking settings"""

from .router import router

__all__ = ["router"]
