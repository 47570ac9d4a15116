"""Employees domain - staff members that bookings are assigned to"""

from .router import router

__all__ = ["router"]
