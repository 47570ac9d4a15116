"""Bookings domain - time slots linking an employee, a client and services"""

from .router import router

__all__ = ["router"]
