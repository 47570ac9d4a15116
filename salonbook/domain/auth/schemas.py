"""Auth domain schemas"""

from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: str
    password: str


class MessageResponse(BaseModel):
    message: str


class SessionResponse(BaseModel):
    authenticated: bool


class CurrentOrganization(BaseModel):
    """Organization of the signed-in user with its calendar settings"""

    id: int
    name: str
    slug: str
    timezone: str
    bookingInterval: int
    displayStartTime: str
    displayEndTime: str


class MeResponse(BaseModel):
    id: int
    username: str
    role: str
    organization: Optional[CurrentOrganization] = None
