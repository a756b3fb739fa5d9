from datetime import datetime

from pydantic import EmailStr

from tutelage_api.shared.schemas import BaseSchema


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str


class UserResponse(BaseSchema):
    id: int
    email: str
    name: str
    role: str
    is_active: bool
    last_login_at: datetime | None
    created_at: datetime


class LoginResponse(BaseSchema):
    """Login response with user and token."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
