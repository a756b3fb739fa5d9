from tutelage_api.core.auth.models import User, UserRole
from tutelage_api.core.auth.service import AuthService
from tutelage_api.core.auth.jwt import create_access_token, decode_token
from tutelage_api.core.auth.dependencies import get_current_user, require_roles

__all__ = [
    "User",
    "UserRole",
    "AuthService",
    "create_access_token",
    "decode_token",
    "get_current_user",
    "require_roles",
]
