import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tutelage_api.core.auth.jwt import create_access_token
from tutelage_api.core.auth.models import User, UserRole
from tutelage_api.core.auth.password import hash_password, verify_password
from tutelage_api.core.exceptions import AuthenticationError, DuplicateError

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_user_by_id(self, user_id: int) -> User | None:
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_user(
        self,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create a new dashboard account."""
        if await self.get_user_by_email(email):
            raise DuplicateError("User", "email", email)

        user = User(
            email=email.lower(),
            password_hash=hash_password(password),
            name=name,
            role=role.value,
            is_active=True,
        )
        self.session.add(user)
        await self.session.flush()
        logger.info("Created user id=%s role=%s", user.id, user.role)
        return user

    async def authenticate(self, email: str, password: str) -> tuple[User, str]:
        """
        Check credentials and issue an access token.

        Returns:
            Tuple of (user, access_token)

        Raises:
            AuthenticationError: If credentials are invalid or the account is deactivated
        """
        user = await self.get_user_by_email(email)

        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            raise AuthenticationError("User account is deactivated")

        user.last_login_at = datetime.now(timezone.utc)
        await self.session.flush()

        return user, create_access_token(user.id, user.role)
