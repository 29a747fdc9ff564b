"""
Service for account registration and login.

Passwords are hashed with bcrypt and the caller receives a signed access
token on success. Tokens are stateless, so logging out needs no server side
bookkeeping.
"""

from __future__ import annotations

from typing import Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from abroadly.core.database.entities import User
from abroadly.core.database.repositories import UserRepository
from abroadly.core.logging_config import get_logger
from abroadly.server.core.security import create_access_token, hash_password, verify_password

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6
MIN_FULL_NAME_LENGTH = 2


class AuthService:
    """Service for registering and authenticating accounts."""

    def __init__(self, session: AsyncSession):
        """Initialize auth service with database session."""
        self.users = UserRepository(session)

    async def register(
        self, full_name: Optional[str], email: Optional[str], password: Optional[str]
    ) -> Tuple[User, str]:
        """
        Register a new account.

        Args:
            full_name: Display name, at least two characters once trimmed
            email: Login e-mail, must not be taken
            password: Plain text password, at least six characters

        Returns:
            Tuple of (created user, access token)

        Raises:
            HTTPException: 400 on invalid input, 409 when the e-mail is taken
        """
        if not full_name or not email or not password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Full name, email and password are required",
            )
        if len(password) < MIN_PASSWORD_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Password must be at least 6 characters long",
            )
        if len(full_name.strip()) < MIN_FULL_NAME_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Full name must be at least 2 characters long",
            )

        if await self.users.get_by_email(email) is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists with this email")

        user = await self.users.create(User(full_name=full_name.strip(), email=email, password=hash_password(password)))
        logger.info(f"Registered user {user.id}")
        return user, create_access_token(user.id)

    async def login(self, email: Optional[str], password: Optional[str]) -> Tuple[User, str]:
        """
        Authenticate with e-mail and password.

        Raises:
            HTTPException: 400 when a field is missing, 401 on bad credentials
        """
        if not email or not password:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and password are required")

        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password):
            logger.info("Rejected login attempt")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

        logger.debug(f"User {user.id} logged in")
        return user, create_access_token(user.id)

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self.users.get_by_id(user_id)
