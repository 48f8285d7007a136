"""Authentication service for passwords and JWT tokens."""

import re
from datetime import datetime, timedelta
from typing import Dict, Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from clipkeeper.config import settings
from clipkeeper.models.user import User

# Password hashing configuration (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthService:
    """Service for handling authentication and authorization."""

    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def is_strong_password(password: str) -> bool:
        """At least 8 characters with a digit and an uppercase letter."""
        return (
            len(password) >= 8
            and re.search(r"\d", password) is not None
            and re.search(r"[A-Z]", password) is not None
        )

    @staticmethod
    def create_access_token(data: Dict[str, Any]) -> str:
        """
        Create a JWT access token.

        Args:
            data: Data to encode in the token

        Returns:
            Encoded JWT token
        """
        to_encode = data.copy()
        expire = datetime.utcnow() + timedelta(
            minutes=settings.access_token_expire_minutes
        )
        to_encode.update({"exp": expire, "type": "access"})

        encoded_jwt = jwt.encode(
            to_encode, settings.secret_key, algorithm=settings.algorithm
        )
        return encoded_jwt

    @staticmethod
    def create_refresh_token(data: Dict[str, Any]) -> str:
        """
        Create a JWT refresh token.

        Args:
            data: Data to encode in the token

        Returns:
            Encoded JWT refresh token
        """
        to_encode = data.copy()
        expire = datetime.utcnow() + timedelta(days=settings.refresh_token_expire_days)
        to_encode.update({"exp": expire, "type": "refresh"})

        encoded_jwt = jwt.encode(
            to_encode, settings.secret_key, algorithm=settings.algorithm
        )
        return encoded_jwt

    @staticmethod
    def create_tokens_for_user(user: User) -> Dict[str, str]:
        """
        Create both access and refresh tokens for a user.

        Args:
            user: User object

        Returns:
            Dictionary with access_token and refresh_token
        """
        token_data = {"sub": str(user.id)}

        access_token = AuthService.create_access_token(token_data)
        refresh_token = AuthService.create_refresh_token(token_data)

        return {"access_token": access_token, "refresh_token": refresh_token}

    @staticmethod
    def decode_token(token: str, expected_type: str = "access") -> int:
        """
        Decode a token and return the user ID it was issued for.

        Args:
            token: Encoded JWT
            expected_type: "access" or "refresh"

        Returns:
            User ID

        Raises:
            ValueError: If the token is invalid, expired or of the wrong type
        """
        try:
            payload = jwt.decode(
                token, settings.secret_key, algorithms=[settings.algorithm]
            )
        except JWTError as e:
            raise ValueError("Invalid token") from e

        if payload.get("type") != expected_type:
            raise ValueError("Invalid token type")

        subject = payload.get("sub")
        if subject is None:
            raise ValueError("Token has no subject")

        try:
            return int(subject)
        except (TypeError, ValueError) as e:
            raise ValueError("Invalid token subject") from e
