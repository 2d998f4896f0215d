"""
JWT token management utilities.

Handles access token creation and validation for logged-in users.
"""

import secrets
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

import jwt

from sevaconnect.core.exceptions import ErrorCode, TokenError

logger = logging.getLogger(__name__)


class JWTManager:
    """
    JWT token manager for authentication.

    Tokens carry the user id and role; they are opaque to the core and only
    decoded by the outer request layer.
    """

    DEFAULT_ALGORITHM = "HS256"
    DEFAULT_ACCESS_TOKEN_EXPIRE_DAYS = 7

    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        access_token_expire_days: int = DEFAULT_ACCESS_TOKEN_EXPIRE_DAYS,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_days = access_token_expire_days

    def create_access_token(
        self,
        user_id: str,
        role: Optional[str] = None,
        additional_claims: Optional[Dict[str, Any]] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create JWT access token.

        Args:
            user_id: User identifier
            role: User role claim
            additional_claims: Additional claims to include
            expires_delta: Custom expiration time

        Returns:
            Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(days=self.access_token_expire_days))

        payload = {
            "id": str(user_id),
            "role": role,
            "token_type": "access",
            "iat": now,
            "exp": expire,
            "jti": secrets.token_hex(16),
        }

        if additional_claims:
            payload.update(additional_claims)

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token created for user {user_id}")
        return token

    def decode_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Raises:
            TokenError: If the token is expired or invalid
        """
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise TokenError("Token has expired", ErrorCode.TOKEN_EXPIRED)
        except jwt.InvalidTokenError as e:
            raise TokenError(f"Invalid token: {e}")
