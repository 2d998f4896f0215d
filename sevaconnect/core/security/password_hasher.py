"""
Password hashing and verification utilities.

Provides salted password hashing using bcrypt with configurable rounds.
"""

import secrets
import string
import logging

import bcrypt

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    Handle password hashing and verification using bcrypt.

    Hashes are salted, so two hashes of the same password differ; compare
    credentials with :meth:`verify`, never by hash equality.
    """

    DEFAULT_ROUNDS = 12
    MIN_ROUNDS = 4
    MAX_ROUNDS = 31

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """
        Initialize password hasher.

        Args:
            rounds: Number of bcrypt rounds (4-31, default 12)

        Raises:
            ValueError: If rounds is outside valid range
        """
        if not (self.MIN_ROUNDS <= rounds <= self.MAX_ROUNDS):
            raise ValueError(
                f"Rounds must be between {self.MIN_ROUNDS} and {self.MAX_ROUNDS}, got {rounds}"
            )

        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash a password with salt.

        Raises:
            ValueError: If password is empty
            TypeError: If password is not a string
        """
        if not isinstance(password, str):
            raise TypeError("Password must be a string")

        if not password:
            raise ValueError("Password cannot be empty")

        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def verify(self, password: str, hashed_password: str) -> bool:
        """Return True if ``password`` matches ``hashed_password``."""
        if not password or not hashed_password:
            return False

        try:
            return bcrypt.checkpw(
                password.encode('utf-8'),
                hashed_password.encode('utf-8')
            )
        except ValueError as e:
            # Malformed or foreign hash format stored for this account
            logger.warning(f"Error verifying password: {e}")
            return False

    @classmethod
    def generate_initial_password(cls, length: int = 8) -> str:
        """
        Generate a random initial password for accounts created by an admin.

        Args:
            length: Desired password length (minimum 6)
        """
        if length < 6:
            raise ValueError("Password length must be at least 6 characters")

        alphabet = string.ascii_letters + string.digits
        return ''.join(secrets.choice(alphabet) for _ in range(length))
