"""
Credential hashing.

bcrypt through passlib, with the work factor taken from settings.
"""

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10


class PasswordHasher:
    """One-way salted password hashing with a fixed work factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self.context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash_password(self, password: str) -> str:
        return self.context.hash(password)

    def verify_password(self, password: str, hashed_password: str) -> bool:
        try:
            return self.context.verify(password, hashed_password)
        except (ValueError, TypeError):
            logger.warning("Stored password hash is malformed")
            return False

    def dummy_verify(self) -> None:
        """Spend the same time as a real verification, for unknown users."""
        self.context.dummy_verify()
