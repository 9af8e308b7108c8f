"""
Authentication provider interface.

The identity layer sits outside the application; providers only turn a
bearer token into a user.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class User(BaseModel):
    """Authenticated user."""

    id: str


class IAuthProvider(ABC):
    """Interface for authentication providers."""

    def is_enabled(self) -> bool:
        """Whether requests must carry a token."""
        return True

    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """Verify a token and return the user it identifies."""
        pass
