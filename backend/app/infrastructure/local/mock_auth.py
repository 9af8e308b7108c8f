"""
Mock authentication provider for local development.
"""

from app.interfaces.auth_provider import IAuthProvider, User


class MockAuthProvider(IAuthProvider):
    """Mock auth provider that trusts the token as the user id."""

    def __init__(self, enabled: bool = False):
        self._enabled = enabled

    def is_enabled(self) -> bool:
        return self._enabled

    async def verify_token(self, token: str) -> User:
        """The token is the user id."""
        return User(id=token)
