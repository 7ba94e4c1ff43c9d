"""IdentityProvider - port to the external identity service."""

from abc import ABC, abstractmethod

from fieldvault.application.ports.identity.current_user import CurrentUser


class IdentityProvider(ABC):
    """Maps a bearer token to the user it was issued to."""

    @abstractmethod
    async def resolve(self, token: str) -> CurrentUser:
        """
        Validate ``token`` and return its user.

        Raises
        ------
        AuthenticationError
            If the token is expired, malformed, revoked or otherwise rejected
        """
