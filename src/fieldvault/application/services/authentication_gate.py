"""Authentication gate in front of every record operation."""

import logging
from typing import Optional

from fieldvault.application.ports.identity import CurrentUser, IdentityProvider
from fieldvault.domain.shared.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class AuthenticationGate:
    """Resolves the caller before any record is touched.

    A missing credential is rejected without consulting the identity
    provider. Provider failures of any kind surface as AuthenticationError.
    """

    def __init__(self, identity_provider: IdentityProvider):
        self._identity_provider = identity_provider

    async def authenticate(self, credential: Optional[str]) -> CurrentUser:
        if not credential:
            logger.warning("Authentication failed - no bearer credential")
            raise AuthenticationError()

        try:
            user = await self._identity_provider.resolve(credential)
        except AuthenticationError:
            raise
        except Exception as e:
            logger.warning("Identity provider error: %s", type(e).__name__)
            raise AuthenticationError() from e

        logger.info("Authenticated user: %s", user.user_id)
        return user
