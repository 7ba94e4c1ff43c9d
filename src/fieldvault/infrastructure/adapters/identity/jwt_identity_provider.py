"""Identity provider backed by locally verified JWTs."""

import logging

from fieldvault.application.ports.identity import CurrentUser, IdentityProvider
from fieldvault.domain.shared.exceptions import AuthenticationError
from fieldvault_auth import InvalidTokenError, JWTService

logger = logging.getLogger(__name__)


class JWTIdentityProvider(IdentityProvider):
    """Verifies bearer tokens signed with the identity service's shared secret."""

    def __init__(self, jwt_service: JWTService):
        self._jwt_service = jwt_service

    async def resolve(self, token: str) -> CurrentUser:
        try:
            payload = self._jwt_service.verify_token(token)
        except InvalidTokenError as e:
            logger.warning("Invalid token: %s", e)
            raise AuthenticationError("Invalid or expired token") from e

        # Refresh tokens are not accepted as credentials
        if not payload.is_access_token():
            logger.warning(
                "Refresh token used as access token for user: %s",
                payload.user_id,
            )
            raise AuthenticationError("Invalid token type")

        return CurrentUser(user_id=payload.user_id, email=payload.email)
