"""Identity provider that asks the external identity service about a token."""

from __future__ import annotations

import logging
from uuid import UUID

import httpx

from fieldvault.application.ports.identity import CurrentUser, IdentityProvider
from fieldvault.domain.shared.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class RemoteIdentityProvider(IdentityProvider):
    """HTTP client for the identity service's ``GET /user`` endpoint.

    The service answers 200 with ``{"id": "<uuid>", "email": "..."}`` for a
    valid token. Any other outcome means the caller is not authenticated.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 10.0,
    ):
        if not base_url:
            msg = "Identity service URL cannot be empty"
            raise ValueError(msg)

        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self._api_key:
                headers["apikey"] = self._api_key
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=headers,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def resolve(self, token: str) -> CurrentUser:
        client = await self._get_client()

        try:
            response = await client.get(
                "/user",
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            logger.warning("Identity service unreachable: %s", type(e).__name__)
            raise AuthenticationError() from e

        if response.status_code != httpx.codes.OK:
            logger.warning("Auth error: identity service answered %d", response.status_code)
            raise AuthenticationError()

        try:
            body = response.json()
            return CurrentUser(user_id=UUID(str(body["id"])), email=body.get("email"))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Malformed identity service response: %s", type(e).__name__)
            raise AuthenticationError() from e
