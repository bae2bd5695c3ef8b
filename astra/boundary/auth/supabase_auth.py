"""
Supabase Auth client.

Resolves a bearer token to the Supabase user it was issued for.

Dependencies: httpx
System role: Token verification boundary for the HTTP surface
"""

import logging
from uuid import UUID

import httpx

from astra.core.exceptions import AuthError

logger = logging.getLogger(__name__)


class SupabaseAuthClient:
    """Look up the user behind an access token via GET /auth/v1/user."""

    def __init__(
        self,
        project_url: str,
        api_key: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._user_endpoint = f"{project_url.rstrip('/')}/auth/v1/user"
        self._api_key = api_key
        self._timeout = timeout
        self._http_client = http_client

    async def get_user_id(self, access_token: str) -> UUID:
        """
        Resolve an access token to a user id.

        Args:
            access_token: Bearer token from the request

        Returns:
            UUID: Authenticated user id

        Raises:
            AuthError: Token rejected or auth endpoint unreachable
        """
        headers = {"Authorization": f"Bearer {access_token}", "apikey": self._api_key}
        try:
            if self._http_client is not None:
                response = await self._http_client.get(self._user_endpoint, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(self._user_endpoint, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"{__name__}:get_user_id - {type(e).__name__}: {e}")
            raise AuthError("Unable to verify credentials") from e

        if response.status_code != 200:
            logger.warning(
                f"{__name__}:get_user_id - Token rejected",
                extra={"status_code": response.status_code},
            )
            raise AuthError("Unauthorized")

        try:
            return UUID(response.json().get("id") or "")
        except ValueError as e:
            raise AuthError("Unauthorized") from e
