import logging
from typing import Optional

import httpx
from fastapi import Depends, Header
from pydantic import BaseModel

from pos_inventory.core.config import AUTH_API_KEY, AUTH_TIMEOUT, AUTH_URL
from pos_inventory.core.errors import Unauthorized

log = logging.getLogger("pos_inventory.identity")


class AuthenticatedUser(BaseModel):
    id: str
    email: Optional[str] = None
    role: Optional[str] = None


class IdentityVerifier:
    """Verifies bearer tokens against the identity provider's user endpoint."""

    def __init__(
        self,
        base_url: str = AUTH_URL,
        api_key: str = AUTH_API_KEY,
        timeout: float = AUTH_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _headers(self, token: str) -> dict:
        headers = {"Authorization": f"Bearer {token}"}
        if self.api_key:
            headers["apikey"] = self.api_key
        return headers

    async def verify(self, token: str) -> AuthenticatedUser:
        if not token:
            raise Unauthorized()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(f"{self.base_url}/user", headers=self._headers(token))
        except httpx.HTTPError as e:
            log.warning(f"Identity provider unreachable: {e}")
            raise Unauthorized() from e

        if resp.status_code != 200:
            log.info(f"Token rejected by identity provider (status {resp.status_code})")
            raise Unauthorized()

        try:
            data = resp.json()
        except ValueError as e:
            log.warning(f"Identity provider returned a non-JSON user payload: {e}")
            raise Unauthorized() from e

        if not isinstance(data, dict) or not data.get("id"):
            raise Unauthorized()
        return AuthenticatedUser(id=str(data["id"]), email=data.get("email"), role=data.get("role"))


def get_identity_verifier() -> IdentityVerifier:
    return IdentityVerifier()


async def require_user(
    authorization: Optional[str] = Header(None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> AuthenticatedUser:
    """FastAPI dependency: a verified caller, or 401 before any body parsing or store access."""
    if not authorization:
        raise Unauthorized("Missing authorization header")

    token = authorization.replace("Bearer ", "", 1).strip()
    return await verifier.verify(token)
