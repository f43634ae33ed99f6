import logging
from typing import Any, Optional

import httpx

from ..config import SUPABASE_ANON_KEY, SUPABASE_URL

logger = logging.getLogger(__name__)


class SupabaseAuthError(Exception):
    """Error returned by the Supabase Auth (GoTrue) API"""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SupabaseAuthService:
    """Service for the Supabase Auth REST API (email/password sign-in)"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        anon_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or SUPABASE_URL).rstrip("/")
        self.anon_key = anon_key if anon_key is not None else SUPABASE_ANON_KEY
        self.transport = transport

    def _headers(self, access_token: Optional[str] = None) -> dict[str, str]:
        headers = {"apikey": self.anon_key, "Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    async def _post(
        self, path: str, payload: Optional[dict] = None, access_token: Optional[str] = None
    ) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, transport=self.transport, timeout=10.0
            ) as client:
                response = await client.post(
                    f"/auth/v1{path}", json=payload, headers=self._headers(access_token)
                )
        except httpx.HTTPError as e:
            logger.error(f"❌ Supabase auth {path} unreachable: {str(e)}")
            raise SupabaseAuthError(str(e), 503) from e

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            message = (
                body.get("error_description")
                or body.get("msg")
                or body.get("message")
                or response.text
            )
            logger.error(f"❌ Supabase auth {path} failed: {response.status_code} {message}")
            raise SupabaseAuthError(message, response.status_code)

        if not response.content:
            return {}
        return response.json()

    async def sign_up(self, email: str, password: str) -> dict[str, Any]:
        """Register a new email/password user"""
        logger.info(f"🆕 Signing up {email}")
        return await self._post("/signup", {"email": email, "password": password})

    async def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        """Exchange email/password for an access + refresh token session"""
        return await self._post(
            "/token?grant_type=password", {"email": email, "password": password}
        )

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind ``access_token``"""
        await self._post("/logout", access_token=access_token)


def get_supabase_auth_service() -> SupabaseAuthService:
    """Dependency injection for SupabaseAuthService"""
    return SupabaseAuthService()
