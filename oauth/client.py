"""Long-lived provider client with explicit startup and teardown"""

import logging
from typing import Optional

import httpx

import settings
from .models import IdentityProfile, ProviderConfig
from .profile import fetch_profile
from .token_exchange import TokenResponse, exchange_code_for_tokens, revoke_token

logger = logging.getLogger(__name__)


class ProviderClient:
    """Wraps one httpx.AsyncClient plus the provider configuration

    Created once per application and closed on shutdown. Tests inject an
    httpx.AsyncClient backed by a mock transport.
    """

    def __init__(
        self,
        provider: ProviderConfig,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.provider = provider
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.REQUEST_TIMEOUT, connect=settings.CONNECT_TIMEOUT)
        )

    async def exchange_code(self, code: str, code_verifier: str) -> Optional[TokenResponse]:
        return await exchange_code_for_tokens(self.http, self.provider, code, code_verifier)

    async def fetch_profile(self, access_token: str) -> Optional[IdentityProfile]:
        return await fetch_profile(self.http, self.provider, access_token)

    async def revoke(self, access_token: str, refresh_token: str = "") -> bool:
        """Revoke both tokens; True only if every revocation succeeded"""
        ok = await revoke_token(self.http, self.provider, access_token, "access_token")
        if refresh_token:
            ok = await revoke_token(self.http, self.provider, refresh_token, "refresh_token") and ok
        return ok

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()
            logger.debug("Provider HTTP client closed")
