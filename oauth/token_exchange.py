"""
OAuth token exchange and revocation against the provider token endpoints
"""
import logging
import time
from typing import Any, Dict, Optional

import httpx

import settings
from .models import ProviderConfig

logger = logging.getLogger(__name__)

# Provider error bodies are logged, never surfaced; keep the log readable
MAX_LOGGED_BODY = 500


class TokenResponse:
    """OAuth token response"""

    def __init__(
        self,
        access_token: str,
        refresh_token: str = "",
        expires_in: Optional[int] = None,
        token_type: str = "bearer",
        scope: str = "",
    ):
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.token_type = token_type
        self.scope = scope
        self.expires_in = expires_in if expires_in else settings.DEFAULT_SESSION_TTL
        self.expires_at = time.time() + self.expires_in

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> Optional["TokenResponse"]:
        """Build from the token endpoint JSON body, None if unusable"""
        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            return None
        try:
            expires_in = int(data.get("expires_in") or 0)
        except (TypeError, ValueError):
            expires_in = 0
        return cls(
            access_token=access_token,
            refresh_token=data.get("refresh_token") or "",
            expires_in=expires_in,
            token_type=data.get("token_type", "bearer"),
            scope=data.get("scope", ""),
        )


async def exchange_code_for_tokens(
    http: httpx.AsyncClient,
    provider: ProviderConfig,
    code: str,
    code_verifier: str,
) -> Optional[TokenResponse]:
    """
    Exchange authorization code for access and refresh tokens.

    Called at most once per code: the code is single-use at the provider, so
    a failure here is final and the caller has to restart the flow.

    Args:
        http: Shared async HTTP client
        provider: Provider endpoints and client credentials
        code: Authorization code from callback
        code_verifier: PKCE verifier stored with the attempt

    Returns:
        TokenResponse if successful, None otherwise
    """
    data = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": provider.redirect_uri,
        "code_verifier": code_verifier,
        "client_id": provider.client_id,
    }

    logger.info(f"Exchanging authorization code for tokens at {provider.token_url}")
    try:
        response = await http.post(
            provider.token_url,
            data=data,
            auth=(provider.client_id, provider.client_secret),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
    except httpx.TimeoutException as e:
        logger.error(f"Token exchange timed out: {e}")
        return None
    except httpx.RequestError as e:
        logger.error(f"Token exchange request failed: {e}")
        return None

    if response.status_code != 200:
        logger.error(
            f"Token exchange failed with status {response.status_code}: "
            f"{response.text[:MAX_LOGGED_BODY]}"
        )
        return None

    try:
        payload = response.json()
    except ValueError as e:
        logger.error(f"Failed to parse token exchange response: {e}")
        return None

    tokens = TokenResponse.from_payload(payload) if isinstance(payload, dict) else None
    if tokens is None:
        logger.error("Token exchange response missing access_token")
        return None

    logger.info("Successfully exchanged authorization code for tokens")
    return tokens


async def revoke_token(
    http: httpx.AsyncClient,
    provider: ProviderConfig,
    token: str,
    token_type_hint: str = "access_token",
) -> bool:
    """
    Revoke a token at the provider. Best effort only.

    Args:
        http: Shared async HTTP client
        provider: Provider endpoints and client credentials
        token: Token to revoke
        token_type_hint: access_token or refresh_token

    Returns:
        True if the provider acknowledged the revocation
    """
    if not token or not provider.revoke_url:
        return False

    try:
        response = await http.post(
            provider.revoke_url,
            data={"token": token, "token_type_hint": token_type_hint, "client_id": provider.client_id},
            auth=(provider.client_id, provider.client_secret),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
    except httpx.HTTPError as e:
        logger.warning(f"Token revocation request failed: {e}")
        return False

    if response.status_code != 200:
        logger.warning(f"Token revocation returned status {response.status_code}")
        return False
    return True
