"""Data models for the creator sign-in and claim flow"""

import time
from dataclasses import dataclass
from typing import Optional

import settings


@dataclass(frozen=True)
class ProviderConfig:
    """Identity provider endpoints and confidential client credentials

    Attributes:
        client_id: OAuth client identifier
        client_secret: OAuth client secret (Basic auth at the token endpoint)
        authorize_url: Provider authorization endpoint
        token_url: Provider token endpoint
        profile_url: Provider "who am I" endpoint
        revoke_url: Provider token revocation endpoint
        redirect_uri: Callback URL, identical to the registered value
        scopes: Space separated scopes requested on authorization
    """
    client_id: str
    client_secret: str
    authorize_url: str
    token_url: str
    profile_url: str
    revoke_url: str
    redirect_uri: str
    scopes: str

    @classmethod
    def from_settings(cls) -> "ProviderConfig":
        return cls(
            client_id=settings.X_CLIENT_ID,
            client_secret=settings.X_CLIENT_SECRET,
            authorize_url=settings.X_AUTHORIZE_URL,
            token_url=settings.X_TOKEN_URL,
            profile_url=settings.X_PROFILE_URL,
            revoke_url=settings.X_REVOKE_URL,
            redirect_uri=settings.X_REDIRECT_URI,
            scopes=settings.X_SCOPES,
        )


@dataclass(frozen=True)
class AuthAttempt:
    """In-flight authentication attempt, keyed by state

    Attributes:
        state: Opaque anti-CSRF correlation token
        code_verifier: PKCE secret presented at the token endpoint
        code_challenge: base64url(SHA256(code_verifier))
        created_at: Unix timestamp of creation
        expires_at: Unix timestamp after which the attempt is unusable
        target_entry_id: Catalog entry to claim, if any
        target_entry_slug: Slug of that entry, used for redirects
    """
    state: str
    code_verifier: str
    code_challenge: str
    created_at: float
    expires_at: float
    target_entry_id: Optional[str] = None
    target_entry_slug: Optional[str] = None

    def is_expired(self, now: Optional[float] = None) -> bool:
        if now is None:
            now = time.time()
        return now > self.expires_at

    @property
    def has_target(self) -> bool:
        return bool(self.target_entry_id)


@dataclass(frozen=True)
class IdentityProfile:
    """Authenticated identity as reported by the provider"""
    external_id: str
    handle: str
    display_name: str = ""
    avatar_url: str = ""


@dataclass
class Session:
    """Application session created after a successful exchange

    Attributes:
        session_id: Opaque id carried in the HttpOnly session cookie
        access_token: Provider access token
        refresh_token: Provider refresh token (may be empty)
        expires_at: Unix timestamp of expiry
        subject_id: Provider external id of the signed-in user
        handle: Provider handle of the signed-in user
    """
    session_id: str
    access_token: str
    refresh_token: str
    expires_at: float
    subject_id: str
    handle: str = ""

    def is_expired(self, now: Optional[float] = None) -> bool:
        if now is None:
            now = time.time()
        return now >= self.expires_at

    def max_age(self, now: Optional[float] = None) -> int:
        """Seconds left, for the cookie Max-Age"""
        if now is None:
            now = time.time()
        return max(0, int(self.expires_at - now))
