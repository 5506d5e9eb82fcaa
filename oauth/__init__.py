"""
X OAuth 2.0 (authorization code + PKCE) sign-in for catalog creators
"""
from .models import (
    ProviderConfig,
    AuthAttempt,
    IdentityProfile,
    Session,
)
from .errors import (
    FailureReason,
    claim_success_redirect,
    error_page_redirect,
    failure_redirect,
    sign_in_success_redirect,
)
from .pkce import (
    PKCEPair,
    CHALLENGE_METHOD,
    compute_challenge,
    create_state,
    generate_pkce,
    is_valid_verifier,
)
from .attempt_store import PendingAuthStore
from .authorization import build_authorization_url
from .token_exchange import (
    TokenResponse,
    exchange_code_for_tokens,
    revoke_token,
)
from .profile import fetch_profile, parse_profile
from .client import ProviderClient
from .session import SessionStore, logout
from .callback import CallbackHandler, CallbackResult, FlowState

__all__ = [
    # Models
    "ProviderConfig",
    "AuthAttempt",
    "IdentityProfile",
    "Session",
    # Errors and redirects
    "FailureReason",
    "claim_success_redirect",
    "error_page_redirect",
    "failure_redirect",
    "sign_in_success_redirect",
    # PKCE
    "PKCEPair",
    "CHALLENGE_METHOD",
    "compute_challenge",
    "create_state",
    "generate_pkce",
    "is_valid_verifier",
    # Attempts and authorization
    "PendingAuthStore",
    "build_authorization_url",
    # Provider calls
    "TokenResponse",
    "exchange_code_for_tokens",
    "revoke_token",
    "fetch_profile",
    "parse_profile",
    "ProviderClient",
    # Sessions
    "SessionStore",
    "logout",
    # Callback
    "CallbackHandler",
    "CallbackResult",
    "FlowState",
]
