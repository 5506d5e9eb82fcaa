"""OAuth authorization URL construction"""

from urllib.parse import urlencode

from .models import AuthAttempt, ProviderConfig
from .pkce import CHALLENGE_METHOD


def build_authorization_url(attempt: AuthAttempt, provider: ProviderConfig) -> str:
    """Assemble the provider authorization URL for an attempt

    Pure function: the same attempt and provider always yield the same URL,
    and nothing is persisted here.

    Args:
        attempt: Stored attempt carrying state and code challenge
        provider: Provider endpoints and client id

    Returns:
        Full authorization URL
    """
    params = {
        "response_type": "code",
        "client_id": provider.client_id,
        "redirect_uri": provider.redirect_uri,
        "scope": provider.scopes,
        "state": attempt.state,
        "code_challenge": attempt.code_challenge,
        "code_challenge_method": CHALLENGE_METHOD,
    }
    separator = "&" if "?" in provider.authorize_url else "?"
    return f"{provider.authorize_url}{separator}{urlencode(params)}"
