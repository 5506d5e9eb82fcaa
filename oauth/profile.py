"""Identity profile retrieval from the provider"""

import logging
from typing import Any, Dict, Optional

import httpx

from .models import IdentityProfile, ProviderConfig

logger = logging.getLogger(__name__)

PROFILE_FIELDS = "profile_image_url"


def parse_profile(payload: Dict[str, Any]) -> Optional[IdentityProfile]:
    """Turn a users/me response into an IdentityProfile

    The provider wraps the user object in a top-level "data" key.

    Args:
        payload: Decoded JSON body

    Returns:
        IdentityProfile, or None when id or username is missing
    """
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        return None

    external_id = data.get("id")
    handle = data.get("username")
    if not external_id or not handle:
        return None

    return IdentityProfile(
        external_id=str(external_id),
        handle=str(handle),
        display_name=data.get("name") or "",
        avatar_url=data.get("profile_image_url") or "",
    )


async def fetch_profile(
    http: httpx.AsyncClient,
    provider: ProviderConfig,
    access_token: str,
) -> Optional[IdentityProfile]:
    """
    Fetch the authenticated user's profile with a bearer token.

    Args:
        http: Shared async HTTP client
        provider: Provider endpoints
        access_token: Access token from the exchange

    Returns:
        IdentityProfile if successful, None otherwise
    """
    try:
        response = await http.get(
            provider.profile_url,
            params={"user.fields": PROFILE_FIELDS},
            headers={"Authorization": f"Bearer {access_token}"},
        )
    except httpx.HTTPError as e:
        logger.error(f"Profile request failed: {e}")
        return None

    if response.status_code != 200:
        logger.error(f"Profile fetch failed with status {response.status_code}")
        return None

    try:
        payload = response.json()
    except ValueError as e:
        logger.error(f"Failed to parse profile response: {e}")
        return None

    profile = parse_profile(payload)
    if profile is None:
        logger.error("Profile response missing id or username")
        return None

    logger.debug(f"Fetched profile for @{profile.handle}")
    return profile
