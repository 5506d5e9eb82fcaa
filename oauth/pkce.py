"""PKCE (Proof Key for Code Exchange) and state generation"""

import base64
import hashlib
import secrets
import string
from typing import NamedTuple

# RFC 7636 section 4.1: ALPHA / DIGIT / "-" / "." / "_" / "~"
UNRESERVED_CHARACTERS = frozenset(string.ascii_letters + string.digits + "-._~")
VERIFIER_MIN_LENGTH = 43
VERIFIER_MAX_LENGTH = 128
CHALLENGE_METHOD = "S256"


class PKCEPair(NamedTuple):
    """PKCE code verifier and challenge pair"""
    verifier: str
    challenge: str


def compute_challenge(verifier: str) -> str:
    """Derive the S256 challenge for a verifier

    Args:
        verifier: PKCE code verifier

    Returns:
        base64url(SHA256(verifier)) without padding
    """
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def generate_pkce() -> PKCEPair:
    """
    Generate PKCE code verifier and challenge.

    64 random bytes give an 86 character base64url verifier, inside the
    43-128 window and drawn only from the unreserved set. Only the hashed
    S256 method is ever produced.

    Returns:
        PKCEPair: Tuple of (verifier, challenge)
    """
    verifier = secrets.token_urlsafe(64)
    return PKCEPair(verifier=verifier, challenge=compute_challenge(verifier))


def create_state() -> str:
    """
    Generate random state parameter for CSRF protection.

    Returns:
        str: 256-bit random url-safe token
    """
    return secrets.token_urlsafe(32)


def is_valid_verifier(verifier: str) -> bool:
    """Check length and alphabet of a verifier against RFC 7636"""
    return (
        VERIFIER_MIN_LENGTH <= len(verifier) <= VERIFIER_MAX_LENGTH
        and set(verifier) <= UNRESERVED_CHARACTERS
    )
