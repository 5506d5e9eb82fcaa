"""Tests for PKCE, state generation and the pending-auth store."""
import threading
from urllib.parse import parse_qs, urlsplit

import pytest

from oauth import (
    CHALLENGE_METHOD,
    PendingAuthStore,
    build_authorization_url,
    compute_challenge,
    create_state,
    generate_pkce,
    is_valid_verifier,
)
from oauth.pkce import UNRESERVED_CHARACTERS


# ---------------------------------------------------------------------------
# PKCE pair
# ---------------------------------------------------------------------------

class TestGeneratePkce:
    def test_rfc7636_appendix_b_vector(self):
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
        assert compute_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"

    def test_verifier_length_and_alphabet(self):
        for _ in range(50):
            pair = generate_pkce()
            assert 43 <= len(pair.verifier) <= 128
            assert set(pair.verifier) <= UNRESERVED_CHARACTERS
            assert is_valid_verifier(pair.verifier)

    def test_challenge_recomputes(self):
        pair = generate_pkce()
        assert compute_challenge(pair.verifier) == pair.challenge
        assert "=" not in pair.challenge

    def test_method_is_hashed(self):
        assert CHALLENGE_METHOD == "S256"

    def test_rejects_short_or_foreign_verifiers(self):
        assert not is_valid_verifier("a" * 42)
        assert not is_valid_verifier("a" * 129)
        assert not is_valid_verifier("a" * 42 + "!")


class TestCreateState:
    def test_at_least_128_bits(self):
        # 32 random bytes -> 43 base64url characters
        assert len(create_state()) >= 43

    def test_unique(self):
        assert len({create_state() for _ in range(200)}) == 200


# ---------------------------------------------------------------------------
# PendingAuthStore
# ---------------------------------------------------------------------------

class TestPendingAuthStore:
    def test_generate_stores_attempt(self, clock):
        store = PendingAuthStore(ttl_seconds=600, clock=clock)
        attempt = store.generate_attempt("g1", "space-explorer")

        assert len(store) == 1
        assert attempt.target_entry_id == "g1"
        assert attempt.target_entry_slug == "space-explorer"
        assert attempt.expires_at == attempt.created_at + 600
        assert compute_challenge(attempt.code_verifier) == attempt.code_challenge

    def test_blank_targets_become_none(self, clock):
        attempt = PendingAuthStore(clock=clock).generate_attempt("", "")
        assert attempt.target_entry_id is None
        assert not attempt.has_target

    def test_consume_exactly_once(self, clock):
        store = PendingAuthStore(clock=clock)
        attempt = store.generate_attempt()

        assert store.consume_attempt(attempt.state) == attempt
        assert store.consume_attempt(attempt.state) is None
        assert store.was_consumed(attempt.state)

    def test_unknown_state(self, clock):
        store = PendingAuthStore(clock=clock)
        assert store.consume_attempt("forged") is None
        assert store.consume_attempt("") is None
        assert not store.was_consumed("forged")

    def test_expired_attempt_is_not_found(self, clock):
        store = PendingAuthStore(ttl_seconds=60, clock=clock)
        attempt = store.generate_attempt("g1", "space-explorer")
        clock.advance(61)

        assert store.consume_attempt(attempt.state) is None
        # Expiry is not a replay
        assert not store.was_consumed(attempt.state)
        assert len(store) == 0

    def test_attempt_valid_until_expiry(self, clock):
        store = PendingAuthStore(ttl_seconds=60, clock=clock)
        attempt = store.generate_attempt()
        clock.advance(60)
        assert store.consume_attempt(attempt.state) == attempt

    def test_purge_expired(self, clock):
        store = PendingAuthStore(ttl_seconds=60, clock=clock)
        consumed = store.generate_attempt()
        store.consume_attempt(consumed.state)
        store.generate_attempt()
        clock.advance(30)
        fresh = store.generate_attempt()
        clock.advance(31)

        assert store.purge_expired() == 2
        assert len(store) == 1
        assert store.consume_attempt(fresh.state) == fresh

    def test_concurrent_consumption_single_winner(self, clock):
        store = PendingAuthStore(clock=clock)
        attempt = store.generate_attempt()
        barrier = threading.Barrier(8)
        results = []

        def worker():
            barrier.wait()
            results.append(store.consume_attempt(attempt.state))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(1 for r in results if r is not None) == 1


# ---------------------------------------------------------------------------
# Authorization URL
# ---------------------------------------------------------------------------

class TestBuildAuthorizationUrl:
    def test_parameters(self, clock, provider_config):
        attempt = PendingAuthStore(clock=clock).generate_attempt("g1", "space-explorer")
        url = build_authorization_url(attempt, provider_config)

        parts = urlsplit(url)
        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == provider_config.authorize_url
        params = {k: v[0] for k, v in parse_qs(parts.query).items()}
        assert params == {
            "response_type": "code",
            "client_id": "client-abc",
            "redirect_uri": "https://gamelab.test/auth/callback",
            "scope": "tweet.read users.read offline.access",
            "state": attempt.state,
            "code_challenge": attempt.code_challenge,
            "code_challenge_method": "S256",
        }

    def test_deterministic_and_secret_free(self, clock, provider_config):
        attempt = PendingAuthStore(clock=clock).generate_attempt()
        url = build_authorization_url(attempt, provider_config)
        assert url == build_authorization_url(attempt, provider_config)
        assert attempt.code_verifier not in url
        assert provider_config.client_secret not in url

    def test_store_untouched(self, clock, provider_config):
        store = PendingAuthStore(clock=clock)
        attempt = store.generate_attempt()
        build_authorization_url(attempt, provider_config)
        assert len(store) == 1
