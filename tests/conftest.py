"""Shared fixtures for the claim service tests."""
import httpx
import pytest

from claims import InMemoryEntryRepository, OwnershipRecord
from oauth import PendingAuthStore, ProviderConfig, SessionStore
from web import AppContext


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider:
    """httpx.MockTransport handler standing in for the identity provider."""

    def __init__(self, handle: str = "DevX", external_id: str = "1001"):
        self.handle = handle
        self.external_id = external_id
        self.token_status = 200
        self.profile_status = 200
        self.revoke_status = 200
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/oauth2/token"):
            if self.token_status != 200:
                return httpx.Response(
                    self.token_status,
                    json={"error": "invalid_grant", "error_description": "internal provider detail"},
                )
            return httpx.Response(200, json={
                "token_type": "bearer",
                "access_token": "access-123",
                "refresh_token": "refresh-456",
                "expires_in": 7200,
                "scope": "users.read tweet.read offline.access",
            })
        if path.endswith("/users/me"):
            if self.profile_status != 200:
                return httpx.Response(self.profile_status, json={"title": "Unauthorized"})
            return httpx.Response(200, json={"data": {
                "id": self.external_id,
                "username": self.handle,
                "name": "Dev X",
                "profile_image_url": "https://img.provider.example/devx.png",
            }})
        if path.endswith("/oauth2/revoke"):
            return httpx.Response(self.revoke_status, json={"revoked": self.revoke_status == 200})
        return httpx.Response(404)

    def calls(self, suffix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(suffix)]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def provider_config():
    return ProviderConfig(
        client_id="client-abc",
        client_secret="secret-xyz",
        authorize_url="https://provider.example/i/oauth2/authorize",
        token_url="https://api.provider.example/2/oauth2/token",
        profile_url="https://api.provider.example/2/users/me",
        revoke_url="https://api.provider.example/2/oauth2/revoke",
        redirect_uri="https://gamelab.test/auth/callback",
        scopes="tweet.read users.read offline.access",
    )


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def http_client(fake_provider):
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_provider))


@pytest.fixture
def repository():
    return InMemoryEntryRepository([
        OwnershipRecord(
            entry_id="g1",
            slug="space-explorer",
            declared_owner_url="https://provider.example/devx",
        ),
        OwnershipRecord(
            entry_id="g2",
            slug="pixel-farm",
            declared_owner_url="not a url##",
        ),
    ])


@pytest.fixture
def context(repository, provider_config, http_client, clock):
    return AppContext.build(
        repository=repository,
        provider=provider_config,
        http=http_client,
        store=PendingAuthStore(ttl_seconds=1800, clock=clock),
        sessions=SessionStore(),
    )
