"""
Long-lived application components, built once and torn down on shutdown.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Request

import settings
from claims import ClaimService, EntryRepository, InMemoryEntryRepository, SupabaseEntryRepository
from oauth import CallbackHandler, PendingAuthStore, ProviderClient, ProviderConfig, SessionStore

logger = logging.getLogger(__name__)


def default_repository() -> EntryRepository:
    """Supabase when configured, otherwise an empty in-memory catalog"""
    if settings.SUPABASE_URL and settings.SUPABASE_SERVICE_ROLE_KEY:
        return SupabaseEntryRepository.from_settings()
    logger.warning("Supabase is not configured - using an in-memory entry repository")
    return InMemoryEntryRepository()


@dataclass
class AppContext:
    """Everything a request handler needs, explicitly constructed"""
    provider: ProviderConfig
    store: PendingAuthStore
    sessions: SessionStore
    provider_client: ProviderClient
    claims: ClaimService
    callback: CallbackHandler

    @classmethod
    def build(
        cls,
        repository: Optional[EntryRepository] = None,
        provider: Optional[ProviderConfig] = None,
        http: Optional[httpx.AsyncClient] = None,
        store: Optional[PendingAuthStore] = None,
        sessions: Optional[SessionStore] = None,
    ) -> "AppContext":
        provider = provider or ProviderConfig.from_settings()
        store = store if store is not None else PendingAuthStore()
        sessions = sessions if sessions is not None else SessionStore()
        provider_client = ProviderClient(provider, http=http)
        claims = ClaimService(repository if repository is not None else default_repository())
        return cls(
            provider=provider,
            store=store,
            sessions=sessions,
            provider_client=provider_client,
            claims=claims,
            callback=CallbackHandler(store, provider_client, sessions, claims),
        )

    async def aclose(self) -> None:
        await self.provider_client.aclose()


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the application context"""
    return request.app.state.context


def current_session(request: Request):
    """FastAPI dependency returning the session for the request cookie, or None"""
    context: AppContext = request.app.state.context
    return context.sessions.get(request.cookies.get(settings.SESSION_COOKIE_NAME))
