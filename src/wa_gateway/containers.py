"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from wa_gateway.adapters.bridge_client import HttpxBridgeClient
from wa_gateway.adapters.cached_session_repository import CachedSessionRepository
from wa_gateway.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from wa_gateway.config import Settings
from wa_gateway.services.cache import InMemoryCache
from wa_gateway.services.chats import ChatService
from wa_gateway.services.connections import ConnectionService
from wa_gateway.services.contacts import ContactService
from wa_gateway.services.groups import GroupService
from wa_gateway.services.messages import MessageService
from wa_gateway.services.newsletters import NewsletterService
from wa_gateway.services.sessions import SessionRepository, SessionService
from wa_gateway.services.webhooks import WebhookService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_service: SessionService
    connection_service: ConnectionService
    webhook_service: WebhookService
    chat_service: ChatService
    group_service: GroupService
    contact_service: ContactService
    newsletter_service: NewsletterService
    message_service: MessageService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_repository: SessionRepository = SupabaseSessionRepository(supabase_client)
    if resolved_settings.session_cache_ttl_seconds > 0:
        session_repository = CachedSessionRepository(
            repository=session_repository,
            cache=InMemoryCache(),
            ttl_seconds=resolved_settings.session_cache_ttl_seconds,
        )
    bridge_client = HttpxBridgeClient.create(
        base_url=resolved_settings.bridge_base_url,
        token=resolved_settings.bridge_token,
        timeout=resolved_settings.bridge_timeout_seconds,
    )

    async def close_resources() -> None:
        await bridge_client.close()

    return AppContainer(
        settings=resolved_settings,
        session_service=SessionService(session_repository),
        connection_service=ConnectionService(session_repository, bridge_client),
        webhook_service=WebhookService(session_repository),
        chat_service=ChatService(session_repository, bridge_client),
        group_service=GroupService(session_repository, bridge_client),
        contact_service=ContactService(session_repository, bridge_client),
        newsletter_service=NewsletterService(session_repository, bridge_client),
        message_service=MessageService(session_repository, bridge_client),
        close_resources=close_resources,
    )
