"""Tests for newsletter listing and lookup."""

import asyncio

import pytest

from wa_gateway.domain.errors import OperationError, ValidationError
from wa_gateway.domain.newsletters import NewsletterRecord
from wa_gateway.services.newsletters import NewsletterService
from tests.conftest import FakeBridgeClient, InMemorySessionRepository

_CHANNEL = NewsletterRecord(
    id="99",
    jid="99@newsletter",
    name="Updates",
    subscriber_count=1200,
    is_verified=True,
    is_subscribed=True,
)


def _service(bridge: FakeBridgeClient) -> NewsletterService:
    return NewsletterService(InMemorySessionRepository(), bridge)


def test_list_newsletters() -> None:
    bridge = FakeBridgeClient(newsletters=[_CHANNEL])

    result = asyncio.run(_service(bridge).list_newsletters("s1"))

    assert result.count == 1
    assert result.newsletters[0].jid == "99@newsletter"
    assert result.newsletters[0].subscriber_count == 1200


def test_newsletter_view_falls_back_to_id() -> None:
    bridge = FakeBridgeClient(newsletters=[NewsletterRecord(id="77", jid="", name="x")])

    result = asyncio.run(_service(bridge).list_newsletters("s1"))

    assert result.newsletters[0].jid == "77"


def test_get_newsletter_info() -> None:
    bridge = FakeBridgeClient(newsletters=[_CHANNEL])

    newsletter = asyncio.run(_service(bridge).get_newsletter_info("s1", "99@newsletter"))

    assert newsletter.name == "Updates"
    assert newsletter.is_verified is True


def test_get_newsletter_info_requires_jid() -> None:
    with pytest.raises(ValidationError):
        asyncio.run(_service(FakeBridgeClient()).get_newsletter_info("s1", ""))


def test_newsletter_errors_are_wrapped() -> None:
    bridge = FakeBridgeClient(error=RuntimeError("boom"))

    with pytest.raises(OperationError, match="failed to list newsletters"):
        asyncio.run(_service(bridge).list_newsletters("s1"))


def test_get_newsletter_info_accepts_bare_id() -> None:
    bridge = FakeBridgeClient(newsletters=[_CHANNEL])

    newsletter = asyncio.run(_service(bridge).get_newsletter_info("s1", " 99 "))

    assert newsletter.name == "Updates"
    assert bridge.calls == [("get_newsletter_info", "s1", "99@newsletter")]
