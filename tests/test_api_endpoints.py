"""Tests for the HTTP routes."""

from datetime import UTC, datetime

from fastapi.testclient import TestClient

from wa_gateway.api.app import create_app
from wa_gateway.domain.chats import ChatMessageRecord
from wa_gateway.domain.groups import GroupRecord
from wa_gateway.domain.newsletters import NewsletterRecord

HEADERS = {"X-Api-Key": "api-key"}


def _client(container) -> TestClient:  # type: ignore[no-untyped-def]
    return TestClient(create_app(container))


def test_create_and_list_sessions(container, session_repository) -> None:
    client = _client(container)

    created = client.post("/sessions/create", json={"name": "support"}, headers=HEADERS)
    listed = client.get("/sessions/list", headers=HEADERS)

    assert created.status_code == 201
    body = created.json()
    assert body["success"] is True
    assert body["data"]["action"] == "create"
    assert body["data"]["session"]["name"] == "support"
    assert body["data"]["session_id"] in session_repository.sessions
    assert [s["name"] for s in listed.json()["data"]["sessions"]] == ["support"]


def test_create_session_invalid_name(container) -> None:
    response = _client(container).post(
        "/sessions/create", json={"name": "bad name"}, headers=HEADERS
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    assert error["details"] == "name"


def test_create_session_accepts_long_name(container) -> None:
    name = "a" * 80

    response = _client(container).post(
        "/sessions/create", json={"name": name}, headers=HEADERS
    )

    assert response.status_code == 201
    assert response.json()["data"]["session"]["name"] == name


def test_create_session_rejects_name_over_100(container) -> None:
    response = _client(container).post(
        "/sessions/create", json={"name": "a" * 101}, headers=HEADERS
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


def test_malformed_body_uses_error_envelope(container) -> None:
    client = _client(container)

    missing = client.post("/sessions/create", json={}, headers=HEADERS)
    wrong_type = client.post("/sessions/create", json={"name": ["x"]}, headers=HEADERS)

    for response in (missing, wrong_type):
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "INVALID_REQUEST"
        assert "name" in body["error"]["details"]


def test_session_info_by_name_and_id(container, session_repository) -> None:
    session = session_repository.add("support")
    client = _client(container)

    by_name = client.get("/sessions/support/info", headers=HEADERS)
    by_id = client.get(f"/sessions/{session.id}/info", headers=HEADERS)

    assert by_name.json()["data"]["session"]["id"] == session.id
    assert by_id.json()["data"]["session"]["name"] == "support"


def test_unknown_session_is_404(container) -> None:
    response = _client(container).get("/sessions/missing/info", headers=HEADERS)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "SESSION_NOT_FOUND"


def test_delete_session(container, session_repository) -> None:
    session = session_repository.add("support")

    response = _client(container).delete("/sessions/support", headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["data"]["action"] == "delete"
    assert session.id not in session_repository.sessions


def test_set_and_get_webhook(container, session_repository) -> None:
    session = session_repository.add("support")
    client = _client(container)

    created = client.post(
        "/session/support/webhook",
        json={"url": "https://hooks.example.com", "events": ["Message"]},
        headers=HEADERS,
    )
    fetched = client.get("/session/support/webhook", headers=HEADERS)

    assert created.status_code == 201
    assert created.json()["data"]["status"] == "active"
    assert session_repository.sessions[session.id].webhook_events == ["Message"]
    assert fetched.json()["data"]["webhook_url"] == "https://hooks.example.com"
    assert fetched.json()["data"]["events"] == []


def test_set_webhook_rejects_unknown_event(container, session_repository) -> None:
    session = session_repository.add("support")

    response = _client(container).post(
        "/session/support/webhook",
        json={"url": "https://hooks.example.com", "events": ["Message", "Bogus"]},
        headers=HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_EVENT"
    assert ("update", session.id) not in session_repository.calls


def test_set_webhook_requires_events(container, session_repository) -> None:
    session_repository.add("support")

    response = _client(container).post(
        "/session/support/webhook",
        json={"url": "https://hooks.example.com", "events": []},
        headers=HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_EVENTS"


def test_set_webhook_invalid_url(container, session_repository) -> None:
    session_repository.add("support")

    response = _client(container).post(
        "/session/support/webhook",
        json={"url": "ftp://hooks", "events": ["Message"]},
        headers=HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"] == "webhook_url"


def test_list_webhook_events(container) -> None:
    response = _client(container).get("/webhook/events", headers=HEADERS)

    data = response.json()["data"]
    assert data["count"] == len(data["events"])
    assert data["events"][-1] == "All"


def test_chat_history(container, session_repository, bridge_client) -> None:
    session = session_repository.add("support")
    bridge_client.messages.append(
        ChatMessageRecord(
            id="m1",
            chat_jid="5511@s.whatsapp.net",
            from_jid="5511@s.whatsapp.net",
            content="hi",
            type="text",
            timestamp=datetime(2024, 1, 1, tzinfo=UTC),
        )
    )

    response = _client(container).get(
        "/chat/support/history",
        params={"phone": "5511", "limit": 5000},
        headers=HEADERS,
    )

    data = response.json()["data"]
    assert data["limit"] == 1000
    assert data["messages"][0]["timestamp"] == "1704067200"
    assert bridge_client.calls == [
        ("get_chat_history", session.id, "5511@s.whatsapp.net", 1000, 0)
    ]


def test_bridge_failure_is_502(container, session_repository, bridge_client) -> None:
    session_repository.add("support")
    bridge_client.error = ConnectionError("offline")

    response = _client(container).get("/chat/support/list", headers=HEADERS)

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "OPERATION_FAILED"


def test_groups_and_newsletters(container, session_repository, bridge_client) -> None:
    session_repository.add("support")
    bridge_client.groups.append(GroupRecord(jid="1203@g.us", name="Team"))
    bridge_client.newsletters.append(
        NewsletterRecord(id="99", jid="99@newsletter", name="Updates")
    )
    client = _client(container)

    groups = client.get("/group/support/list", headers=HEADERS)
    group = client.get(
        "/group/support/info", params={"group_jid": "1203@g.us"}, headers=HEADERS
    )
    newsletters = client.get("/newsletter/support/list", headers=HEADERS)
    newsletter = client.get(
        "/newsletter/support/info",
        params={"newsletter_jid": "99@newsletter"},
        headers=HEADERS,
    )

    assert groups.json()["data"]["count"] == 1
    assert group.json()["data"]["name"] == "Team"
    assert newsletters.json()["data"]["newsletters"][0]["name"] == "Updates"
    assert newsletter.json()["data"]["jid"] == "99@newsletter"


def test_contacts(container, session_repository) -> None:
    session_repository.add("support")
    client = _client(container)

    listed = client.get("/contact/support/list", headers=HEADERS)
    checked = client.post(
        "/contact/support/check", json={"phones": ["5511"]}, headers=HEADERS
    )
    empty = client.post("/contact/support/check", json={"phones": []}, headers=HEADERS)

    assert listed.json()["data"]["limit"] == 100
    assert checked.json()["data"]["results"][0]["jid"] == "5511@s.whatsapp.net"
    assert empty.status_code == 400


def test_send_text(container, session_repository) -> None:
    session_repository.add("support")

    response = _client(container).post(
        "/message/support/send/text",
        json={"phone": "5511", "text": "hello"},
        headers=HEADERS,
    )

    data = response.json()["data"]
    assert response.status_code == 200
    assert data["chat_jid"] == "5511@s.whatsapp.net"
    assert data["message_id"] == "3EB0C767D26A"


def test_connect_and_status(container, session_repository, bridge_client) -> None:
    session = session_repository.add("support")
    client = _client(container)

    connected = client.post("/sessions/support/connect", headers=HEADERS)
    status = client.get("/sessions/support/status", headers=HEADERS)

    assert connected.status_code == 200
    assert connected.json()["data"] == {
        "session_id": session.id,
        "status": "connecting",
        "qr_code": "2@qr-payload",
    }
    data = status.json()["data"]
    assert data["session_status"] == "connecting"
    assert data["client_status"] == "disconnected"
    assert data["is_authenticated"] is False
    assert data["has_webhook"] is False


def test_qr_code_route(container, session_repository) -> None:
    session = session_repository.add("support")

    response = _client(container).get("/sessions/support/qr", headers=HEADERS)

    data = response.json()["data"]
    assert response.status_code == 200
    assert data["action"] == "qr"
    assert data["session_id"] == session.id
    assert data["qr_code"] == "2@qr-payload"


def test_connect_connected_session_is_409(container, session_repository) -> None:
    session_repository.add("support").status = "connected"

    response = _client(container).post("/sessions/support/connect", headers=HEADERS)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "SESSION_STATE_CONFLICT"


def test_pair_phone_route(container, session_repository) -> None:
    session_repository.add("support")
    client = _client(container)

    paired = client.post(
        "/sessions/support/pair", json={"phone": "5511999999999"}, headers=HEADERS
    )
    too_short = client.post(
        "/sessions/support/pair", json={"phone": "5511"}, headers=HEADERS
    )

    assert paired.json()["data"]["code"] == "ABCD-EFGH"
    assert too_short.status_code == 400
    assert too_short.json()["error"]["details"] == "phone"


def test_disconnect_and_logout(container, session_repository, bridge_client) -> None:
    session = session_repository.add("support")
    session.status = "connected"
    session.device_jid = "5511:1@s.whatsapp.net"
    client = _client(container)

    disconnected = client.post("/sessions/support/disconnect", headers=HEADERS)
    logged_out = client.post("/sessions/support/logout", headers=HEADERS)

    assert disconnected.json()["data"]["action"] == "disconnect"
    assert disconnected.json()["data"]["session"]["status"] == "disconnected"
    assert logged_out.json()["data"]["action"] == "logout"
    assert logged_out.json()["data"]["session"]["device_jid"] == ""
    assert [call[0] for call in bridge_client.calls] == [
        "disconnect_session",
        "logout_session",
    ]


def test_group_membership_routes(container, session_repository, bridge_client) -> None:
    session = session_repository.add("support")
    client = _client(container)

    joined = client.post(
        "/group/support/join",
        json={"invite_link": "https://chat.whatsapp.com/AbC123"},
        headers=HEADERS,
    )
    updated = client.post(
        "/group/support/participants/update",
        json={
            "group_jid": "1203@g.us",
            "action": "remove",
            "participants": ["5511@s.whatsapp.net"],
        },
        headers=HEADERS,
    )
    left = client.post(
        "/group/support/leave", json={"group_jid": "1203@g.us"}, headers=HEADERS
    )
    bad_action = client.post(
        "/group/support/participants/update",
        json={"group_jid": "1203@g.us", "action": "ban", "participants": ["x"]},
        headers=HEADERS,
    )

    assert joined.json()["data"]["jid"] == "1203@g.us"
    assert updated.json()["data"]["count"] == 1
    assert left.json()["data"] == {"session_id": session.id, "group_jid": "1203@g.us"}
    assert bad_action.status_code == 400
    assert bad_action.json()["error"]["details"] == "action"
