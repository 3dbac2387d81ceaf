"""Response envelopes shared by every route."""

from dataclasses import asdict, dataclass, is_dataclass
from datetime import UTC, datetime

from wa_gateway.api.models import SessionInfo


def _now_iso() -> str:
    return datetime.now(tz=UTC).isoformat()


def success_response(data: object, code: int = 200) -> dict[str, object]:
    """Wrap a payload in the success envelope."""
    if is_dataclass(data) and not isinstance(data, type):
        data = asdict(data)
    return {"success": True, "code": code, "data": data, "timestamp": _now_iso()}


def error_response(
    code: int, error_code: str, message: str, details: str | None = None
) -> dict[str, object]:
    """Build the error envelope."""
    error: dict[str, object] = {"code": error_code, "message": message}
    if details:
        error["details"] = details
    return {"success": False, "code": code, "error": error, "timestamp": _now_iso()}


@dataclass(frozen=True)
class SingleSession:
    session: SessionInfo

    def fields(self) -> dict[str, object]:
        return {"session": self.session.model_dump(mode="json")}


@dataclass(frozen=True)
class SessionList:
    sessions: list[SessionInfo]

    def fields(self) -> dict[str, object]:
        return {
            "sessions": [session.model_dump(mode="json") for session in self.sessions]
        }


@dataclass(frozen=True)
class QRCode:
    code: str

    def fields(self) -> dict[str, object]:
        return {"qr_code": self.code}


SessionPayload = SingleSession | SessionList | QRCode


def session_response(
    session_id: str, action: str, payload: SessionPayload, code: int = 200
) -> dict[str, object]:
    """Build the session envelope; the payload variant picks the data key."""
    data: dict[str, object] = {
        "session_id": session_id,
        "action": action,
        "status": "success",
        "timestamp": _now_iso(),
    }
    data.update(payload.fields())
    return {"success": True, "code": code, "data": data, "timestamp": _now_iso()}
