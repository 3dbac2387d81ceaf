"""Error types shared by the session core and its orchestrators."""


class GatewayError(Exception):
    """Base class for errors raised by the gateway core."""


class SessionNotFoundError(GatewayError):
    """No session matches the requested id or name."""

    def __init__(self, key: str) -> None:
        super().__init__(f"session not found: {key}")
        self.key = key


class ValidationError(GatewayError):
    """Caller input rejected before any collaborator call."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class OperationError(GatewayError):
    """A repository or capability port call failed."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"failed to {operation}: {cause}")
        self.operation = operation
        self.cause = cause


class FeatureNotImplementedError(GatewayError):
    """The requested lookup has no backing implementation."""

    def __init__(self, feature: str) -> None:
        super().__init__(f"{feature} not implemented")
        self.feature = feature


class SessionStateError(GatewayError):
    """The session's current status does not allow the requested action."""

    def __init__(self, session_id: str, status: str, action: str) -> None:
        super().__init__(f"session {session_id} cannot {action} from status {status}")
        self.session_id = session_id
        self.status = status
        self.action = action
