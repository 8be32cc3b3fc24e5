from typing import Any


class SetteeError(Exception):
    pass


class TransportError(SetteeError):
    """The HTTP exchange could not be completed (refused, DNS, timeout)."""


class ProtocolError(TransportError):
    """The server replied with something that is not valid HTTP."""


class ServerError(SetteeError):
    status: int | None
    error: str | None
    reason: str | None

    def __init__(
        self,
        status: int | None,
        error: str | None = None,
        reason: str | None = None,
    ):
        super().__init__(status, error, reason)
        self.status = status
        self.error = error
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.status} {self.error}: {self.reason}"

    def payload(self) -> dict[str, Any]:
        return {"error": self.error, "reason": self.reason}


class ConflictError(ServerError):
    pass


class NotFoundError(ServerError):
    pass


class SaveError(SetteeError):
    cause: Exception | None

    def __init__(self, message: str, cause: Exception | None = None):
        Exception.__init__(self, message)
        self.cause = cause


class SaveConflictError(SaveError, ConflictError):
    """A save was rejected because the document revision is stale.

    Catchable both as SaveError and as ConflictError. The caller is expected
    to reload the document, reapply its changes and save again.
    """

    def __init__(self, message: str, cause: ConflictError):
        SaveError.__init__(self, message, cause)
        self.status = cause.status
        self.error = cause.error
        self.reason = cause.reason

    def __str__(self) -> str:
        return Exception.__str__(self)


class InvalidArgumentError(SetteeError, ValueError):
    pass


class UnknownConnectionError(SetteeError, LookupError):
    pass
