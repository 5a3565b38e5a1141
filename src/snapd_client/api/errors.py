"""Client error taxonomy: transport failures, daemon errors, undecodable responses."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Wrapper(Protocol):
    """An error that wraps an underlying cause."""

    def unwrap(self) -> BaseException | None:
        """Return the wrapped exception."""
        ...


class ClientError(Exception):
    """Base error raised by client operations."""

    def __init__(self, code: str, message: str) -> None:
        """Initialize with a machine-readable code and a human-readable message.

        Args:
            code: Machine-readable error code (e.g. "request_failed").
            message: Human-readable error description.

        """
        super().__init__(message)
        self.code = code

    @property
    def message(self) -> str:
        """Human-readable error description."""
        return str(self)


class RequestError(ClientError):
    """The request never got a response, e.g. the daemon socket refused the connection.

    Always raised with ``from``, so the transport exception stays reachable
    through ``unwrap()`` and ``__cause__``.
    """

    def __init__(self, message: str) -> None:
        """Initialize with a description of the failed request."""
        super().__init__("request_failed", message)

    def unwrap(self) -> BaseException | None:
        """Return the transport exception this error was raised from."""
        return self.__cause__


class APIError(ClientError):
    """The daemon answered with an error envelope."""

    def __init__(self, *, status_code: int, status: str = "", message: str = "", kind: str = "", value: object = None) -> None:
        """Initialize from the fields of an error envelope.

        Args:
            status_code: HTTP status code carried by the envelope.
            status: HTTP status text (e.g. "Not Found").
            message: Daemon-provided message, surfaced verbatim.
            kind: Daemon error kind (e.g. "assertion-not-found").
            value: Kind-specific value (e.g. "model").

        """
        super().__init__(kind or "api_error", message or f'server error: "{status}"')
        self.status_code = status_code
        self.status = status
        self.kind = kind
        self.value = value


class DecodeError(ClientError):
    """The response arrived but its body could not be understood."""

    def __init__(self, message: str) -> None:
        """Initialize with a description of what failed to decode."""
        super().__init__("decode_failed", message)
