"""Response envelopes of the daemon REST API.

Every JSON response is wrapped in an envelope discriminated by "type":

Sync:   {"type": "sync", "status-code": 200, "status": "OK", "result": {...}}
Async:  {"type": "async", "status-code": 202, "status": "Accepted", "result": {}, "change": "d728"}
Error:  {"type": "error", "status-code": 404, "status": "Not Found",
         "result": {"message": "no model assertion yet", "kind": "assertion-not-found", "value": "model"}}
"""

import json
from dataclasses import dataclass

from snapd_client.api.errors import APIError, DecodeError


@dataclass(frozen=True)
class SyncResponse:
    """Synchronous result."""

    status_code: int
    status: str = ""
    result: object = None


@dataclass(frozen=True)
class AsyncResponse:
    """Accepted asynchronous operation, tracked by a change id."""

    status_code: int
    change: str
    status: str = ""
    result: object = None


@dataclass(frozen=True)
class ErrorResponse:
    """Daemon-reported failure."""

    status_code: int
    status: str = ""
    message: str = ""
    kind: str = ""
    value: object = None

    def to_error(self) -> APIError:
        """Build the exception surfaced to callers."""
        return APIError(status_code=self.status_code, status=self.status, message=self.message, kind=self.kind, value=self.value)


Envelope = SyncResponse | AsyncResponse | ErrorResponse


@dataclass(frozen=True)
class Change:
    """State of an asynchronous operation as reported by /v2/changes/{id}."""

    id: str
    kind: str = ""
    summary: str = ""
    status: str = ""
    ready: bool = False
    err: str = ""
    spawn_time: str = ""
    ready_time: str = ""

    @staticmethod
    def from_result(result: object) -> "Change":
        """Build a Change from the result of a sync envelope.

        Raises:
            DecodeError: Result is not a change object.

        """
        if not isinstance(result, dict) or not isinstance(result.get("id"), str):
            msg = "cannot decode change: missing id"
            raise DecodeError(msg)
        return Change(
            id=result["id"],
            kind=result.get("kind", ""),
            summary=result.get("summary", ""),
            status=result.get("status", ""),
            ready=bool(result.get("ready", False)),
            err=result.get("err", ""),
            spawn_time=result.get("spawn-time", ""),
            ready_time=result.get("ready-time", ""),
        )


def encode_remodel_request(new_model: bytes | str) -> bytes:
    """Serialize the remodel request body.

    The new model is passed through as a JSON string value without validation;
    bytes that are not valid UTF-8 are replaced with U+FFFD.
    """
    if isinstance(new_model, bytes):
        new_model = new_model.decode(errors="replace")
    return json.dumps({"new-model": new_model}).encode()


def decode_response(data: bytes) -> Envelope:
    """Deserialize a JSON body into an envelope, dispatching on its "type" field.

    Raises:
        DecodeError: Body is not JSON, not an object, or has an unknown type.

    """
    try:
        obj = json.loads(data)
    except ValueError as e:
        msg = f"cannot decode response: {e}"
        raise DecodeError(msg) from e
    if not isinstance(obj, dict):
        msg = "cannot decode response: expected a JSON object"
        raise DecodeError(msg)

    status_code = obj.get("status-code", 0)
    status = obj.get("status", "")
    result = obj.get("result")
    match obj.get("type"):
        case "sync":
            return SyncResponse(status_code=status_code, status=status, result=result)
        case "async":
            change = obj.get("change")
            return AsyncResponse(status_code=status_code, status=status, result=result, change=change if isinstance(change, str) else "")
        case "error":
            if not isinstance(result, dict):
                result = {}
            return ErrorResponse(
                status_code=status_code,
                status=status,
                message=result.get("message", ""),
                kind=result.get("kind", ""),
                value=result.get("value"),
            )
        case other:
            msg = f"cannot decode response: unknown response type {other!r}"
            raise DecodeError(msg)
