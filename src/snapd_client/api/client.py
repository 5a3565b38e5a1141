"""Synchronous client for the daemon REST API."""

import logging
from collections.abc import Callable
from types import TracebackType

import httpx

from snapd_client.api.errors import DecodeError, RequestError
from snapd_client.api.protocol import (
    AsyncResponse,
    Change,
    Envelope,
    ErrorResponse,
    SyncResponse,
    decode_response,
    encode_remodel_request,
)
from snapd_client.asserts import Assertion, AssertionFormatError, Model, Serial, decode
from snapd_client.config import Config

logger = logging.getLogger(__name__)

MODEL_PATH = "/v2/model"
SERIAL_PATH = "/v2/model/serial"
CHANGES_PATH = "/v2/changes"

Decoder = Callable[[bytes], Assertion]


class Client:
    """Synchronous client that talks to the daemon over HTTP.

    Each call performs exactly one round trip without retries. Timeouts are
    left to the transport.

    Usage:
        with Client(Config.build()) as client:
            model = client.current_model_assertion()
    """

    def __init__(self, cfg: Config, transport: httpx.BaseTransport | None = None, decoder: Decoder = decode) -> None:
        """Initialize client with configuration.

        Args:
            cfg: Client configuration (provides socket path, base URL and timeout).
            transport: HTTP transport; defaults to the daemon's Unix socket.
            decoder: Assertion decoder applied to raw assertion bodies.

        """
        self._cfg = cfg
        self._decoder = decoder
        if transport is None:
            transport = httpx.HTTPTransport(uds=str(cfg.socket_path))
        self._http = httpx.Client(transport=transport, base_url=cfg.base_url, timeout=cfg.timeout)

    def __enter__(self) -> "Client":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

    def raw(self, method: str, path: str, *, content: bytes | None = None, headers: dict[str, str] | None = None) -> httpx.Response:
        """Send a request and return the HTTP response as-is.

        Raises:
            RequestError: The transport failed; its exception is chained.

        """
        logger.debug("Request: %s %s", method, path)
        try:
            response = self._http.request(method, path, content=content, headers=headers)
        except Exception as e:  # noqa: BLE001  # transport boundary: any failure here is a failed request
            logger.debug("Request failed: %s %s: %s", method, path, e)
            msg = f"cannot communicate with server: {e}"
            raise RequestError(msg) from e
        logger.debug("Response: %s %s -> %d", method, path, response.status_code)
        return response

    def do(self, method: str, path: str, *, content: bytes | None = None, headers: dict[str, str] | None = None) -> Envelope:
        """Send a request and decode the JSON envelope of the response.

        Raises:
            RequestError: The transport failed.
            APIError: The daemon answered with an error envelope.
            DecodeError: The response body is not a valid envelope.

        """
        envelope = decode_response(self.raw(method, path, content=content, headers=headers).content)
        if isinstance(envelope, ErrorResponse):
            raise envelope.to_error()
        return envelope

    def do_sync(self, method: str, path: str) -> object:
        """Send a request expecting a sync envelope and return its result."""
        envelope = self.do(method, path)
        if not isinstance(envelope, SyncResponse):
            msg = f"expected sync response from {method} on {path}, got async"
            raise DecodeError(msg)
        return envelope.result

    def do_async(self, method: str, path: str, *, content: bytes | None = None, headers: dict[str, str] | None = None) -> str:
        """Send a request expecting an async envelope and return its change id."""
        envelope = self.do(method, path, content=content, headers=headers)
        if not isinstance(envelope, AsyncResponse):
            msg = f"expected async response from {method} on {path}, got sync"
            raise DecodeError(msg)
        if not envelope.change:
            msg = "async response without change reference"
            raise DecodeError(msg)
        return envelope.change

    # --- Model ---

    def remodel(self, new_model: bytes | str) -> str:
        """Ask the daemon to remodel the device; return the change id."""
        return self.do_async(
            "POST", MODEL_PATH, content=encode_remodel_request(new_model), headers={"Content-Type": "application/json"}
        )

    def current_model_assertion(self) -> Model:
        """Fetch the model assertion the device currently runs with."""
        assertion = self._current_assertion(MODEL_PATH)
        if not isinstance(assertion, Model):
            msg = f"unexpected assertion type ({assertion.type}) returned"
            raise DecodeError(msg)
        return assertion

    def current_serial_assertion(self) -> Serial:
        """Fetch the serial assertion issued to the device."""
        assertion = self._current_assertion(SERIAL_PATH)
        if not isinstance(assertion, Serial):
            msg = f"unexpected assertion type ({assertion.type}) returned"
            raise DecodeError(msg)
        return assertion

    # --- Changes ---

    def change(self, change_id: str) -> Change:
        """Fetch the current state of an asynchronous change."""
        return Change.from_result(self.do_sync("GET", f"{CHANGES_PATH}/{change_id}"))

    def _current_assertion(self, path: str) -> Assertion:
        """Fetch a raw assertion body and decode it. Only a single assertion is ever returned."""
        try:
            response = self.raw("GET", path)
        except RequestError as e:
            msg = f"failed to query current assertion: {e}"
            raise RequestError(msg) from e.unwrap()

        if response.status_code != httpx.codes.OK:
            envelope = decode_response(response.content)
            if isinstance(envelope, ErrorResponse):
                raise envelope.to_error()
            msg = f"unexpected status {response.status_code} from GET on {path}"
            raise DecodeError(msg)

        try:
            return self._decoder(response.content)
        except AssertionFormatError as e:
            msg = f"failed to decode assertions: {e}"
            raise DecodeError(msg) from e
