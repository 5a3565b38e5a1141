"""Shared fixtures: canned daemon responses and a per-test fake daemon."""

from pathlib import Path

import httpx
import pytest

from snapd_client.api import Client
from snapd_client.config import Config

MODEL_ASSERTION = b"""type: model
authority-id: mememe
series: 16
brand-id: mememe
model: test-model
architecture: amd64
base: core18
gadget: pc=18
kernel: pc-kernel=18
required-snaps:
  - core
  - hello-world
timestamp: 2017-07-27T00:00:00.0Z
sign-key-sha3-384: 8B3Wmemeu3H6i4dEV4Q85Q4gIUCHIBCNMHq49e085QeLGHi7v27l3Cqmemer4__t

AcLBcwQAAQoAHRYhBMbX+t6MbKGH5C3nnLZW7+q0g6ELBQJdTdwTAAoJELZW7+q0g6ELEvgQAI3j
jXTqR6kKOqvw94pArwdMDUaZ++tebASAZgso8ejrW2DQGWSc0Q7SQICIR8bvHxqS1GtupQswOzwS
U8hjDTv7WEchH1jylyTj/1W1GernmitTKycecRlEkSOE+EpuqBFgTtj6PdA1Fj3CiCRi1rLMhgF2
luCOitBLaP+E8P3fuATsLqqDLYzt1VY4Y14MU75hMn+CxAQdnOZTI+NzGMasPsldmOYCPNaN/b3N
6/fDLU47RtNlMJ3K0Tz8kj0bqRbegKlD0RdNbAgo9iZwNmrr5E9WCu9f/0rUor/NIxO77H2ExIll
zhmsZ7E6qlxvAgBmzKgAXrn68gGrBkIb0eXKiCaKy/i2ApvjVZ9HkOzA6Ldd+SwNJv/iA8rdiMsq
p2BfKV5f3ju5b6+WktHxAakJ8iqQmj9Yh7piHjsOAUf1PEJd2s2nqQ+pEEn1F0B23gVCY/Fa9YRQ
iKtWVeL3rBw4dSAaK9rpTMqlNcr+yrdXfTK5YzkCC6RU4yzc5MW0hKeseeSiEDSaRYxvftjFfVNa
ZaVXKg8Lu+cHtCJDeYXEkPIDQzXswdBO1M8Mb9D0mYxQwHxwvsWv1DByB+Otq08EYgPh4kyHo7ag
85yK2e/NQ/fxSwQJMhBF74jM1z9arq6RMiE/KOleFAOraKn2hcROKnEeinABW+sOn6vNuMVv
"""

SERIAL_ASSERTION = b"""type: serial
authority-id: my-brand
brand-id: my-brand
model: my-old-model
serial: serialserial
device-key:
    AcZrBFaFwYABAvCgEOrrLA6FKcreHxCcOoTgBUZ+IRG7Nb8tzmEAklaQPGpv7skapUjwD1luE2go
    mTcoTssVHrfLpBoSDV1aBs44rg3NK40ZKPJP7d2zkds1GxUo1Ea5vfet3SJ4h3aRABEBAAE=
device-key-sha3-384: iqLo9doLzK8De9925UrdUyuvPbBad72OTWVE9YJXqd6nz9dKvwJ_lHP5bVxrl3VO
timestamp: 2019-08-26T16:34:21-05:00
sign-key-sha3-384: anCEGC2NYq7DzDEi6y7OafQCVeVLS90XlLt9PNjrRl9sim5rmRHDDNFNO7ODcWQW

AcJwBAABCgAGBQJdZFBdAADCLALwR6Sy24wm9PffwbvUhOEXneyY3BnxKC0+NgdHu1gU8go9vEP1
i+Flh5uoS70+MBIO+nmF8T+9JWIx2QWFDDxvcuFosnIhvUajCEQohauys5FMz/H/WvB0vrbTBpvK
eg=="""

NO_MODEL_ASSERTION_YET = b"""
{
    "type": "error",
    "status-code": 404,
    "status": "Not Found",
    "result": {
        "message": "no model assertion yet",
        "kind": "assertion-not-found",
        "value": "model"
    }
}"""

NO_SERIAL_ASSERTION_YET = b"""
{
    "type": "error",
    "status-code": 404,
    "status": "Not Found",
    "result": {
        "message": "no serial assertion yet",
        "kind": "assertion-not-found",
        "value": "serial"
    }
}"""


class FakeDaemon:
    """Stand-in for the daemon: answers with a canned response and records the last request."""

    def __init__(self) -> None:
        self.status = 200
        self.body = b""
        self.headers: dict[str, str] = {}
        self.error: Exception | None = None
        self.request: httpx.Request | None = None

    def respond(self, status: int, body: bytes, *, json_body: bool = False) -> None:
        """Set the canned response."""
        self.status = status
        self.body = body
        self.headers = {"Content-Type": "application/json"} if json_body else {}

    def handle(self, request: httpx.Request) -> httpx.Response:
        """MockTransport handler."""
        self.request = request
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status, content=self.body, headers=self.headers)

    def transport(self) -> httpx.MockTransport:
        """Transport routing every request to this fake."""
        return httpx.MockTransport(self.handle)


@pytest.fixture
def daemon() -> FakeDaemon:
    """Fresh fake daemon for each test."""
    return FakeDaemon()


@pytest.fixture
def cfg(tmp_path: Path) -> Config:
    """Configuration rooted in a temporary data directory."""
    return Config(data_dir=tmp_path)


@pytest.fixture
def client(cfg: Config, daemon: FakeDaemon) -> Client:
    """Client wired to the fake daemon."""
    return Client(cfg, transport=daemon.transport())


@pytest.fixture
def model_assertion() -> bytes:
    """Model assertion as served by GET /v2/model."""
    return MODEL_ASSERTION


@pytest.fixture
def serial_assertion() -> bytes:
    """Serial assertion as served by GET /v2/model/serial."""
    return SERIAL_ASSERTION


@pytest.fixture
def no_model_assertion_yet() -> bytes:
    """Error envelope for a device without a model assertion."""
    return NO_MODEL_ASSERTION_YET


@pytest.fixture
def no_serial_assertion_yet() -> bytes:
    """Error envelope for a device without a serial assertion."""
    return NO_SERIAL_ASSERTION_YET
