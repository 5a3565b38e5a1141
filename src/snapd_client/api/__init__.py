"""Daemon REST API: client, response envelopes, and errors."""

from snapd_client.api.client import Client as Client
from snapd_client.api.errors import APIError as APIError
from snapd_client.api.errors import ClientError as ClientError
from snapd_client.api.errors import DecodeError as DecodeError
from snapd_client.api.errors import RequestError as RequestError
from snapd_client.api.errors import Wrapper as Wrapper
from snapd_client.api.protocol import Change as Change
