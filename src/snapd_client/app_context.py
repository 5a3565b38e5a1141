"""Application context shared across CLI commands."""

from dataclasses import dataclass

import typer

from snapd_client.api import Client
from snapd_client.config import Config
from snapd_client.output import Output


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared application state passed through Typer context."""

    out: Output
    cfg: Config

    def client(self) -> Client:
        """Build a daemon client for the configured socket."""
        return Client(self.cfg)


def use_context(ctx: typer.Context) -> AppContext:
    """Extract application context from Typer context."""
    result: AppContext = ctx.obj
    return result
