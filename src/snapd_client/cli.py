"""CLI entry point for snapd-client."""

from pathlib import Path
from typing import Annotated

import typer
from mm_clikit import TyperPlus

from snapd_client.app_context import AppContext
from snapd_client.commands.change import change
from snapd_client.commands.model import model
from snapd_client.commands.remodel import remodel
from snapd_client.commands.serial import serial
from snapd_client.config import Config
from snapd_client.log import setup_logging
from snapd_client.output import Output

app = TyperPlus(package_name="snapd-client")


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path.")] = None,
    socket: Annotated[Path | None, typer.Option("--socket", help="Daemon socket path.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log requests to stderr.")] = False,
) -> None:
    """Query device identity assertions and remodel through the local daemon."""
    cfg = Config.build(data_dir, socket)
    cfg.data_dir.mkdir(parents=True, exist_ok=True)
    setup_logging(cfg.log_path, verbose=verbose)
    ctx.obj = AppContext(out=Output(json_mode=json_output), cfg=cfg)


# Assertions
app.command(aliases=["m"])(model)
app.command(aliases=["s"])(serial)

# Changes
app.command()(remodel)
app.command()(change)
