"""Start a remodel to a new model assertion."""

from pathlib import Path

import typer

from snapd_client.api import ClientError
from snapd_client.app_context import use_context


def remodel(ctx: typer.Context, new_model: Path = typer.Argument(help="File holding the new model assertion")) -> None:
    """Remodel the device; prints the id of the started change."""
    app = use_context(ctx)
    try:
        data = new_model.read_bytes()
    except OSError as e:
        app.out.print_error_and_exit("read_failed", f"Cannot read {new_model}: {e.strerror}")
    with app.client() as client:
        try:
            change_id = client.remodel(data)
        except ClientError as e:
            app.out.print_error_and_exit(e.code, str(e))
    app.out.print_change_id(change_id)
