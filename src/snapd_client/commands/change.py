"""Show the state of a change."""

import typer

from snapd_client.api import ClientError
from snapd_client.app_context import use_context


def change(ctx: typer.Context, change_id: str = typer.Argument(metavar="ID", help="Change id")) -> None:
    """Show the state of an asynchronous change."""
    app = use_context(ctx)
    with app.client() as client:
        try:
            result = client.change(change_id)
        except ClientError as e:
            app.out.print_error_and_exit(e.code, str(e))
    app.out.print_change(result)
