"""Show the model assertion of the device."""

import typer

from snapd_client.api import ClientError
from snapd_client.app_context import use_context


def model(ctx: typer.Context, *, raw: bool = typer.Option(default=False, help="Print the assertion as sent by the daemon")) -> None:
    """Show the current model assertion."""
    app = use_context(ctx)
    with app.client() as client:
        try:
            assertion = client.current_model_assertion()
        except ClientError as e:
            app.out.print_error_and_exit(e.code, str(e))
    if raw:
        app.out.print_assertion_raw(assertion.encode())
    else:
        app.out.print_model(assertion)
