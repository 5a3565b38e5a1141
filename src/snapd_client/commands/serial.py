"""Show the serial assertion of the device."""

import typer

from snapd_client.api import ClientError
from snapd_client.app_context import use_context


def serial(ctx: typer.Context, *, raw: bool = typer.Option(default=False, help="Print the assertion as sent by the daemon")) -> None:
    """Show the current serial assertion."""
    app = use_context(ctx)
    with app.client() as client:
        try:
            assertion = client.current_serial_assertion()
        except ClientError as e:
            app.out.print_error_and_exit(e.code, str(e))
    if raw:
        app.out.print_assertion_raw(assertion.encode())
    else:
        app.out.print_serial(assertion)
