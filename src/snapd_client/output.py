"""Structured output for CLI and JSON modes."""

# ruff: noqa: T201  # print() is how this output layer writes to the terminal.

import json
import sys
from typing import NoReturn

import typer

from snapd_client.api import Change
from snapd_client.asserts import Model, Serial


class Output:
    """Handles all CLI output in JSON or human-readable format."""

    def __init__(self, *, json_mode: bool) -> None:
        """Initialize output handler.

        Args:
            json_mode: If True, output JSON envelopes; otherwise human-readable text.

        """
        self._json_mode = json_mode

    def _success(self, data: dict[str, object], message: str) -> None:
        """Print a success result in JSON or human-readable format."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": data}))
        else:
            print(message)

    def print_error_and_exit(self, code: str, message: str) -> NoReturn:
        """Print an error in JSON or human-readable format and exit with code 1.

        Raises:
            typer.Exit: Always, with code 1.

        """
        if self._json_mode:
            print(json.dumps({"ok": False, "error": code, "message": message}))
        else:
            print(f"Error: {message}", file=sys.stderr)
        raise typer.Exit(code=1)

    # --- Assertions ---

    def print_assertion_raw(self, content: bytes) -> None:
        """Print the assertion exactly as the daemon sent it."""
        text = content.decode()
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"assertion": text}}))
        else:
            print(text, end="" if text.endswith("\n") else "\n")

    def print_model(self, model: Model) -> None:
        """Print the identifying headers of a model assertion."""
        self._success(
            {"brand-id": model.brand_id, "model": model.model, "series": model.series, "headers": model.headers},
            f"brand-id: {model.brand_id}\nmodel: {model.model}",
        )

    def print_serial(self, serial: Serial) -> None:
        """Print the identifying headers of a serial assertion."""
        self._success(
            {"brand-id": serial.brand_id, "model": serial.model, "serial": serial.serial, "headers": serial.headers},
            f"brand-id: {serial.brand_id}\nmodel: {serial.model}\nserial: {serial.serial}",
        )

    # --- Changes ---

    def print_change_id(self, change_id: str) -> None:
        """Print the id of a change started by the daemon."""
        self._success({"change": change_id}, change_id)

    def print_change(self, change: Change) -> None:
        """Print the state of a change."""
        message = f"{change.id} {change.status} {change.summary}".rstrip()
        if change.err:
            message += f"\n{change.err}"
        self._success(
            {
                "id": change.id,
                "kind": change.kind,
                "summary": change.summary,
                "status": change.status,
                "ready": change.ready,
                "err": change.err,
            },
            message,
        )
