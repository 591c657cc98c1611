"""Typer CLI entrypoint."""

from __future__ import annotations

import logging

import typer

from btlockctl.core.errors import BtlockctlError
from btlockctl.core.service import LockService

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

app = typer.Typer(
    help="Disconnect matching Bluetooth devices when the screen locks and reconnect them on unlock",
    add_completion=False,
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("btlockctl").setLevel(level)


def _build_service() -> LockService:
    service = LockService()
    for warning in getattr(service, "runtime_warnings", ()):
        typer.echo(f"Warning: {warning}", err=True)
    return service


@app.command()
def watch(
    patterns: list[str] | None = typer.Argument(
        None,
        help="Device name substrings (case-sensitive). Merged with 'devices' from the settings file.",
        show_default=False,
    ),
) -> None:
    """Watch screen lock state and toggle matching paired devices."""
    try:
        service = _build_service()
        _configure_logging(service.settings.log_level)
        service.run(patterns or ())
    except BtlockctlError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
