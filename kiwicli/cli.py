"""kiwi CLI application with Typer."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer

from kiwicli import __version__
from kiwicli.app.ports import Backend, Configuration, SubmissionResult
from kiwicli.app.submission_service import require_href, require_title
from kiwicli.bootstrap import bootstrap_application
from kiwicli.config import get_settings, set_settings
from kiwicli.errors import CredentialError, KiwiError

app = typer.Typer(
    name="kiwi",
    help="Submit and upvote links on Kiwi News with signed EIP-712 messages",
    add_completion=True,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"kiwicli version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@contextmanager
def report_errors() -> Iterator[None]:
    """Convert :class:`KiwiError` into a message on stderr and an exit code."""

    try:
        yield
    except CredentialError as exc:
        typer.secho(f"Error: {exc} [{exc.reason.value}]", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=exc.exit_code) from exc
    except KiwiError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=exc.exit_code) from exc


def _print_configuration(config: Configuration) -> None:
    typer.echo("Current Configuration:")
    typer.echo(f"  Backend: {config.backend.value}")
    typer.echo(f"  Hardware Index: {config.hardware_account_index}")
    typer.echo(f"  Endpoint: {config.endpoint}")
    typer.echo(f"  Keystore: {config.key_file_path}")


_FIELD_LABELS = {
    "endpoint": "Endpoint",
    "backend": "Backend",
    "key_file_path": "Keystore",
    "hardware_account_index": "Hardware Index",
}


def _report_delivery(endpoint: str, result: SubmissionResult) -> None:
    typer.secho(
        f"Delivered to {endpoint} (HTTP {result.status_code})",
        fg=typer.colors.GREEN,
    )
    typer.echo(result.body)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
    config_dir: Annotated[
        Path | None,
        typer.Option("--config-dir", help="Override config directory"),
    ] = None,
) -> None:
    """kiwi - sign and publish links to a Kiwi News node."""
    # Update settings with CLI flags
    settings = get_settings()
    if verbose:
        settings.verbose = True
    if config_dir:
        settings.config_dir = config_dir
    set_settings(settings)
    configure_logging(settings.verbose)


@app.command("config")
def config_command(
    show: Annotated[
        bool,
        typer.Option("--show", "-s", help="Show the current configuration"),
    ] = False,
    reset: Annotated[
        bool,
        typer.Option("--reset", "-r", help="Reset configuration to defaults"),
    ] = False,
    set_endpoint: Annotated[
        str | None,
        typer.Option("--set-endpoint", "-e", help="Node endpoint receiving messages"),
    ] = None,
    set_backend: Annotated[
        Backend | None,
        typer.Option("--set-backend", "-b", help="Signing backend: local keystore or hardware"),
    ] = None,
    set_keystore: Annotated[
        Path | None,
        typer.Option("--set-keystore", "-k", help="Path to the encrypted keystore file"),
    ] = None,
    set_hardware_index: Annotated[
        int | None,
        typer.Option(
            "--set-hardware-index",
            "-i",
            min=0,
            help="Account index on the hardware wallet (Ledger Live path)",
        ),
    ] = None,
) -> None:
    """Show or change persisted defaults."""

    container = bootstrap_application()
    service = container.config_service

    with report_errors():
        # Reset before loading so a corrupt file can be replaced.
        if reset:
            service.reset()
            typer.echo("Configuration reset to default")

        config = service.show()
        if show:
            _print_configuration(config)

        config, changed = service.update(
            endpoint=set_endpoint,
            backend=set_backend,
            key_file_path=set_keystore.expanduser() if set_keystore else None,
            hardware_account_index=set_hardware_index,
        )

    for name in changed:
        value = getattr(config, name)
        if isinstance(value, Backend):
            value = value.value
        typer.echo(f"Configuration updated -> {_FIELD_LABELS[name]}: {value}")


@app.command("submit")
def submit_command(
    href: Annotated[str | None, typer.Argument(help="URL of the link to submit")] = None,
    title: Annotated[str | None, typer.Argument(help="Title of the link")] = None,
    password: Annotated[
        str | None,
        typer.Argument(
            help="Keystore password (or set KIWI_KEYSTORE_PASSWORD)",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Submit a link with a title."""

    container = bootstrap_application()
    password = password or container.settings.get_keystore_password()

    with report_errors():
        # Reject bad arguments before the first run writes config.yaml.
        require_title(title)
        require_href(href)
        service = container.create_submission_service()
        result = service.submit(href, title, password)

    _report_delivery(service.config.endpoint, result)


@app.command("vote")
def vote_command(
    href: Annotated[str | None, typer.Argument(help="URL of the link to upvote")] = None,
    password: Annotated[
        str | None,
        typer.Argument(
            help="Keystore password (or set KIWI_KEYSTORE_PASSWORD)",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Upvote a link."""

    container = bootstrap_application()
    password = password or container.settings.get_keystore_password()

    with report_errors():
        require_href(href)
        service = container.create_submission_service()
        result = service.vote(href, password)

    _report_delivery(service.config.endpoint, result)


if __name__ == "__main__":
    app()
