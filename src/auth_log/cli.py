"""Command-line interface for auth-log.

This module provides Typer commands for writing a configuration file,
checking the configured location provider and running a login through
the pipeline.
"""

import json
import logging
from email.message import EmailMessage
from pathlib import Path
from typing import Optional

import click
import typer
import yaml

from auth_log import __version__
from auth_log.bootstrap import create_login_service
from auth_log.config import AuthLogConfig, GEOIP2, dump_config, load_config
from auth_log.exceptions import ConfigurationError
from auth_log.factories import InMemoryAuthenticationLogFactory
from auth_log.locate import build_resolver
from auth_log.schema import UserReference

# Create Typer app
app = typer.Typer(
    name="auth-log",
    help="Authentication log: login auditing and new-device notifications",
    add_completion=False,
)

PROVIDER_CHOICES = ["none", "geoip2", "ip_api"]


def setup_logging(debug: bool = False) -> None:
    """Configure logging.

    Args:
        debug: Enable debug level logging.
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load_or_exit(config_path: Optional[Path]) -> AuthLogConfig:
    try:
        return load_config(config_path)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


class _EchoTransport:
    """Prints notification emails instead of sending them."""

    def send_message(self, message: EmailMessage) -> None:
        typer.echo("")
        typer.echo(f"  To:      {message['To']}")
        typer.echo(f"  From:    {message['From']}")
        typer.echo(f"  Subject: {message['Subject']}")
        typer.echo("")
        typer.echo(message.get_content())


@app.command()
def configure(
    output: Path = typer.Option(
        Path("config/auth_log.yaml"),
        "--output", "-o",
        help="Where to write the YAML configuration",
    ),
) -> None:
    """Interactively create a configuration file."""
    typer.echo("")
    typer.echo("auth-log configuration")
    typer.echo("")

    sender_email = typer.prompt("Sender email address", default="no-reply@example.com")
    sender_name = typer.prompt("Sender name", default="Security")
    messenger = typer.confirm("Dispatch logins asynchronously (Celery)?", default=False)
    provider = typer.prompt(
        "Location provider",
        default="none",
        type=click.Choice(PROVIDER_CHOICES),
    )

    data: dict = {
        "messenger": messenger,
        "transports": {"sender_email": sender_email, "sender_name": sender_name},
    }
    if provider != "none":
        data["location"] = {"provider": provider}
        if provider == GEOIP2:
            data["location"]["geoip2_database_path"] = typer.prompt(
                "Path to the GeoIP2 City database (.mmdb)"
            )

    try:
        config = load_config(data)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        yaml.safe_dump(dump_config(config), sort_keys=False),
        encoding="utf-8",
    )

    typer.echo("")
    typer.echo(f"Configuration written to {output}")


@app.command()
def locate(
    ip: str = typer.Argument(..., help="IP address to resolve"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to the YAML configuration",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Resolve an IP address with the configured location provider."""
    setup_logging(debug)
    config = _load_or_exit(config_path)

    resolver = build_resolver(config.location)
    if resolver is None:
        typer.echo("No location provider configured.")
        raise typer.Exit(1)

    location = resolver.resolve(ip)
    if location is None:
        typer.echo(f"No location found for {ip}")
        return

    typer.echo(json.dumps(location.to_dict(), indent=2))


@app.command()
def demo(
    ip: str = typer.Option("203.0.113.5", "--ip", help="Client IP address"),
    user_agent: str = typer.Option(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0 Safari/537.36",
        "--user-agent",
        help="User-Agent header",
    ),
    email: str = typer.Option("alice@example.com", "--email", help="Notification address"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to the YAML configuration",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Run one login through the pipeline and print the results.

    The log entry is kept in memory and the notification is printed
    instead of being mailed.
    """
    setup_logging(debug)
    config = _load_or_exit(config_path)

    factory = InMemoryAuthenticationLogFactory("demo")
    service = create_login_service(config, [factory], transport=_EchoTransport())

    reference = UserReference(type="demo", id="alice")
    reference.set_notification_parameters(email, "Alice")
    service.execute("demo", reference, ip, user_agent)

    typer.echo("")
    typer.echo("Recorded authentication log:")
    typer.echo(factory.logs[-1].model_dump_json(indent=2))


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"auth-log v{__version__}")


if __name__ == "__main__":
    app()
