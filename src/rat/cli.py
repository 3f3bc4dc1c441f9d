"""
Click CLI implementation for rat.

Each supported provider gets a command group with an ``auth`` command
that runs the OAuth authorization code flow and prints the configuration
lines for the received token:

    rat centerdevice auth --browser
    rat pocket auth
    rat slack auth
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from .config import RatConfig
from .console import Console
from .oauth import (
    AuthError,
    ConfigurationError,
    HttpExchange,
    OAuthDriver,
    OutputMode,
)
from .providers import PROVIDERS, Provider

logger = logging.getLogger(__name__)

EXIT_AUTH_FAILED = 1
EXIT_CONFIG_ERROR = 2


@dataclass
class CLIContext:
    """Context object passed to all CLI commands.

    Attributes:
        config: Loaded configuration
        console: Terminal console for operator interaction
        output_mode: Whether raw token responses are echoed
    """

    config: RatConfig
    console: Console
    output_mode: OutputMode


@click.group()
@click.option(
    "--config-file",
    type=click.Path(dir_okay=False),
    envvar="RAT_CONFIG",
    help="Path to configuration file (default: ~/.rat/config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Only print results")
@click.option(
    "--output-format",
    type=click.Choice(["human", "json"], case_sensitive=False),
    default=None,
    help="Output format; json echoes raw provider responses",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: Optional[str],
    verbose: bool,
    quiet: bool,
    output_format: Optional[str],
) -> None:
    """
    rat - authenticate with third-party services from the terminal.

    Runs the OAuth authorization code flow and prints the access token
    to add to your configuration.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = RatConfig.load_from_file(Path(config_file) if config_file else None)
    except ConfigurationError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        ctx.exit(EXIT_CONFIG_ERROR)

    # Apply command-line overrides
    if output_format:
        config.general.output_format = output_format.lower()
    if verbose:
        config.general.verbosity = "verbose"
    elif quiet:
        config.general.verbosity = "quiet"

    ctx.obj = CLIContext(
        config=config,
        console=Console(verbosity=config.general.verbosity),
        output_mode=config.general.output_mode,
    )


def run_auth(cli_ctx: CLIContext, provider: Provider, open_browser: bool) -> int:
    """
    Authenticate with a provider and print the resulting configuration.

    Args:
        cli_ctx: CLI context
        provider: Provider to authenticate with
        open_browser: Open the authorization page in the default browser

    Returns:
        Exit code (0 for success)
    """
    console = cli_ctx.console

    try:
        credentials = cli_ctx.config.credentials(provider.name)
        provider_config = provider.provider_config(
            credentials.client_id, credentials.client_secret, open_browser=open_browser
        )
    except ConfigurationError as e:
        console.error(str(e))
        return EXIT_CONFIG_ERROR

    driver = OAuthDriver.create(console, console, HttpExchange())

    console.info(f"Authenticating with {provider.title} ...")
    try:
        token = driver.authenticate(
            provider_config,
            provider.scheme,
            provider.token_type,
            extra_params=provider.extra_params,
            output_mode=cli_ctx.output_mode,
        )
    except AuthError as e:
        stage = e.stage.value if e.stage is not None else "unknown"
        console.error(
            f"Failed to authenticate with {provider.title} at stage '{stage}': {e}"
        )
        return EXIT_AUTH_FAILED

    console.show(
        f"{provider.summary(token)} Please add the following lines to your "
        f"configuration, section '{provider.name}'."
    )
    console.show("")
    for line in provider.config_lines(token):
        console.show(line)
    console.show("")
    return 0


def build_provider_group(provider: Provider) -> click.Group:
    """Build the command group for one provider."""

    @click.group(name=provider.name, help=f"{provider.title} commands.")
    def group() -> None:
        pass

    @group.command(name="auth")
    @click.option(
        "--browser",
        is_flag=True,
        help="Open authentication page in default web browser",
    )
    @click.pass_context
    def auth(ctx: click.Context, browser: bool) -> None:
        """Runs authentication process to generate access token."""
        exit_code = run_auth(ctx.obj, provider, browser)
        if exit_code:
            ctx.exit(exit_code)

    return group


for _provider in PROVIDERS.values():
    cli.add_command(build_provider_group(_provider))


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
