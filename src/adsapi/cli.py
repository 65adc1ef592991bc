"""CLI interface for adsapi"""

import logging
from pathlib import Path
from typing import Dict, NoReturn, Optional, Tuple

import click

from adsapi.application.client import Client
from adsapi.application.request import Request
from adsapi.domain.errors import AdsApiError, DomainError
from adsapi.domain.models.request_spec import HttpMethod
from adsapi.infrastructure.config.config_manager import ConfigManager

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger().setLevel(level)


def _die(message: str, verbose: bool = False, exc: Optional[Exception] = None) -> NoReturn:
    """Exit with a user-friendly error message"""
    if exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise click.ClickException(message)


def parse_params(values: Tuple[str, ...]) -> Dict[str, str]:
    """Parse repeated key=value options"""
    params = {}
    for value in values:
        key, sep, val = value.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {value!r}", param_hint="--param")
        params[key] = val
    return params


def parse_headers(values: Tuple[str, ...]) -> Dict[str, str]:
    """Parse repeated "Name: value" options"""
    headers = {}
    for value in values:
        name, sep, val = value.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected 'Name: value', got {value!r}", param_hint="--header")
        headers[name.strip()] = val.strip()
    return headers


def _build_client(
    config_manager: ConfigManager,
    sandbox: Optional[bool],
    trace: bool,
    retry_max: Optional[int],
    retry_delay: Optional[int],
    handle_rate_limit: bool,
) -> Client:
    """Create client from config with CLI overrides applied"""
    client_config = config_manager.get_client_config()
    retry_policy = config_manager.get_retry_policy()

    client_overrides = {}
    if sandbox is not None:
        client_overrides["sandbox"] = sandbox
    if trace:
        client_overrides["trace"] = True

    retry_overrides = {}
    if retry_max is not None:
        retry_overrides["retry_max"] = retry_max
    if retry_delay is not None:
        retry_overrides["retry_delay"] = retry_delay
    if handle_rate_limit:
        retry_overrides["handle_rate_limit"] = True

    return Client(
        credentials=config_manager.get_credentials(),
        options=client_config.model_copy(update=client_overrides),
        retry=retry_policy.model_copy(update=retry_overrides),
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to .adsapi.yml config file",
)
@click.pass_context
def cli(ctx, verbose: bool, config: Path):
    """adsapi - signed Ads API requests with retries"""
    ctx.ensure_object(dict)
    setup_logging(verbose)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument(
    "method", type=click.Choice([m.value for m in HttpMethod], case_sensitive=False)
)
@click.argument("resource", type=str)
@click.option("--param", "-p", "params", multiple=True, help="Query parameter as key=value (repeatable)")
@click.option("--header", "-H", "headers", multiple=True, help="Header as 'Name: value' (repeatable)")
@click.option("--body", type=str, help="Request body")
@click.option("--domain", type=str, help="Override the API domain")
@click.option("--sandbox/--production", default=None, help="Use the sandbox domain. Overrides config.")
@click.option("--trace", is_flag=True, help="Log every request and response")
@click.option("--retry-max", type=click.IntRange(min=0), help="Maximum status-driven retries")
@click.option("--retry-delay", type=click.IntRange(min=0), help="Delay between retries in milliseconds")
@click.option("--handle-rate-limit", is_flag=True, help="Wait for rate-limit reset on HTTP 429")
@click.pass_context
def request(
    ctx,
    method: str,
    resource: str,
    params: Tuple[str, ...],
    headers: Tuple[str, ...],
    body: Optional[str],
    domain: Optional[str],
    sandbox: Optional[bool],
    trace: bool,
    retry_max: Optional[int],
    retry_delay: Optional[int],
    handle_rate_limit: bool,
):
    """Perform a signed API request.

    METHOD: HTTP verb (GET, POST, PUT, DELETE)

    RESOURCE: Resource path, e.g. /12/accounts
    """
    verbose = ctx.obj.get("verbose", False)

    try:
        config_manager = ConfigManager(config_path=ctx.obj.get("config_path"))
        client = _build_client(config_manager, sandbox, trace, retry_max, retry_delay, handle_rate_limit)
        response = Request(
            client,
            method,
            resource,
            params=parse_params(params),
            body=body,
            headers=parse_headers(headers),
            domain=domain,
        ).perform()
    except click.ClickException:
        raise
    except DomainError as e:
        if e.body:
            click.echo(e.body, err=True)
        _die(str(e), verbose=verbose, exc=e)
    except AdsApiError as e:
        _die(str(e), verbose=verbose, exc=e)

    click.echo(f"{response.status_code} {response.reason}".strip())
    if response.body:
        click.echo(response.body)


def main():
    """Main entry point"""
    cli(obj={})


if __name__ == "__main__":
    main()
