"""
Sync command for nexus-sync CLI.

This module provides the sync command, which mirrors new and changed artifacts
from a source repository to a destination repository.
"""

import logging
import sys
from typing import Any, Callable, Dict, Optional, TypeVar

import click

from ..api import NexusClient
from ..exceptions import ConfigurationError, NexusSyncError
from ..models.context import NexusEndpoint, SyncContext
from ..sync import CancelSignal, RunCoordinator, WorkerPool, write_results_json
from ..utils import create_session_with_retry, get_logger, setup_logging
from ..utils.config_manager import ConfigManager
from ..utils.constants import (
    DEFAULT_PASSWORD,
    DEFAULT_REPOSITORY,
    DEFAULT_TIMEOUT,
    DEFAULT_URL,
    DEFAULT_USER,
    EXIT_GENERAL_ERROR,
)
from ..utils.error_handling import handle_generic_error
from ..utils.signals import install_signal_handlers
from ..utils.validation import validate_sync_endpoints

F = TypeVar("F", bound=Callable[..., Any])

# Option suffix -> (NexusEndpoint field, built-in default)
ENDPOINT_FIELDS = {
    "url": ("url", DEFAULT_URL),
    "user": ("user", DEFAULT_USER),
    "pass": ("password", DEFAULT_PASSWORD),
    "repo": ("repository", DEFAULT_REPOSITORY),
}


# ============================================================================
# Endpoint Options
# ============================================================================


def endpoint_options(side: str, label: str) -> Callable[[F], F]:
    """
    Shared --<side>-url/-user/-pass/-repo options for one endpoint.

    Values default to None so that the config file can fill them in; built-in
    defaults are applied last by ``resolve_endpoint``.
    """
    helps = {
        "url": f"Nexus base URL of the {label} (default: {DEFAULT_URL})",
        "user": f"User name for the {label} (default: {DEFAULT_USER})",
        "pass": f"Password for the {label} (default: {DEFAULT_PASSWORD})",
        "repo": f"Repository name on the {label} (default: {DEFAULT_REPOSITORY})",
    }

    def decorator(f: F) -> F:
        for suffix in reversed(list(ENDPOINT_FIELDS)):
            f = click.option(f"--{side}-{suffix}", default=None, help=helps[suffix])(f)
        return f

    return decorator


def resolve_endpoint(flags: Dict[str, Optional[str]], config_values: Dict[str, str]) -> NexusEndpoint:
    """
    Resolve one endpoint from command line flags, config file values and defaults.

    Args:
        flags: Flag values keyed by option suffix (url, user, pass, repo)
        config_values: Values from the config file table keyed by endpoint field

    Returns:
        NexusEndpoint with every field set

    Example:
        >>> resolve_endpoint({"url": None, "user": "bob", "pass": None, "repo": None}, {"repository": "raw"})
        NexusEndpoint(url='http://localhost:8081', user='bob', repository='raw')
    """
    values = {}
    for suffix, (field, default) in ENDPOINT_FIELDS.items():
        flag_value = flags.get(suffix)
        if flag_value is not None:
            values[field] = flag_value
        else:
            values[field] = config_values.get(field, default)
    return NexusEndpoint(**values)


def build_sync_context(
    config: Optional[str],
    source_flags: Dict[str, Optional[str]],
    destination_flags: Dict[str, Optional[str]],
    logger: logging.Logger,
    **settings: Any,
) -> SyncContext:
    """
    Build the run context from the command line and the optional config file.

    Precedence is: command line flag, then the ``[from]``/``[to]`` table of the
    config file, then the built-in default.

    Args:
        config: Optional path to a TOML config file
        source_flags: ``--from-*`` flag values keyed by option suffix
        destination_flags: ``--to-*`` flag values keyed by option suffix
        logger: Logger for config loading diagnostics
        **settings: Remaining SyncContext fields (max_workers, timeout, ...)

    Returns:
        Validated SyncContext

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the config file or a resolved value is invalid
    """
    source_config: Dict[str, str] = {}
    destination_config: Dict[str, str] = {}
    if config:
        config_manager = ConfigManager(config, logger)
        source_config = config_manager.get_endpoint("from")
        destination_config = config_manager.get_endpoint("to")

    return SyncContext(
        source=resolve_endpoint(source_flags, source_config),
        destination=resolve_endpoint(destination_flags, destination_config),
        **settings,
    )


# ============================================================================
# Sync Command
# ============================================================================


@click.command()
@endpoint_options("from", "source")
@endpoint_options("to", "destination")
@click.option(
    "--insecure",
    is_flag=True,
    help="Skip TLS certificate verification on both endpoints",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT,
    help=f"Per-request timeout in seconds (default: {DEFAULT_TIMEOUT:g})",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Only list the items that would be transferred",
)
@click.option(
    "--results-json",
    type=click.Path(dir_okay=False),
    help="Write the run result to this JSON file",
)
@click.pass_context
def sync(  # pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-locals
    ctx: click.Context,
    from_url: Optional[str],
    from_user: Optional[str],
    from_pass: Optional[str],
    from_repo: Optional[str],
    to_url: Optional[str],
    to_user: Optional[str],
    to_pass: Optional[str],
    to_repo: Optional[str],
    insecure: bool,
    timeout: float,
    dry_run: bool,
    results_json: Optional[str],
) -> None:
    """Copy new and changed artifacts from one Nexus repository to another.

    Items are compared by path and SHA-1; items that only exist at the
    destination are left alone.
    """
    # Get shared options from context
    config = ctx.obj["config"]
    debug = ctx.obj["debug"]
    max_workers = ctx.obj["max_workers"]

    setup_logging(debug)
    logger = get_logger()

    try:
        context = build_sync_context(
            config,
            {"url": from_url, "user": from_user, "pass": from_pass, "repo": from_repo},
            {"url": to_url, "user": to_user, "pass": to_pass, "repo": to_repo},
            logger,
            max_workers=max_workers,
            timeout=timeout,
            verify_ssl=not insecure,
            dry_run=dry_run,
            results_json=results_json,
            debug=debug,
        )
        validate_sync_endpoints(context.source, context.destination)
    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        logger.error("Configuration error: %s", e)
        sys.exit(EXIT_GENERAL_ERROR)

    if not context.verify_ssl:
        logger.warning("TLS certificate verification is disabled")

    cancel = CancelSignal()
    session = create_session_with_retry(
        timeout=context.timeout,
        max_connections=context.max_workers * 2,
        verify=context.verify_ssl,
        logger=logger,
    )
    restore_signals = None

    try:
        source_client = NexusClient(context.source, logger.getChild("source"), session)
        destination_client = NexusClient(context.destination, logger.getChild("destination"), session)

        with WorkerPool(context.max_workers, logger.getChild("pool")) as pool:
            restore_signals = install_signal_handlers(cancel, logger)
            coordinator = RunCoordinator(
                context, pool, source_client, destination_client, logger.getChild("coordinator")
            )
            result = coordinator.run(cancel)

        if context.results_json:
            write_results_json(result, context.results_json, logger)

    except NexusSyncError as e:
        logger.error("Sync failed: %s", e)
        sys.exit(EXIT_GENERAL_ERROR)
    except Exception as e:
        handle_generic_error(e, "sync operation", logger)
        sys.exit(EXIT_GENERAL_ERROR)
    finally:
        if restore_signals is not None:
            restore_signals()
        session.close()
        logger.debug("HTTP session closed")

    # Per-item failures are reported but only a failed or cancelled run is an error
    if not result.ok:
        sys.exit(EXIT_GENERAL_ERROR)


__all__ = ["sync", "endpoint_options", "resolve_endpoint", "build_sync_context"]
