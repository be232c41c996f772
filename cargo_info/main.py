"""Command-line entry point for cargo-info."""

import logging
import sys
from collections.abc import Iterable

import click

from .config import setup_logging
from .config_manager import ConfigManager
from .registry_client import RegistryClient, RegistryError
from .report import Reporter, ReportRequest

logger = logging.getLogger(__name__)


def run(names: Iterable[str], request: ReportRequest, client: RegistryClient) -> bool:
    """Look up and report every crate in turn.

    A failed lookup is reported and the remaining names are still processed.

    Returns:
        True if every crate was fetched successfully
    """
    reporter = Reporter(request)
    all_successful = True

    for name in names:
        try:
            outcome = client.fetch(name)
        except RegistryError as e:
            outcome = e

        if not reporter.report(name, outcome):
            all_successful = False

    return all_successful


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="cargo-info")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Diagnostic log level (logs go to stderr)",
)
@click.pass_context
def main(ctx: click.Context, config_path: str | None, log_level: str | None):
    """Query crates.io registry for crates details."""
    try:
        config = ConfigManager(config_path).load(log_level=log_level)
    except FileNotFoundError as e:
        raise click.FileError(str(e.filename or config_path), hint=str(e)) from e
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    setup_logging(config.log_level)
    logger.debug(f"Using configuration: {config}")
    ctx.obj = config


@main.command()
@click.option("-d", "--documentation", is_flag=True, help="Report documentation URL")
@click.option("-D", "--downloads", is_flag=True, help="Report number of crate downloads")
@click.option("-H", "--homepage", is_flag=True, help="Report home page URL")
@click.option("-r", "--repository", is_flag=True, help="Report crate repository URL")
@click.option("-j", "--json", "raw_json", is_flag=True, help="Report raw JSON data from crates.io")
@click.option("-k", "--keywords", is_flag=True, help="Report crate keywords")
@click.option("-v", "--verbose", is_flag=True, help="Report more details")
@click.option(
    "-V",
    "--versions",
    count=True,
    help="Report version history of the crate (5 last versions), twice for full history",
)
@click.argument("crates", metavar="CRATE...", nargs=-1, required=True)
@click.pass_obj
def info(config, documentation, downloads, homepage, repository, raw_json, keywords, verbose, versions, crates):
    """Show registry details for one or more crates."""
    try:
        request = ReportRequest.from_options(
            repository=repository,
            documentation=documentation,
            downloads=downloads,
            homepage=homepage,
            verbose=verbose,
            raw_json=raw_json,
            versions=versions,
            keywords=keywords,
        )
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    client = RegistryClient(
        base_url=config.registry_url,
        timeout=config.timeout,
        user_agent=config.user_agent,
    )

    if not run(crates, request, client):
        sys.exit(1)


if __name__ == "__main__":
    main()
