"""CLI entry point: license-fetcher.

Usage:
    license-fetcher /path/to/solution                     # writes nuget_groups_for_import.xml
    license-fetcher . --owner alice -o report.xml
    license-fetcher . --format json -o -                  # JSON to stdout
    NUGET_API_URL=https://api.example.org license-fetcher .
"""

from __future__ import annotations

import os
import socket
from pathlib import Path

import click

from license_fetcher.core.logging import setup_logging
from license_fetcher.core.settings import (
    DEFAULT_API_URL,
    DEFAULT_CONCURRENCY,
    DEFAULT_TIMEOUT,
    RegistryUrls,
    Settings,
)
from license_fetcher.engines.license_resolver.pipeline import run
from license_fetcher.exceptions import DiscoveryError
from license_fetcher.report import render_fnci_report, render_json_report

_DEFAULT_OUTPUT = "nuget_groups_for_import.xml"
_LOG_FILE_NAME = "license_fetcher.log"


def _default_owner() -> str:
    return os.environ.get("USER") or os.environ.get("USERNAME") or "unknown"


@click.command()
@click.argument("project_path", type=click.Path(path_type=Path))
@click.option("--owner", default=_default_owner, show_default="$USER", help="Owner recorded on each group")
@click.option("-o", "--output", default=_DEFAULT_OUTPUT, show_default=True, help="Report path, '-' for stdout")
@click.option(
    "--format",
    "report_format",
    type=click.Choice(["fnci", "json"]),
    default="fnci",
    show_default=True,
    help="Report format",
)
@click.option("--api-url", envvar="NUGET_API_URL", default=DEFAULT_API_URL, show_default=True, help="Registry API base URL")
@click.option("--frontend-url", envvar="NUGET_FRONTEND_URL", default=None, help="Package page base URL (default: API URL with api→www)")
@click.option(
    "--concurrency",
    envvar="LICENSE_FETCHER_CONCURRENCY",
    type=click.IntRange(min=1),
    default=DEFAULT_CONCURRENCY,
    show_default=True,
    help="Max concurrent lookups",
)
@click.option(
    "--timeout",
    envvar="LICENSE_FETCHER_TIMEOUT",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Per-request timeout (seconds)",
)
@click.option("--log-dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Write warnings to <log-dir>/license_fetcher.log")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    project_path: Path,
    owner: str,
    output: str,
    report_format: str,
    api_url: str,
    frontend_url: str | None,
    concurrency: int,
    timeout: float,
    log_dir: Path | None,
    verbose: bool,
) -> None:
    """Resolve license metadata for every NuGet package under PROJECT_PATH."""
    setup_logging(
        level="DEBUG" if verbose else None,
        log_file=log_dir / _LOG_FILE_NAME if log_dir else None,
    )

    settings = Settings(
        urls=RegistryUrls.for_api(api_url, frontend_url),
        concurrency=concurrency,
        timeout=timeout,
    )

    try:
        dependencies = run(project_path, settings)
    except DiscoveryError as exc:
        raise click.ClickException(str(exc)) from exc

    if report_format == "json":
        report = render_json_report(dependencies)
    else:
        report = render_fnci_report(dependencies, owner=owner, hostname=socket.gethostname())

    if output == "-":
        click.echo(report, nl=False)
    else:
        try:
            Path(output).write_text(report, encoding="utf-8")
        except OSError as exc:
            raise click.ClickException(f"cannot write report to {output}: {exc}") from exc
        click.echo(f"Report written to {output}", err=True)

    unique = dependencies.deduplicated()
    unresolved = sum(1 for d in unique if not d.resolved)
    click.echo(
        f"{len(unique)} unique dependencies in {len(dependencies.manifests())} manifest(s), "
        f"{unresolved} with unknown license",
        err=True,
    )


if __name__ == "__main__":
    main()
