"""Dump regional SKU pricing from the Cloud Billing Catalog to a JSON file."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from skudump.adapters.gcp import SERVICE_IDS, CloudCatalogClient
from skudump.config import DEFAULT_CONFIG_PATH, DEFAULT_REGION, ConfigError, load_region_config
from skudump.pipeline import DEFAULT_SERVICE_DELAY, fetch_pricing, write_pricing

from skudump_cli import __version__
from skudump_cli.utils import handle_error

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        print(f"skudump {__version__}")
        raise typer.Exit()


def dump(
    ctx: typer.Context,
    region: Annotated[
        str,
        typer.Option("--region", "-region", "-r", help="Google Cloud region to fetch pricing for"),
    ] = DEFAULT_REGION,
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Region definitions file"),
    ] = DEFAULT_CONFIG_PATH,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory to write the pricing file to"),
    ] = Path("."),
    delay: Annotated[
        float,
        typer.Option("--delay", help="Seconds to wait between services (rate limit)"),
    ] = DEFAULT_SERVICE_DELAY,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output")] = False,
    json_output: Annotated[bool, typer.Option("--json", help="Print a JSON summary")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", "-V", help="Show version", callback=_version_callback, is_eager=True),
    ] = False,
) -> None:
    """Fetch SKUs for the configured services and save the region's pricing as JSON.

    Requires a Cloud Billing API key in the API_KEY environment variable.
    """
    ctx.obj = {"verbose": verbose, "json": json_output}
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        api_key = os.environ.get("API_KEY", "")
        if not api_key:
            raise ConfigError("API_KEY environment variable not set.")

        load_region_config(config, region)
        client = CloudCatalogClient(api_key)

        def _on_service(service_id: str) -> None:
            if not json_output:
                name = SERVICE_IDS.get(service_id, "")
                label = f"{service_id} ({name})" if name else service_id
                console.print(f"Fetching SKUs for service: {label}")

        if not json_output:
            console.print(f"Fetching pricing for region: [bold]{region}[/bold]")

        summary = fetch_pricing(client, region, delay=delay, on_service=_on_service)
        path = write_pricing(summary.records, region, output_dir)

        if json_output:
            data = {
                "region": region,
                "file": str(path),
                "total": summary.total,
                "services": summary.counts,
                "errors": summary.errors,
            }
            print(json.dumps(data, indent=2))
            return

        console.print(f"\nPricing information saved to [bold]{path}[/bold]")
        console.print(f"Found {summary.total} SKUs for region {region}")
        if summary.errors:
            console.print(f"[yellow]{len(summary.errors)} fetch error(s) skipped.[/yellow]")

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(ctx, e)
