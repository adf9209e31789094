from __future__ import annotations

import json

import typer
from rich.console import Console

_err_console = Console(stderr=True)


def handle_error(ctx: typer.Context, e: Exception) -> None:
    """Print a clean error message and exit 1."""
    from pydantic import ValidationError
    from skudump.adapters import CatalogClientError
    from skudump.config import ConfigError

    verbose = ctx.obj.get("verbose", False) if ctx.obj else False
    json_mode = ctx.obj.get("json", False) if ctx.obj else False

    if isinstance(e, (ConfigError, CatalogClientError)):
        msg = str(e)
    elif isinstance(e, ValidationError):
        msg = f"Invalid SKU data: {e}"
    elif isinstance(e, ValueError):
        msg = f"Cannot serialize pricing data: {e}"
    elif isinstance(e, OSError):
        msg = f"Cannot write pricing file: {e}"
    else:
        msg = f"Error: {e}"

    if json_mode:
        print(json.dumps({"error": msg}))
    else:
        _err_console.print(f"[red]Error:[/red] {msg}")

    if verbose:
        _err_console.print_exception()

    raise typer.Exit(1)
