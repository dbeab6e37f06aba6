"""
Command-line interface for building the Tyk extension of OpenAPI documents.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
import yaml

from .exceptions import TykExtensionError
from .models import TykExtensionConfigParams
from .oas import OAS
from .params import get_extension_overrides

app = typer.Typer(help="Build the Tyk gateway extension of OpenAPI documents")


@app.callback()
def callback() -> None:
    """Build the Tyk gateway extension of OpenAPI documents."""


def _load_oas(path: Path) -> OAS:
    """Load an OpenAPI document.

    Args:
        path: Path to the YAML or JSON file

    Returns:
        The loaded document

    Raises:
        typer.Exit: If the file cannot be loaded
    """
    try:
        return OAS.from_yaml(path)
    except (OSError, yaml.YAMLError) as e:
        typer.echo(f"Error loading {path}: {str(e)}", err=True)
        raise typer.Exit(1)


def _save_oas(oas: OAS, path: Path) -> None:
    """Save an OpenAPI document.

    Raises:
        typer.Exit: If the file cannot be saved
    """
    try:
        oas.save_yaml(path)
    except OSError as e:
        typer.echo(f"Error saving to {path}: {str(e)}", err=True)
        raise typer.Exit(1)


@app.command()
def build(
    input_file: Path = typer.Argument(..., help="Path to the input OpenAPI spec"),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Path to save the result. If not provided, will use input filename with .tyk.yaml suffix",
    ),
    listen_path: str = typer.Option("", help="Listen path of the API"),
    upstream_url: str = typer.Option("", help="Absolute URL of the upstream"),
    custom_domain: str = typer.Option("", help="Custom domain of the API"),
    authentication: Optional[bool] = typer.Option(
        None, help="Import authentication from the document's security"
    ),
    allow_list: Optional[bool] = typer.Option(
        None, help="Allow list every operation"
    ),
    validate_request: Optional[bool] = typer.Option(
        None, help="Validate JSON request bodies"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Build or refresh the x-tyk-api-gateway extension of an OpenAPI spec."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not input_file.exists():
        typer.echo(f"Input file not found: {input_file}", err=True)
        raise typer.Exit(1)

    if output_file is None:
        output_file = input_file.parent / f"{input_file.stem}.tyk.yaml"

    params = {
        "listenPath": listen_path,
        "upstreamURL": upstream_url,
        "customDomain": custom_domain,
    }
    if allow_list is not None:
        params["allowList"] = str(allow_list).lower()
    if validate_request is not None:
        params["validateRequest"] = str(validate_request).lower()

    overrides = get_extension_overrides(params) or TykExtensionConfigParams()
    overrides.authentication = authentication

    oas = _load_oas(input_file)

    try:
        oas.build_default_tyk_extension(overrides)
    except TykExtensionError as e:
        typer.echo(f"Error building Tyk extension: {str(e)}", err=True)
        raise typer.Exit(1)

    _save_oas(oas, output_file)
    typer.echo(f"Successfully built Tyk extension of {input_file} into {output_file}")


def main():
    """Entry point for the CLI."""
    app()
