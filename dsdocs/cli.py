"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

import json
from enum import Enum
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.table import Table

from dsdocs import __version__
from dsdocs.core.config import AppConfig, DocsConfig, MetastoreConfig, init_app_config
from dsdocs.core.services import build_dataset_api_docs
from dsdocs.endpoint_filter import keep_dataset_specific_endpoints
from dsdocs.metastore_client import MetastoreError
from dsdocs.openapi_parser import (
    SpecLoadError,
    extract_api_endpoints,
    load_openapi_spec,
    validate_openapi_spec,
)

# Initialize console for rich output
console = Console()

# Initialize the CLI app
app = typer.Typer(help="DSDOCS - dataset-specific API docs")


class OutputFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"


def configure_app(debug: bool = False) -> AppConfig:
    """
    Configure the application with the specified settings.

    Args:
    ----
        debug: Whether to enable debug mode

    """
    config = init_app_config(debug=debug, app_version=__version__)
    config.configure_logging()
    return config


def version_callback(value: bool):
    if value:
        console.print(f"DSDOCS version: {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode with verbose logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the application version and exit",
    ),
):
    """
    DSDOCS - narrow a metastore OpenAPI document down to a single dataset.

    Use --debug to enable verbose logging.
    """
    configure_app(debug=debug)


@app.command("validate")
def validate_spec(spec_path: Path = typer.Argument(..., help="Path to the OpenAPI spec file")):
    """
    Validate that the file is an OpenAPI 3 document with paths.
    """
    try:
        console.print(f"Validating OpenAPI spec: {spec_path}")
        spec = load_openapi_spec(spec_path)
    except (FileNotFoundError, SpecLoadError) as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(code=1)

    if validate_openapi_spec(spec):
        console.print("✅ Valid OpenAPI specification", style="green")
    else:
        console.print("❌ Not a valid OpenAPI specification", style="red")
        raise typer.Exit(code=1)


@app.command("list-endpoints")
def list_endpoints(
    spec_path: Path = typer.Argument(..., help="Path to the OpenAPI spec file"),
    dataset_only: bool = typer.Option(
        False, "--dataset-only", help="Only show endpoints kept in dataset-specific docs"
    ),
):
    """
    List the API endpoints in the OpenAPI spec.
    """
    try:
        spec = load_openapi_spec(spec_path)
    except (FileNotFoundError, SpecLoadError) as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(code=1)

    if dataset_only:
        endpoints_to_keep = DocsConfig.from_env().endpoints_to_keep
        spec = {**spec, "paths": keep_dataset_specific_endpoints(spec["paths"], endpoints_to_keep)}

    endpoints = extract_api_endpoints(spec)

    table = Table(title="Dataset API Endpoints" if dataset_only else "API Endpoints")
    table.add_column("Method")
    table.add_column("Path")
    table.add_column("Summary")

    for details in endpoints.values():
        table.add_row(details["method"].upper(), details["path"], details["summary"])

    console.print(table)


@app.command("dataset-docs")
def dataset_docs(
    identifier: str = typer.Argument(..., help="Dataset identifier"),
    spec_path: Path | None = typer.Option(None, "--spec", help="Path to the full OpenAPI spec"),
    metastore_url: str | None = typer.Option(
        None, "--metastore-url", help="Base URL of the site serving the metastore API"
    ),
    output_file: Path | None = typer.Option(None, "--output", help="Write the document to this file"),
    output_format: OutputFormat = typer.Option(OutputFormat.JSON, "--format", help="Output format"),
    discover_modifiers: bool = typer.Option(
        True, "--discover-modifiers/--no-discover-modifiers", help="Load installed data modifiers"
    ),
):
    """
    Build the OpenAPI document for a single dataset.
    """
    try:
        config = AppConfig.from_env(
            metastore=MetastoreConfig.from_env(base_url=metastore_url),
            docs=DocsConfig.from_env(spec_path=spec_path, discover_modifiers=discover_modifiers),
        )
        service = build_dataset_api_docs(config)
        document = service.get_dataset_specific(identifier)
    except (FileNotFoundError, SpecLoadError, MetastoreError, ValueError) as e:
        console.print(f"Error: {e}", style="red")
        raise typer.Exit(code=1)

    if output_format == OutputFormat.YAML:
        content = yaml.safe_dump(document, default_flow_style=False, sort_keys=False, allow_unicode=True)
    else:
        content = json.dumps(document, indent=2)

    if output_file:
        output_file.write_text(content)
        console.print(f"Dataset docs written to {output_file}", style="green")
    else:
        # Plain print so the document can be piped
        typer.echo(content)


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Interface to bind"),
    port: int = typer.Option(8000, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """
    Serve dataset-specific docs over HTTP.
    """
    from dsdocs.main import main

    main(host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
