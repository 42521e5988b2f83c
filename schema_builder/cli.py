"""
CLI Entry Point

Typer-based command line interface for the Model Schema Builder.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from schema_builder.adapters import load_registry
from schema_builder.config import ConfigLoader, BuilderConfig
from schema_builder.core.logger import BuildLogger
from schema_builder.core.schema import (
    ModelRegistry,
    SchemaInspector,
    SchemaBuildError,
)
from schema_builder.core.schema.models import AccessType


# Initialize Typer app
app = typer.Typer(
    name="schema-builder",
    help="Model Schema Builder - Inspect ORM models and export a normalized schema",
    add_completion=False,
)

console = Console(stderr=True)


def load_config(config_path: str) -> BuilderConfig:
    """Load and validate configuration file."""
    loader = ConfigLoader()
    try:
        return loader.load(config_path)
    except FileNotFoundError:
        console.print(f"[red]Error:[/] Configuration file not found: {config_path}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Configuration error:[/] {e}")
        raise typer.Exit(1)


def create_registry(config: BuilderConfig) -> ModelRegistry:
    """Import the host model registry named in the configuration."""
    try:
        return load_registry(
            config.registry,
            internal_namespaces=config.discovery.internal_namespaces,
            migration_tables=config.discovery.migration_tables,
            attachment_tables=config.discovery.attachment_tables,
        )
    except ValueError as e:
        console.print(f"[red]Registry error:[/] {e}")
        raise typer.Exit(1)


def create_inspector(config: BuilderConfig, logger: BuildLogger | None = None) -> SchemaInspector:
    """Create a schema inspector for the configured registry."""
    return SchemaInspector(
        create_registry(config),
        rules=config.schema_rules(),
        logger=logger,
    )


@app.command()
def build(
    config_path: str = typer.Argument(..., help="Path to configuration file (YAML or JSON)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (overrides config)"),
    indent: Optional[int] = typer.Option(None, "--indent", help="JSON indentation (overrides config)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show skipped associations and validators"),
):
    """
    Build the schema document for all models.

    Example:
        schema-builder build schema.yaml -o schema.json
    """
    config = load_config(config_path)

    logger = BuildLogger(
        level="DEBUG" if verbose else config.logging.level,
        console_output=config.logging.console_output,
        console=console,
    )
    logger.start_build(config.name)

    inspector = create_inspector(config, logger)

    try:
        document = inspector.to_json(
            indent=indent if indent is not None else config.output.indent
        )
    except SchemaBuildError as e:
        logger.log_error(str(e))
        raise typer.Exit(1)

    summary = logger.end_build()

    output_path = output or config.output.path
    if output_path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(document + "\n", encoding="utf-8")
        console.print(f"[green]Schema written:[/] {path}")
    else:
        typer.echo(document)

    if config.output.skip_log:
        logger.export_json(config.output.skip_log)

    if verbose:
        console.print(summary.to_text())


@app.command("models")
def list_models(
    config_path: str = typer.Argument(..., help="Path to configuration file"),
):
    """
    List the models discovery will include.
    """
    config = load_config(config_path)
    registry = create_registry(config)
    inspector = SchemaInspector(registry, rules=config.schema_rules())

    table = Table(show_header=True, header_style="bold")
    table.add_column("Model", style="cyan")
    table.add_column("Table")
    table.add_column("Primary Key")
    table.add_column("Columns", justify="right")
    table.add_column("Relationships", justify="right")

    models = inspector.get_models()
    for model in models:
        primary_key = registry.primary_key(model)
        table.add_row(
            registry.model_name(model),
            registry.table_name(model),
            ", ".join(primary_key) if isinstance(primary_key, tuple) else (primary_key or ""),
            str(len(registry.columns(model))),
            str(len(registry.relationships(model))),
        )

    console.print(table)
    console.print(f"\n[bold]{len(models)} models[/]")


@app.command("inspect")
def inspect_model(
    config_path: str = typer.Argument(..., help="Path to configuration file"),
    model: str = typer.Option(..., "--model", "-m", help="Model to inspect (class name, name or slug)"),
):
    """
    Inspect the schema of one model.

    Example:
        schema-builder inspect schema.yaml --model blog_post
    """
    config = load_config(config_path)
    inspector = create_inspector(config)

    try:
        schema = inspector.find(model)
    except SchemaBuildError as e:
        console.print(f"[red]Build error:[/] {e}")
        raise typer.Exit(1)

    if not schema:
        console.print(f"[red]Model '{model}' not found[/]")
        raise typer.Exit(1)

    console.print(Panel(
        f"[bold]{schema.display_name}[/]\n"
        f"Name: {schema.name}  Slug: {schema.slug}\n"
        f"Table: {schema.table_name}  Primary key: {schema.primary_key}\n"
        f"Display column: {schema.display_column}",
        title="Model",
    ))

    columns = Table(show_header=True, header_style="bold", title="Columns")
    columns.add_column("Column", style="cyan")
    columns.add_column("Label")
    columns.add_column("Type")
    columns.add_column("Access")
    columns.add_column("Default")
    columns.add_column("Validators")

    for column in schema.columns:
        if column.access_type == AccessType.READ_ONLY:
            access = f"[yellow]{column.access_type.value}[/]"
        elif column.access_type == AccessType.HIDDEN:
            access = f"[dim]{column.access_type.value}[/]"
        else:
            access = f"[green]{column.access_type.value}[/]"

        columns.add_row(
            column.name,
            column.display_name,
            column.column_type,
            access,
            "" if column.default_value is None else repr(column.default_value),
            ", ".join(next(iter(v)) for v in column.validators),
        )

    console.print(columns)

    if schema.associations:
        associations = Table(show_header=True, header_style="bold", title="Associations")
        associations.add_column("Association", style="cyan")
        associations.add_column("Type")
        associations.add_column("Target")
        associations.add_column("Foreign Key")
        associations.add_column("Polymorphic")

        for association in schema.associations:
            associations.add_row(
                association.name,
                association.association_type.value,
                association.model_name,
                association.foreign_key or "",
                "[magenta]yes[/]" if association.polymorphic else "",
            )

        console.print(associations)


@app.command("init-config")
def init_config(
    output: str = typer.Argument("schema.yaml", help="Output configuration file path"),
):
    """
    Create an example configuration file.
    """
    ConfigLoader.create_example_config(output)
    console.print(f"[green]Example configuration created:[/] {output}")
    console.print("\nEdit this file and set the following environment variable:")
    console.print("  - SCHEMA_REGISTRY (e.g. myapp.models:Base)")


@app.command("validate-config")
def validate_config(
    config_path: str = typer.Argument(..., help="Path to configuration file"),
):
    """
    Validate a configuration file without building.
    """
    errors = ConfigLoader().validate_file(config_path)

    if errors:
        for error in errors:
            console.print(f"[red]✗[/] {error}")
        raise typer.Exit(1)

    console.print(f"[green]✓ Configuration is valid:[/] {config_path}")


@app.command()
def version():
    """Show version information."""
    from schema_builder import __version__
    console.print(f"Model Schema Builder v{__version__}")


if __name__ == "__main__":
    app()
