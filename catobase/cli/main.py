"""Main CLI interface for catobase."""

import click
import json
import logging
from pathlib import Path
from typing import List
from rich.console import Console
from rich.table import Table
from ..core.catalog import Catalog
from ..core.models import Record, BulkRegistrationResult
from ..core.exceptions import (
    CatobaseError, FileSystemError, PathNotFoundError, AlreadyExistsError,
    PermissionError, ValidationError, InvalidCategoriesError, PatternError,
    ConfigurationError
)

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.version_option(version="0.1.0")
@click.option('--config', '-c', type=click.Path(path_type=Path),
              help='Configuration file path')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Set logging level (overrides config)')
@click.option('--registry', '-r', type=click.Path(path_type=Path),
              help='Registry file (overrides config)')
@click.option('--categories-file', type=click.Path(path_type=Path),
              help='Reference category listing used to validate registrations')
@click.pass_context
def cli(ctx, config, log_level, registry, categories_file):
    """catobase - tag files with categories and query them."""
    from ..core.config import setup_config
    from ..core.logging_config import setup_logging

    try:
        config_manager = setup_config(config)
    except ConfigurationError as e:
        handle_cli_error(e, "configuration")
        raise click.Abort()
    app_config = config_manager.get_config()

    if log_level:
        app_config.logging.level = log_level
    setup_logging(app_config.logging)

    ctx.ensure_object(dict)
    ctx.obj['config'] = app_config
    ctx.obj['config_manager'] = config_manager
    ctx.obj['catalog'] = Catalog(registry, categories_file, config=app_config)


@cli.command()
@click.pass_context
def init(ctx):
    """Create an empty registry file if there is none."""
    catalog = ctx.obj['catalog']
    try:
        created = catalog.initialize()
    except CatobaseError as e:
        handle_cli_error(e, "init")
        raise click.Abort()

    if created:
        console.print(f"[green]✓[/green] Created registry {catalog.registry_path}")
    else:
        console.print(f"[yellow]Registry {catalog.registry_path} already exists[/yellow]")


@cli.group()
def category():
    """Category listing commands."""
    pass


@category.command('create')
@click.argument('labels', nargs=-1, required=True)
@click.option('--file', '-f', 'listing', type=click.Path(path_type=Path), required=True,
              help='Category listing to create')
@click.pass_context
def create_category(ctx, labels, listing):
    """Create a new category listing holding LABELS."""
    try:
        ctx.obj['catalog'].categories.create(labels, listing)
    except CatobaseError as e:
        handle_cli_error(e, "category create")
        raise click.Abort()
    console.print(f"[green]✓[/green] Created {listing} with {len(labels)} categories")


@category.command('delete')
@click.argument('label')
@click.option('--file', '-f', 'listing', type=click.Path(path_type=Path), required=True,
              help='Category listing to edit')
@click.pass_context
def delete_category(ctx, label, listing):
    """Remove LABEL from a category listing."""
    try:
        ctx.obj['catalog'].categories.delete_entry(label, listing)
    except CatobaseError as e:
        handle_cli_error(e, "category delete")
        raise click.Abort()
    console.print(f"[green]✓[/green] Removed {label} from {listing}")


@category.command('show')
@click.option('--file', '-f', 'listing', type=click.Path(path_type=Path), required=True,
              help='Category listing to read')
@click.pass_context
def show_categories(ctx, listing):
    """Print the labels of a category listing."""
    try:
        labels = ctx.obj['catalog'].categories.read(listing)
    except CatobaseError as e:
        handle_cli_error(e, "category show")
        raise click.Abort()
    for label in labels:
        click.echo(label)


@cli.command()
@click.argument('path', type=click.Path(path_type=Path))
@click.option('--category', '-c', 'categories', multiple=True,
              help='Category of the file (repeatable)')
@click.option('--snapshot', is_flag=True, help='Keep a copy of the file next to it')
@click.pass_context
def register(ctx, path: Path, categories, snapshot: bool):
    """Register a file with its categories."""
    try:
        record = ctx.obj['catalog'].register_file(str(path), list(categories), snapshot)
    except CatobaseError as e:
        handle_cli_error(e, "register")
        raise click.Abort()
    console.print(f"[green]✓[/green] Registered {record.path}")


@cli.command('register-dir')
@click.argument('root', type=click.Path(path_type=Path))
@click.argument('pattern')
@click.option('--keep-going', is_flag=True,
              help='Continue after a file fails to register and report failures at the end')
@click.pass_context
def register_dir(ctx, root: Path, pattern: str, keep_going: bool):
    """Register every file under ROOT whose name matches PATTERN.

    Each matched file is read as a category listing for itself.
    """
    try:
        result = ctx.obj['catalog'].register_files(str(root), pattern, keep_going=keep_going)
    except CatobaseError as e:
        handle_cli_error(e, "register-dir")
        raise click.Abort()

    if isinstance(result, BulkRegistrationResult):
        registered = result.registered
        for file_path, error in result.failures:
            console.print(f"  [red]- {file_path}: {error}[/red]")
    else:
        registered = result

    for file_path in registered:
        console.print(f"  [green]+ {file_path}[/green]")
    console.print(f"\n[bold green]✓ Registered {len(registered)} file(s)[/bold green]")

    if isinstance(result, BulkRegistrationResult) and result.failures:
        console.print(f"[bold red]{len(result.failures)} file(s) failed[/bold red] "
                      f"(success rate {result.success_rate * 100:.1f}%)")
        ctx.exit(1)


@cli.command()
@click.argument('pattern', default='')
@click.option('--category', '-c', 'categories', multiple=True,
              help='Required category (repeatable)')
@click.option('--format', '-f', 'output_format', type=click.Choice(['table', 'json', 'paths']),
              default='paths', help='Output format')
@click.pass_context
def get(ctx, pattern: str, categories, output_format: str):
    """Find registered files whose path matches PATTERN and carry every category."""
    try:
        records = ctx.obj['catalog'].find(pattern, list(categories))
    except CatobaseError as e:
        handle_cli_error(e, "get")
        raise click.Abort()

    _display_records(records, output_format)


@cli.command()
@click.option("--port", "-p", type=int, help="Port to run the web server on")
@click.option("--host", "-h", help="Host to bind the web server to")
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.pass_context
def web(ctx, port: int, host: str, debug: bool):
    """Start the web API."""
    from ..web.app import create_app

    app_config = ctx.obj['config']
    host = host or app_config.web.host
    port = port or app_config.web.port
    debug = debug or app_config.web.debug

    console.print(f"[bold blue]Starting catobase web API on http://{host}:{port}[/bold blue]")
    app = create_app({'DEBUG': debug, 'CATALOG': ctx.obj['catalog']})
    app.run(host=host, port=port, debug=debug)


@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command('show')
@click.pass_context
def show_config(ctx):
    """Show current configuration."""
    app_config = ctx.obj['config']

    console.print("[bold blue]Current Configuration:[/bold blue]\n")

    console.print("[bold]Registry:[/bold]")
    console.print(f"  Path: {app_config.registry.path}")
    console.print(f"  Categories file: {app_config.registry.categories_file or '-'}")
    console.print(f"  Snapshot suffix: {app_config.registry.snapshot_suffix}")
    console.print(f"  Encoding: {app_config.registry.encoding}")

    console.print("\n[bold]Web:[/bold]")
    console.print(f"  Host: {app_config.web.host}")
    console.print(f"  Port: {app_config.web.port}")
    console.print(f"  Debug: {app_config.web.debug}")

    console.print("\n[bold]Logging:[/bold]")
    console.print(f"  Level: {app_config.logging.level}")
    console.print(f"  File enabled: {app_config.logging.file_enabled}")
    console.print(f"  File path: {app_config.logging.file_path}")
    console.print(f"  Console enabled: {app_config.logging.console_enabled}")


@config.command('set')
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_config(ctx, key, value):
    """Set a configuration value. Use dot notation (e.g., registry.path)."""
    try:
        converted_value = ctx.obj['config_manager'].set_value(key, value)
    except (ConfigurationError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort()
    console.print(f"[green]✓[/green] Set {key} = {converted_value}")


def _display_records(records: List[Record], output_format: str):
    """Display matching records in the requested format."""
    if output_format == "json":
        click.echo(json.dumps([
            {
                "path": record.path,
                "categories": list(record.categories),
                "timestamp": record.timestamp
            }
            for record in records
        ], indent=2))
        return

    if output_format == "paths":
        for record in records:
            click.echo(record.path)
        return

    if not records:
        console.print("[yellow]No registered files match.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Path", style="cyan", no_wrap=False)
    table.add_column("Categories", style="green")
    table.add_column("Registered", style="blue")
    for record in records:
        recorded_at = record.recorded_at
        table.add_row(
            record.path,
            ", ".join(record.categories),
            recorded_at.strftime("%Y-%m-%d %H:%M") if recorded_at else record.timestamp
        )
    console.print(table)
    console.print(f"\n[bold green]Found {len(records)} file(s)[/bold green]")


def handle_cli_error(error: Exception, operation: str = "operation") -> None:
    """
    Report a CLI error with a hint for the user.

    Args:
        error: The exception that occurred
        operation: Description of the operation that failed
    """
    if isinstance(error, PathNotFoundError):
        err_console.print(f"[bold red]Error:[/bold red] {error}")
        err_console.print("[yellow]Please check that the path exists. "
                          "Run 'catobase init' to create the registry.[/yellow]")
    elif isinstance(error, AlreadyExistsError):
        err_console.print(f"[bold red]Error:[/bold red] {error}")
    elif isinstance(error, PermissionError):
        err_console.print(f"[bold red]Permission Error:[/bold red] {error}")
    elif isinstance(error, InvalidCategoriesError):
        err_console.print(f"[bold red]Error:[/bold red] {error}: {', '.join(error.missing)}")
    elif isinstance(error, PatternError):
        err_console.print(f"[bold red]Pattern Error:[/bold red] {error}")
    elif isinstance(error, ValidationError):
        err_console.print(f"[bold red]Validation Error:[/bold red] {error}")
    elif isinstance(error, FileSystemError):
        err_console.print(f"[bold red]File System Error:[/bold red] {error}")
    else:
        err_console.print(f"[bold red]Error:[/bold red] {error}")

    logging.getLogger(__name__).debug(f"CLI error in {operation}: {error}", exc_info=True)


if __name__ == "__main__":
    cli()
