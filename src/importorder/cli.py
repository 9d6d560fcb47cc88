# src/importorder/cli.py

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from typing_extensions import Annotated

from .core.config import Config, get_config_path, load_config, save_config
from .core.discovery import collect_files
from .core.errors import ImportOrderError
from .core.logging import get_debug_logger, setup_logging
from .core.processor import ProcessOptions, process_files
from .core.types import FileOutcome, FileStatus

# CLI argument/option definitions
TARGET_PATH = typer.Argument(..., help="Path to file or directory")
THREADS = typer.Option(None, "--threads", "-t", help="Number of threads for parallel processing")
BACKUP = typer.Option(None, "--backup/--no-backup", help="Copy each modified file to a .bak file first")
BACKUP_DIR = typer.Option(None, "--backup-dir", help="Directory for backups (default: system temp)")
CHECK = typer.Option(False, "--check", help="Report files that would change without writing them")
GITIGNORE = typer.Option(None, "--gitignore/--no-gitignore", help="Skip paths ignored by .gitignore")
SKIP_ENVS = typer.Option(
    None, "--skip-envs/--include-envs", help="Skip virtual environment directories"
)
EXTENSION = typer.Option(None, "--extension", "-e", help="Target file extension")
CONFIG_PATH = typer.Option(None, "--config", "-c", help="Path to a config file")
DEBUG = typer.Option(False, "--debug", "-d", help="Show debug information")

app = typer.Typer(name="importorder", help="Sort and group imports in Python files")
console = Console()


def _print_outcome(outcome: FileOutcome, check: bool) -> None:
    if outcome.status is FileStatus.UNCHANGED:
        console.print(f"⚡ No changes needed: {outcome.path}")
    elif check:
        console.print(f"[yellow]✗ Would update: {outcome.path}[/yellow]")
    else:
        console.print(f"[green]✓ Updated: {outcome.path}[/green]")
        if outcome.backup_path:
            console.print(f"  Backup: {outcome.backup_path}")


@app.command()
def sort(
    path: Path = TARGET_PATH,
    threads: Optional[int] = THREADS,
    backup: Optional[bool] = BACKUP,
    backup_dir: Optional[Path] = BACKUP_DIR,
    check: bool = CHECK,
    gitignore: Optional[bool] = GITIGNORE,
    skip_envs: Optional[bool] = SKIP_ENVS,
    extension: Optional[str] = EXTENSION,
    config_path: Optional[Path] = CONFIG_PATH,
    debug: bool = DEBUG,
):
    """Sort the imports of a file or of every matching file under a directory."""
    try:
        config = load_config(config_path)
        setup_logging(Path(config.log_dir) if config.log_dir else None, debug=debug)

        target_extension = extension or config.extension
        files = collect_files(
            path,
            extension=target_extension,
            skip_env_dirs=config.skip_env_dirs if skip_envs is None else skip_envs,
            respect_gitignore=config.respect_gitignore if gitignore is None else gitignore,
            env_dirs=config.env_dirs,
        )

        if path.is_file() and not files:
            console.print(f"[yellow]Not a {target_extension} file or ignored: {path}[/yellow]")

        backup_root = backup_dir or (Path(config.backup_dir) if config.backup_dir else None)
        options = ProcessOptions(
            stdlib_modules=config.stdlib_modules,
            backup=config.backup if backup is None else backup,
            backup_dir=backup_root,
            check=check,
        )

        summary = process_files(
            files,
            options,
            threads=config.threads if threads is None else threads,
            on_outcome=lambda outcome: _print_outcome(outcome, check),
        )

    except (ImportOrderError, OSError) as e:
        get_debug_logger().debug("Run aborted", exc_info=True)
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    title = "Files needing changes" if check else "Processed files"
    console.print()
    if summary.modified:
        table = Table(title=title)
        table.add_column("File", style="cyan")
        for modified in summary.modified:
            table.add_row(f"✓ {modified}")
        console.print(table)
    else:
        console.print(f"[green]{title}: none[/green]")

    if check and summary.modified:
        raise typer.Exit(1)


# Create a config subcommand group
config_app = typer.Typer(name="config", help="Manage importorder settings")
app.add_typer(config_app)


@config_app.command("show")
def config_show(config_path: Optional[Path] = CONFIG_PATH):
    """Show the effective settings."""
    try:
        config = load_config(config_path)
    except (ImportOrderError, OSError) as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(1) from e

    source = config_path or get_config_path()
    console.print(f"[bold]Settings[/bold] ({source if source.exists() else 'defaults'})")
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    for name, value in config.to_dict().items():
        if isinstance(value, list):
            value = ", ".join(value)
        table.add_row(name, "" if value is None else str(value))
    console.print(table)


@config_app.command("init")
def config_init(
    config_path: Optional[Path] = CONFIG_PATH,
    force: Annotated[bool, typer.Option("--force", "-f", help="Overwrite an existing file")] = False,
):
    """Write a config file with the default settings."""
    target = config_path or get_config_path()
    if target.exists() and not force:
        console.print(f"[yellow]{target} already exists. Use --force to overwrite.[/yellow]")
        raise typer.Exit(1)

    try:
        save_config(Config(), target)
    except OSError as e:
        console.print(f"[red]Error writing configuration: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[green]Wrote default settings to {target}[/green]")


if __name__ == "__main__":
    app()
