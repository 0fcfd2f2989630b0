"""Main lightlog CLI application."""

import typer
from rich.console import Console

from lightlog import __version__
from lightlog.commands import db, projects, serve, users


console = Console()

app = typer.Typer(
    name="lightlog",
    help="Run and administer the log ingestion gateway.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command(name="serve")(serve.serve)
app.command(name="init-db")(db.init_db)
app.command(name="create-user")(users.create_user)
app.command(name="delete-user")(users.delete_user)
app.command(name="create-project")(projects.create_project)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """lightlog - Multi-tenant log ingestion gateway."""
    if version:
        console.print(f"[bold cyan]lightlog[/bold cyan] version {__version__}")
        raise typer.Exit()


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
