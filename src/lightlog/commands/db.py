"""Command: lightlog init-db - Create the database tables."""

import typer
from rich.console import Console


console = Console()


def init_db(
    drop: bool = typer.Option(
        False, "--drop", help="Drop existing tables first (destroys data)"
    ),
) -> None:
    """Create all tables directly from the models.

    Intended for development and tests; deployments use Alembic migrations.
    """
    from lightlog.api import Services
    from lightlog.commands import run_with_services

    if drop:
        confirm = typer.confirm("Drop all tables? Every row will be lost.")
        if not confirm:
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(0)

    async def operation(services: Services) -> None:
        if drop:
            await services.db.drop_all()
        await services.db.create_all()

    try:
        run_with_services(operation)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    console.print("[green]✓[/green] Database tables created")
