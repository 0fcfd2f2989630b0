"""Command: lightlog create-project - Create a project and print its token."""

import typer
from rich.console import Console
from rich.table import Table


console = Console()


def create_project(
    name: str = typer.Argument(..., help="Project name"),
) -> None:
    """Create a project. The printed token authenticates log ingestion."""
    from lightlog.api import Services
    from lightlog.commands import run_with_services
    from lightlog.core.constants import MAX_NAME_LENGTH
    from lightlog.modules.projects.schemas import ProjectCreate, ProjectResponse

    name = name.strip()
    if not name:
        console.print("[red]Error:[/red] Project name cannot be empty")
        raise typer.Exit(1)
    if len(name) > MAX_NAME_LENGTH:
        console.print(
            f"[red]Error:[/red] Project name is too long (max {MAX_NAME_LENGTH} characters)"
        )
        raise typer.Exit(1)

    async def operation(services: Services) -> ProjectResponse:
        return await services.projects.create_project(ProjectCreate(name=name))

    project = run_with_services(operation)

    table = Table(show_header=False, box=None)
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("ID", str(project.id))
    table.add_row("Name", project.name)
    table.add_row("Token", project.token)

    console.print("[green]✓[/green] Project created\n")
    console.print(table)
