"""Commands: lightlog create-user / delete-user - Manage dashboard users."""

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console


console = Console()


def create_user(
    username: str = typer.Argument(..., help="Login name"),
    email: str = typer.Argument(..., help="Email address"),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Password (prompted when omitted)",
    ),
) -> None:
    """Create a user who can log in to the control plane."""
    from lightlog.api import Services
    from lightlog.commands import run_with_services
    from lightlog.core.errors import AppException
    from lightlog.modules.users.schemas import UserCreate, UserResponse

    try:
        data = UserCreate(username=username, email=email, password=password)
    except PydanticValidationError as e:
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"])
            console.print(f"[red]Error:[/red] {field}: {err['msg']}")
        raise typer.Exit(1) from e

    async def operation(services: Services) -> UserResponse:
        return await services.users.create_user(data)

    try:
        user = run_with_services(operation)
    except AppException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e

    console.print(f"[green]✓[/green] Created user [bold]{user.username}[/bold] ({user.id})")


def delete_user(
    username: str = typer.Argument(..., help="Login name of the user to delete"),
    force: bool = typer.Option(
        False, "--force", "-f", help="Skip confirmation prompt"
    ),
) -> None:
    """Delete a user together with all of the user's sessions."""
    from lightlog.api import Services
    from lightlog.commands import run_with_services
    from lightlog.core.errors import AppException

    if not force:
        confirm = typer.confirm(f"Are you sure you want to delete '{username}'?")
        if not confirm:
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(0)

    async def operation(services: Services) -> int:
        return await services.users.delete_user(username)

    try:
        removed = run_with_services(operation)
    except AppException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1) from e

    console.print(
        f"[green]✓[/green] Deleted user [bold]{username}[/bold] "
        f"[dim]({removed} session(s) removed)[/dim]"
    )
