"""Command: lightlog serve - Run the gateway under uvicorn."""

import typer
from rich.console import Console


console = Console()


def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
    workers: int | None = typer.Option(
        None, "--workers", "-w", help="Worker processes (default from settings)"
    ),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Serve the gateway.

    Worker count defaults to 1 outside production and 2 in production.
    """
    import uvicorn

    from lightlog.config import get_settings

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    worker_count = 1 if reload else (workers or settings.worker_count)

    console.print(
        f"[bold cyan]{settings.app_name}[/bold cyan] listening on "
        f"http://{bind_host}:{bind_port} "
        f"[dim]({settings.environment}, {worker_count} worker(s))[/dim]"
    )

    uvicorn.run(
        "lightlog.main:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        workers=worker_count,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
