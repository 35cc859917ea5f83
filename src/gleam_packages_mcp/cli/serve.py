import logging

import typer
from rich.console import Console

from gleam_packages_mcp.config import load_settings

serve_app = typer.Typer(help="Start servers.", no_args_is_help=True)
console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@serve_app.command("api")
def api(
    host: str = "127.0.0.1",
    port: int = 3000,
) -> None:
    """Start the HTTP JSON-RPC server."""
    import uvicorn

    from gleam_packages_mcp.api.app import create_app

    _configure_logging(load_settings().log_level)
    app = create_app()
    console.print(f"[green]Starting MCP HTTP server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port)


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
) -> None:
    """Start the FastMCP server (stdio by default)."""
    from gleam_packages_mcp.mcp.server import create_mcp_server
    from gleam_packages_mcp.services import create_service

    settings = load_settings()
    _configure_logging(settings.log_level)
    server = create_mcp_server(create_service(settings))
    # stdout carries the protocol on stdio, so report on stderr.
    Console(stderr=True).print(f"[green]Starting MCP server (transport: {transport})[/green]")
    server.run(transport=transport)  # type: ignore[arg-type]
