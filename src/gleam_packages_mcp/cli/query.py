import asyncio
from collections.abc import Sequence
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from gleam_packages_mcp.core.errors import GleamPackagesError
from gleam_packages_mcp.core.tools import TOOLS_BY_NAME, PackageDocsService, ToolResult

query_app = typer.Typer(help="Query hex.pm and hexdocs.pm directly.")
console = Console()


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def _get_service() -> PackageDocsService:
    from gleam_packages_mcp.services import create_service

    return create_service()


def _run_tool(tool: str, **arguments: Any) -> ToolResult:
    service = _get_service()

    async def _run() -> ToolResult:
        from gleam_packages_mcp.services import close_service

        try:
            return await service.call(TOOLS_BY_NAME[tool], arguments)
        finally:
            await close_service(service)

    try:
        return asyncio.run(_run())
    except GleamPackagesError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc


@query_app.command("search")
def search(
    query: Annotated[str, typer.Argument(help="Search terms.")],
) -> None:
    """Search hex.pm for packages."""
    result = _run_tool("search_packages", query=query)
    rows = [(p["name"], p["latest_version"], p["downloads_all"], p["description"]) for p in result.data["packages"]]
    _render_table(["name", "version", "downloads", "description"], rows)


@query_app.command("info")
def info(
    package_name: Annotated[str, typer.Argument(help="Package name.")],
) -> None:
    """Show package metadata."""
    console.print(_run_tool("get_package_info", package_name=package_name).text)


@query_app.command("releases")
def releases(
    package_name: Annotated[str, typer.Argument(help="Package name.")],
) -> None:
    """List package releases and retirements."""
    result = _run_tool("get_package_releases", package_name=package_name)
    rows = [
        (
            r["version"],
            r["inserted_at"],
            "yes" if r["has_docs"] else "no",
            r["retirement"]["reason"] if r["retirement"] else "",
        )
        for r in result.data["releases"]
    ]
    _render_table(["version", "inserted_at", "docs", "retired"], rows)


@query_app.command("modules")
def modules(
    package_name: Annotated[str, typer.Argument(help="Package name.")],
) -> None:
    """List the modules of a package."""
    result = _run_tool("get_modules", package_name=package_name)
    _render_table(["module"], [(name,) for name in result.data["modules"]])


@query_app.command("module")
def module(
    package_name: Annotated[str, typer.Argument(help="Package name.")],
    module_name: Annotated[str, typer.Argument(help="Module path, e.g. gleam/list.")],
) -> None:
    """Show the documentation of one module."""
    console.print(_run_tool("get_module_info", package_name=package_name, module_name=module_name).text)


@query_app.command("functions")
def functions(
    package_name: Annotated[str, typer.Argument(help="Package name.")],
    query: Annotated[str, typer.Argument(help="Text to match.")] = "",
    limit: Annotated[int, typer.Option(help="Max rows to return.")] = 50,
) -> None:
    """Search the functions of a package."""
    result = _run_tool("search_functions", package_name=package_name, query=query, limit=limit)
    _render_table(["module", "signature"], [(f["module"], f["signature"]) for f in result.data["functions"]])


@query_app.command("types")
def types(
    package_name: Annotated[str, typer.Argument(help="Package name.")],
    query: Annotated[str, typer.Argument(help="Text to match.")] = "",
    limit: Annotated[int, typer.Option(help="Max rows to return.")] = 50,
) -> None:
    """Search the types of a package."""
    result = _run_tool("search_types", package_name=package_name, query=query, limit=limit)
    _render_table(["module", "name", "kind"], [(t["module"], t["name"], t["type_kind"]) for t in result.data["types"]])
