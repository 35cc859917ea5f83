import typer

from gleam_packages_mcp.cli.query import query_app
from gleam_packages_mcp.cli.serve import serve_app

app = typer.Typer(
    name="gleam-packages-mcp",
    help="Gleam Packages MCP: documentation lookups for Gleam packages on hex.pm.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(query_app, name="query")
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
