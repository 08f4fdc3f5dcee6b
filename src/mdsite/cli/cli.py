"""CLI entrypoint: Typer app definition and command registration"""

import logging
from typing import Annotated

import typer

from mdsite.cli.commands import build_cmd, list_cmd, serve_cmd


app = typer.Typer(name="mdsite", no_args_is_help=True, help="Markdown articles -> static HTML site")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Configure logging for every command."""
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    if verbose:
        logging.getLogger("mdsite").setLevel(logging.DEBUG)
    ctx.obj = {"verbose": verbose}


app.command(name="build")(build_cmd)
app.command(name="list")(list_cmd)
app.command(name="serve")(serve_cmd)
