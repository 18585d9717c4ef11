import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from protodoc.cli.generate import generate, inspect
from protodoc.cli.serve import serve_app
from protodoc.config import get_log_level

app = typer.Typer(
    name="protodoc",
    help="protodoc — generate API documentation from protobuf schemas.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    log_level: Annotated[str | None, typer.Option(help="Log level (default: $PROTODOC_LOG_LEVEL or WARNING).")] = None,
) -> None:
    logging.basicConfig(
        level=(log_level or get_log_level()).upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


app.command("generate")(generate)
app.command("inspect")(inspect)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
