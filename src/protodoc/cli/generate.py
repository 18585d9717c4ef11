import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from protodoc.core.build import build_document
from protodoc.core.generate import run_generate
from protodoc.core.resolve import type_label
from protodoc.core.schema import parse_schema_file
from protodoc.watcher.watchfiles_adapter import WatchfilesWatcher

console = Console()
err_console = Console(stderr=True)

# schema, parse and payload lookup failures
_USER_ERRORS = (FileNotFoundError, ValueError, LookupError)


def _fail(exc: Exception) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
    return typer.Exit(code=1)


def _generate_once(path: str, fmt: str | None, output: Path | None) -> None:
    content, _ = run_generate(path=path, fmt=fmt)
    if output is None:
        typer.echo(content, nl=False)
    else:
        output.write_text(content, encoding="utf-8")
        err_console.print(f"[green]Wrote[/green] {output}")


def generate(
    path: Annotated[str, typer.Argument(help="Path to a .proto schema file.")],
    fmt: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Output format: markdown or text (default: $PROTODOC_FORMAT or markdown)."),
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write to this file instead of stdout.")] = None,
    watch: Annotated[bool, typer.Option(help="Regenerate when schema files in the same directory change.")] = False,
) -> None:
    """Generate API documentation for a schema file."""
    if watch and output is None:
        raise _fail(ValueError("--watch requires --output."))

    try:
        _generate_once(path, fmt, output)
    except _USER_ERRORS as exc:
        raise _fail(exc) from None

    if not watch:
        return

    async def _on_change(_paths: set[Path]) -> None:
        try:
            _generate_once(path, fmt, output)
        except _USER_ERRORS as exc:
            err_console.print(f"[red]Error:[/red] {escape(str(exc))}")

    async def _run() -> None:
        watcher = WatchfilesWatcher(Path(path).resolve().parent, _on_change)
        await watcher.start()
        console.print(f"[green]Watching[/green] {Path(path).resolve().parent} (Ctrl+C to stop)")
        try:
            await watcher.wait()
        finally:
            await watcher.stop()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped.")


def inspect(
    path: Annotated[str, typer.Argument(help="Path to a .proto schema file.")],
) -> None:
    """Show services, enums and objects with resolved field types."""
    try:
        document = build_document(parse_schema_file(path))
    except _USER_ERRORS as exc:
        raise _fail(exc) from None

    methods = Table(title="Methods")
    for column in ("method", "kind", "verb", "route", "request", "response"):
        methods.add_column(column)
    for service in document.services:
        for method in service.methods:
            methods.add_row(
                f"{method.service_name}.{method.method_name}",
                str(method.kind),
                method.http_method,
                method.url_path,
                method.request.type_name,
                method.response.type_name,
            )
    console.print(methods)

    enums = Table(title="Enums")
    enums.add_column("enum")
    enums.add_column("constants")
    for enum in document.enums:
        enums.add_row(enum.name, ", ".join(f"{c.name}={c.value}" for c in enum.constants))
    console.print(enums)

    objects = Table(title="Objects")
    for column in ("object", "field", "type"):
        objects.add_column(column)
    for obj in document.objects:
        for field in obj.attrs:
            objects.add_row(obj.name, field.name, escape(type_label(document, field)))
    console.print(objects)
    console.print(
        f"({len(document.services)} services, {len(document.enums)} enums, {len(document.objects)} objects)"
    )
