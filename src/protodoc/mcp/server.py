"""FastMCP server exposing protodoc tools."""

from __future__ import annotations

from fastmcp import FastMCP

from protodoc.core.build import build_document
from protodoc.core.generate import run_generate
from protodoc.core.schema import parse_schema_source

_USER_ERRORS = (ValueError, LookupError)


def create_mcp_server() -> FastMCP:
    """Create a FastMCP server; every call builds its own document."""

    mcp = FastMCP("protodoc", instructions="Generate API documentation from protobuf schemas.")

    @mcp.tool()
    def render_markdown(source: str) -> str:
        """Render a .proto schema as Markdown API documentation."""
        try:
            content, _ = run_generate(code=source, fmt="markdown")
        except _USER_ERRORS as exc:
            return f"Error: {exc}"
        return content

    @mcp.tool()
    def render_text(source: str) -> str:
        """Render a .proto schema as a plain-text listing."""
        try:
            content, _ = run_generate(code=source, fmt="text")
        except _USER_ERRORS as exc:
            return f"Error: {exc}"
        return content

    @mcp.tool()
    def list_types(source: str) -> dict[str, list[str]] | str:
        """List the enums and objects declared in a .proto schema."""
        try:
            document = build_document(parse_schema_source(source.encode("utf-8")))
        except _USER_ERRORS as exc:
            return f"Error: {exc}"
        return {
            "enums": [enum.name for enum in document.enums],
            "objects": [obj.name for obj in document.objects],
        }

    return mcp
