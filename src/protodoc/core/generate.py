import logging

from protodoc.config import get_default_format
from protodoc.core.build import build_document
from protodoc.core.document import Document
from protodoc.core.schema import parse_schema_file, parse_schema_source
from protodoc.models import SchemaUnit
from protodoc.render import get_renderer

logger = logging.getLogger(__name__)


def load_schema(path: str | None = None, code: str | None = None, filename: str = "<memory>") -> SchemaUnit:
    if (path is None) == (code is None):
        raise ValueError("Exactly one of 'path' or 'code' must be provided.")
    if code is not None:
        return parse_schema_source(code.encode("utf-8"), filename)
    assert path is not None
    return parse_schema_file(path)


def run_generate(
    path: str | None = None,
    code: str | None = None,
    fmt: str | None = None,
    filename: str = "<memory>",
) -> tuple[str, Document]:
    """Parse a schema, build its document and render it.

    Returns (rendered_text, document).
    """
    renderer = get_renderer(fmt or get_default_format())
    unit = load_schema(path, code, filename)
    document = build_document(unit)
    logger.info("Rendering %s as %s", unit.filename, renderer.name)
    return renderer.render(document), document
