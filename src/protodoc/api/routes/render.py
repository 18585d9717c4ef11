from collections.abc import Iterator

from fastapi import APIRouter, HTTPException

from protodoc.api.schemas import DocumentRequest, DocumentResponse, RenderRequest, RenderResponse
from protodoc.core.build import build_document
from protodoc.core.document import Document, Field
from protodoc.core.endpoints import MissingMessageError
from protodoc.core.generate import run_generate
from protodoc.core.resolve import type_label
from protodoc.core.schema import SchemaSyntaxError, parse_schema_source

router = APIRouter(tags=["render"])


def _unprocessable(exc: Exception) -> HTTPException:
    if isinstance(exc, SchemaSyntaxError):
        detail: object = {"message": str(exc), "line": exc.line, "column": exc.column}
    elif isinstance(exc, MissingMessageError):
        detail = {"message": str(exc), "type_name": exc.type_name}
    else:
        detail = str(exc)
    return HTTPException(status_code=422, detail=detail)


def _owned_fields(document: Document) -> Iterator[tuple[str, Field]]:
    for service in document.services:
        for method in service.methods:
            prefix = f"{service.service_name}.{method.method_name}"
            for field in method.request.params:
                yield f"{prefix}.request", field
            for field in method.response.params:
                yield f"{prefix}.response", field
    for obj in document.objects:
        for field in obj.attrs:
            yield obj.name, field


@router.post("/render", response_model=RenderResponse)
def render(body: RenderRequest) -> RenderResponse:
    try:
        content, _ = run_generate(code=body.source, fmt=body.format, filename=body.filename)
    except (ValueError, LookupError) as exc:
        raise _unprocessable(exc) from None
    return RenderResponse(format=body.format, content=content)


@router.post("/document", response_model=DocumentResponse)
def document(body: DocumentRequest) -> DocumentResponse:
    try:
        doc = build_document(parse_schema_source(body.source.encode("utf-8"), body.filename))
    except (ValueError, LookupError) as exc:
        raise _unprocessable(exc) from None
    types = {f"{owner}.{field.name}": type_label(doc, field) for owner, field in _owned_fields(doc)}
    return DocumentResponse(document=doc, types=types)
