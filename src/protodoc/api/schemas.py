from __future__ import annotations

from pydantic import BaseModel

from protodoc.core.document import Document


class RenderRequest(BaseModel):
    source: str
    format: str = "markdown"
    filename: str = "<memory>"


class RenderResponse(BaseModel):
    format: str
    content: str


class DocumentRequest(BaseModel):
    source: str
    filename: str = "<memory>"


class DocumentResponse(BaseModel):
    document: Document
    # "<owner>.<field>" -> plain-text type label
    types: dict[str, str]


class HealthResponse(BaseModel):
    status: str = "ok"
