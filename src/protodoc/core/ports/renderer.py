from typing import Protocol

from protodoc.core.document import Document


class Renderer(Protocol):
    name: str

    def render(self, document: Document) -> str: ...
