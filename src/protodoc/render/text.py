from __future__ import annotations

from collections.abc import Sequence

from protodoc.core.document import Document, Field
from protodoc.core.resolve import type_label

_INDENT = "    "


def _line(*parts: str) -> str:
    return (_INDENT + " ".join(parts)).rstrip()


class TextRenderer:
    """Plain indented listing of services, enums and objects."""

    name = "text"

    def render(self, document: Document) -> str:
        lines: list[str] = []
        self._services(document, lines)
        self._enums(document, lines)
        self._objects(document, lines)
        return "\n".join(lines) + "\n" if lines else ""

    def _fields(self, document: Document, fields: Sequence[Field], lines: list[str]) -> None:
        for field in fields:
            lines.append(_line(type_label(document, field), field.name, field.comment))

    def _services(self, document: Document, lines: list[str]) -> None:
        for service in document.services:
            lines += [f"SERVICE {service.package_name}", "", service.comment, ""]
            for method in service.methods:
                header = f"METHOD {method.service_name}.{method.method_name}"
                if method.is_websocket:
                    header += f" ({method.kind})"
                lines += [header, f"{method.http_method} {method.url_path}", method.comment, ""]

                lines.append(f"REQUEST PARAMETERS ({method.request.type_name})")
                self._fields(document, method.request.params, lines)
                lines.append(f"RESPONSE PARAMETERS ({method.response.type_name})")
                self._fields(document, method.response.params, lines)
                lines.append("")

    def _enums(self, document: Document, lines: list[str]) -> None:
        for enum in document.enums:
            lines += [f"ENUM {enum.name}", enum.comment, "", "CONSTANTS"]
            for constant in enum.constants:
                lines.append(_line(constant.name, constant.value, constant.comment))
            lines.append("")

    def _objects(self, document: Document, lines: list[str]) -> None:
        for obj in document.objects:
            lines += [f"OBJECT {obj.name}", obj.comment, "", "ATTRIBUTES"]
            self._fields(document, obj.attrs, lines)
            lines.append("")
