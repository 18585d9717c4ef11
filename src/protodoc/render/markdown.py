"""Markdown rendering with a table of contents and cross-reference anchors."""

from __future__ import annotations

from collections.abc import Sequence

from protodoc.core.document import DocEnum, DocObject, Document, Field, Method, Service
from protodoc.core.resolve import type_href

_FIELDS_HEADER = [
    "|   Name    |   Type    |  Description |",
    "| --------- | --------- | ------------ |",
]
_CONSTANTS_HEADER = [
    "|   Value   |   Name    |  Description |",
    "| --------- | --------- | ------------ |",
]


def escape_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\r\n", "\n").replace("\n", "<br/>")


def _paragraph(text: str) -> list[str]:
    return [text, ""] if text else []


class MarkdownRenderer:
    name = "markdown"

    def render(self, document: Document) -> str:
        lines = ["# API Protocol", "", "Table of Contents", ""]
        lines += self._toc(document)
        lines.append("")

        for service in document.services:
            lines += self._service(document, service)

        lines += ["## Enums", ""]
        for enum in document.enums:
            lines += self._enum(enum)

        lines += ["## Objects", ""]
        for obj in document.objects:
            lines += self._object(document, obj)

        while lines and lines[-1] == "":
            lines.pop()
        return "\n".join(lines) + "\n"

    def _toc(self, document: Document) -> list[str]:
        lines: list[str] = []
        for service in document.services:
            lines.append(f"* [Service {service.service_name}]({service.anchor})")
            for method in service.methods:
                lines.append(f"    * [Method {method.service_name}.{method.method_name}]({method.anchor})")
        lines.append("* [Enums](#enums)")
        lines += [f"    * [Enum {enum.name}]({enum.anchor})" for enum in document.enums]
        lines.append("* [Objects](#objects)")
        lines += [f"    * [Object {obj.name}]({obj.anchor})" for obj in document.objects]
        return lines

    def _fields(self, document: Document, fields: Sequence[Field]) -> list[str]:
        rows = [
            f"| {escape_cell(field.name)} | {type_href(document, field)} | {escape_cell(field.comment)} |"
            for field in fields
        ]
        return [*_FIELDS_HEADER, *rows, ""]

    def _service(self, document: Document, service: Service) -> list[str]:
        lines = [f"## Service {service.service_name}", ""]
        lines += _paragraph(service.comment)
        for method in service.methods:
            lines += self._method(document, method)
        return lines

    def _method(self, document: Document, method: Method) -> list[str]:
        lines = [f"### Method {method.service_name}.{method.method_name}", ""]
        if method.is_websocket:
            lines += [f"WebSocket {method.kind}", ""]
        lines.append(f"> {method.http_method} {method.url_path} <br/>")
        if not method.is_websocket:
            lines.append("> Content-Type: application/json <br/>")
            lines.append("> Authorization: Bearer (token) <br/>")
        lines.append("")
        lines += _paragraph(method.comment)

        if method.request.is_empty:
            lines += ["Request is empty", ""]
        else:
            lines += ["Request parameters", ""]
            lines += self._fields(document, method.request.params)

        if method.response.is_empty:
            lines += ["Response is empty", ""]
        else:
            lines += ["Response parameters", ""]
            lines += self._fields(document, method.response.params)
        return lines

    def _enum(self, enum: DocEnum) -> list[str]:
        lines = [f"### enum {enum.name}", ""]
        lines += _paragraph(enum.comment)
        lines += ["Constants", "", *_CONSTANTS_HEADER]
        for constant in enum.constants:
            lines.append(f"| {constant.value} | {escape_cell(constant.name)} | {escape_cell(constant.comment)} |")
        lines.append("")
        return lines

    def _object(self, document: Document, obj: DocObject) -> list[str]:
        lines = [f"### object {obj.name}", ""]
        lines += _paragraph(obj.comment)
        if obj.is_empty:
            lines += ["It has no attributes", ""]
        else:
            lines += ["Attributes", ""]
            lines += self._fields(document, obj.attrs)
        return lines
