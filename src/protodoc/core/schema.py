"""Parse ``.proto`` source into a :class:`~protodoc.models.SchemaUnit`.

Parsing is done with the tree-sitter ``proto`` grammar. Declarations are read
from token positions rather than grammar field names, so small differences
between grammar revisions do not change the resulting tree.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import cast

from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

from protodoc.models import (
    CommentBlock,
    EnumDecl,
    EnumValueDecl,
    FieldDecl,
    MessageDecl,
    RpcDecl,
    SchemaUnit,
    ServiceDecl,
)

logger = logging.getLogger(__name__)

_LANGUAGE = "proto"
_FIELD_LABELS = frozenset({"repeated", "optional", "required"})
_FIELD_NODES = frozenset({"field", "oneof_field", "map_field"})


class SchemaSyntaxError(ValueError):
    def __init__(self, filename: str, line: int, column: int, snippet: str = "") -> None:
        message = f"{filename}:{line}:{column}: syntax error"
        if snippet:
            message += f" near {snippet!r}"
        super().__init__(message)
        self.filename = filename
        self.line = line
        self.column = column


def _text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text else ""


def _tokens(node: Node) -> list[Node]:
    return [child for child in node.children if child.type != "comment"]


def _body(node: Node) -> list[Node]:
    for child in node.children:
        if child.type.endswith("_body"):
            return child.children
    return node.children


def _name_after_keyword(node: Node) -> str:
    tokens = _tokens(node)
    return _text(tokens[1]) if len(tokens) > 1 else ""


def clean_comment(raw: str) -> str:
    """Strip comment markers and surrounding whitespace from one comment token."""
    if raw.startswith("//"):
        return raw.lstrip("/").strip()
    body = raw[2:]
    if body.endswith("*/"):
        body = body[:-2]
    lines: list[str] = []
    for line in body.splitlines():
        line = line.strip()
        if line.startswith("*"):
            line = line.lstrip("*").strip()
        lines.append(line)
    return "\n".join(lines).strip()


def _with_comments(children: list[Node]) -> Iterator[tuple[Node, CommentBlock]]:
    """Pair every named node with its leading and inline comments."""
    items = [child for child in children if child.is_named]
    for i, node in enumerate(items):
        if node.type == "comment":
            continue

        leading: list[str] = []
        row = node.start_point.row
        j = i - 1
        while j >= 0 and items[j].type == "comment" and items[j].end_point.row >= row - 1:
            comment = items[j]
            previous = items[j - 1] if j > 0 else None
            if (
                previous is not None
                and previous.type != "comment"
                and previous.end_point.row == comment.start_point.row
            ):
                # inline comment of the previous declaration
                break
            leading.insert(0, clean_comment(_text(comment)))
            row = comment.start_point.row
            j -= 1

        inline = None
        if i + 1 < len(items):
            following = items[i + 1]
            if following.type == "comment" and following.start_point.row == node.end_point.row:
                inline = clean_comment(_text(following))

        yield node, CommentBlock(leading=leading, inline=inline)


def _split_at(tokens: list[Node], marker: str) -> tuple[list[Node], list[Node]]:
    for i, token in enumerate(tokens):
        if token.type == marker:
            return tokens[:i], tokens[i + 1 :]
    return tokens, []


def _field(node: Node, comments: CommentBlock) -> FieldDecl:
    head, _ = _split_at(_tokens(node), "=")
    repeated = any(token.type == "repeated" for token in head)
    head = [token for token in head if token.type not in _FIELD_LABELS]
    name = _text(head[-1]) if head else ""
    type_name = "".join(_text(token) for token in head[:-1])
    if node.type == "map_field":
        type_name = type_name.replace(",", ", ")
    return FieldDecl(name=name, type_name=type_name, repeated=repeated, comments=comments)


def _enum_value(node: Node, comments: CommentBlock) -> EnumValueDecl:
    head, tail = _split_at(_tokens(node), "=")
    value_tokens: list[str] = []
    for token in tail:
        if token.type in ("[", ";"):
            break
        value_tokens.append(_text(token))
    return EnumValueDecl(
        name="".join(_text(token) for token in head),
        value="".join(value_tokens),
        comments=comments,
    )


def _enum(node: Node, comments: CommentBlock) -> EnumDecl:
    values = [_enum_value(child, block) for child, block in _with_comments(_body(node)) if child.type == "enum_field"]
    return EnumDecl(name=_name_after_keyword(node), values=values, comments=comments)


def _message_body(children: list[Node]) -> list[FieldDecl | MessageDecl | EnumDecl]:
    body: list[FieldDecl | MessageDecl | EnumDecl] = []
    for child, block in _with_comments(children):
        if child.type in _FIELD_NODES:
            body.append(_field(child, block))
        elif child.type == "oneof":
            body.extend(decl for decl in _message_body(_body(child)) if isinstance(decl, FieldDecl))
        elif child.type == "message":
            body.append(_message(child, block))
        elif child.type == "enum":
            body.append(_enum(child, block))
    return body


def _message(node: Node, comments: CommentBlock) -> MessageDecl:
    return MessageDecl(name=_name_after_keyword(node), body=_message_body(_body(node)), comments=comments)


def _rpc(node: Node, comments: CommentBlock) -> RpcDecl:
    tokens = _tokens(node)
    request, response = _split_at(tokens[2:], "returns")

    def payload(part: list[Node]) -> tuple[str, bool]:
        stream = False
        names: list[str] = []
        for token in part:
            if token.type == ")":
                break
            if token.type == "stream":
                stream = True
            elif token.type != "(":
                names.append(_text(token))
        return "".join(names), stream

    request_type, request_stream = payload(request)
    response_type, response_stream = payload(response)
    return RpcDecl(
        name=_text(tokens[1]),
        request_type=request_type,
        request_stream=request_stream,
        response_type=response_type,
        response_stream=response_stream,
        comments=comments,
    )


def _service(node: Node, comments: CommentBlock) -> ServiceDecl:
    rpcs = [_rpc(child, block) for child, block in _with_comments(_body(node)) if child.type == "rpc"]
    return ServiceDecl(name=_name_after_keyword(node), rpcs=rpcs, comments=comments)


def _first_error(node: Node) -> Node | None:
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def parse_schema_source(source_bytes: bytes, filename: str = "<memory>") -> SchemaUnit:
    parser = get_parser(cast(SupportedLanguage, _LANGUAGE))
    tree = parser.parse(source_bytes)
    root = tree.root_node

    if root.has_error:
        error = _first_error(root) or root
        raise SchemaSyntaxError(
            filename,
            error.start_point.row + 1,
            error.start_point.column + 1,
            _text(error)[:40],
        )

    package: str | None = None
    body: list[ServiceDecl | MessageDecl | EnumDecl] = []
    for child, block in _with_comments(root.children):
        if child.type == "package" and package is None:
            package = "".join(_text(token) for token in _tokens(child)[1:] if token.type != ";")
        elif child.type == "service":
            body.append(_service(child, block))
        elif child.type == "message":
            body.append(_message(child, block))
        elif child.type == "enum":
            body.append(_enum(child, block))

    logger.debug("Parsed %s: package=%s, %d top-level declaration(s)", filename, package, len(body))
    return SchemaUnit(filename=filename, package=package, body=body)


def parse_schema_file(path: str | Path) -> SchemaUnit:
    file_path = Path(path)
    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return parse_schema_source(source_bytes, file_path.name)
