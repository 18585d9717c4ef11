from collections.abc import Iterator, Sequence

from protodoc.core.comments import compose_block
from protodoc.core.document import Method, Request, Response, StreamingKind
from protodoc.core.fields import extract_fields
from protodoc.models import MessageDecl, RpcDecl, SchemaUnit, ServiceDecl

MISSING_PACKAGE = "(missed-package)"


class MissingMessageError(LookupError):
    """A method refers to a payload message that the schema does not declare."""

    def __init__(self, type_name: str, filename: str = "<memory>") -> None:
        super().__init__(f"{filename}: proto doesn't have message {type_name!r}")
        self.type_name = type_name
        self.filename = filename


def streaming_kind(request_stream: bool, response_stream: bool) -> StreamingKind:
    if request_stream and response_stream:
        return StreamingKind.BIDIRECTIONAL_STREAMING
    if request_stream:
        return StreamingKind.CLIENT_STREAMING
    if response_stream:
        return StreamingKind.SERVER_STREAMING
    return StreamingKind.UNARY


def http_method(kind: StreamingKind) -> str:
    # streaming methods are served over a websocket, which is opened with GET
    return "POST" if kind == StreamingKind.UNARY else "GET"


def method_route(package_name: str, service_name: str, method_name: str) -> str:
    return f"/{package_name}/{service_name}/{method_name}"


def iter_messages(body: Sequence[object], enclosing: str = "") -> Iterator[tuple[str, MessageDecl]]:
    """Yield ``(qualified_name, message)`` for every message, depth first."""
    for decl in body:
        if isinstance(decl, MessageDecl):
            name = f"{enclosing}.{decl.name}" if enclosing else decl.name
            yield name, decl
            yield from iter_messages(decl.body, name)


def _candidates(unit: SchemaUnit, type_name: str) -> list[str]:
    wanted = type_name.lstrip(".")
    candidates = [wanted]
    if unit.package and wanted.startswith(unit.package + "."):
        candidates.append(wanted[len(unit.package) + 1 :])
    return candidates


def find_message(unit: SchemaUnit, type_name: str) -> tuple[str, MessageDecl]:
    """Locate a payload message by name, preferring top-level declarations.

    A leading ``.`` and the unit's own package prefix are ignored. The
    returned name is the message's qualified name within the unit.
    """
    for wanted in _candidates(unit, type_name):
        for decl in unit.body:
            if isinstance(decl, MessageDecl) and decl.name == wanted:
                return decl.name, decl
        for name, decl in iter_messages(unit.body):
            if name == wanted:
                return name, decl
    raise MissingMessageError(type_name, unit.filename)


def _request(unit: SchemaUnit, rpc: RpcDecl) -> Request:
    name, message = find_message(unit, rpc.request_type)
    return Request(params=extract_fields(message, name), type_name=rpc.request_type, message_name=name)


def _response(unit: SchemaUnit, rpc: RpcDecl) -> Response:
    name, message = find_message(unit, rpc.response_type)
    return Response(params=extract_fields(message, name), type_name=rpc.response_type, message_name=name)


def compose_method(unit: SchemaUnit, service: ServiceDecl, rpc: RpcDecl) -> Method:
    package_name = unit.package or MISSING_PACKAGE
    kind = streaming_kind(rpc.request_stream, rpc.response_stream)
    return Method(
        package_name=package_name,
        service_name=service.name,
        method_name=rpc.name,
        url_path=method_route(package_name, service.name, rpc.name),
        http_method=http_method(kind),
        kind=kind,
        comment=compose_block(rpc.comments, "\n"),
        request=_request(unit, rpc),
        response=_response(unit, rpc),
    )


def compose_methods(unit: SchemaUnit, service: ServiceDecl) -> list[Method]:
    return [compose_method(unit, service, rpc) for rpc in service.rpcs]
