"""Documentation model built from a parsed schema unit.

The model stores raw field type names; resolution against the enum and
object catalogs happens when documentation is rendered
(see ``protodoc.core.resolve``).
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class StreamingKind(StrEnum):
    UNARY = "unary"
    CLIENT_STREAMING = "client-streaming"
    SERVER_STREAMING = "server-streaming"
    BIDIRECTIONAL_STREAMING = "bidirectional-streaming"


def href(typename: str) -> str:
    """Convert a fully qualified type name to a cross reference id."""
    return typename.lower().replace(".", "")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Field(_Frozen):
    name: str
    type_name: str
    message_name: str
    repeated: bool = False
    comment: str = ""
    # dot-joined names of the enclosing messages, used only for resolution
    enclosing: str = ""


class Request(_Frozen):
    params: list[Field] = []
    type_name: str
    message_name: str

    @property
    def is_empty(self) -> bool:
        return len(self.params) == 0


class Response(_Frozen):
    params: list[Field] = []
    type_name: str
    message_name: str

    @property
    def is_empty(self) -> bool:
        return len(self.params) == 0


class Method(_Frozen):
    package_name: str
    service_name: str
    method_name: str
    url_path: str
    http_method: str
    kind: StreamingKind = StreamingKind.UNARY
    comment: str = ""
    request: Request
    response: Response

    @property
    def is_websocket(self) -> bool:
        return self.kind != StreamingKind.UNARY

    @property
    def anchor(self) -> str:
        return "#method-" + self.service_name.lower() + self.method_name.lower()


class Service(_Frozen):
    comment: str = ""
    package_name: str
    service_name: str
    methods: list[Method] = []

    @property
    def anchor(self) -> str:
        return "#service-" + self.service_name.lower()


class DocObject(_Frozen):
    """A message that is not used directly as a request or response."""

    name: str
    comment: str = ""
    attrs: list[Field] = []

    @property
    def is_empty(self) -> bool:
        return len(self.attrs) == 0

    @property
    def anchor(self) -> str:
        return "#object-" + href(self.name)


class EnumField(_Frozen):
    name: str
    value: str
    comment: str = ""
    enclosing: str = ""


class DocEnum(_Frozen):
    name: str
    comment: str = ""
    constants: list[EnumField] = []

    @property
    def anchor(self) -> str:
        return "#enum-" + href(self.name)


class Document(_Frozen):
    services: list[Service] = []
    objects: list[DocObject] = []
    enums: list[DocEnum] = []
