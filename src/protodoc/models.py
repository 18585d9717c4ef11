from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class _Decl(BaseModel):
    model_config = ConfigDict(frozen=True)


class CommentBlock(_Decl):
    leading: list[str] = []
    inline: str | None = None


class FieldDecl(_Decl):
    kind: Literal["field"] = "field"
    name: str
    type_name: str
    repeated: bool = False
    comments: CommentBlock = CommentBlock()


class EnumValueDecl(_Decl):
    name: str
    value: str
    comments: CommentBlock = CommentBlock()


class EnumDecl(_Decl):
    kind: Literal["enum"] = "enum"
    name: str
    values: list[EnumValueDecl] = []
    comments: CommentBlock = CommentBlock()


class MessageDecl(_Decl):
    kind: Literal["message"] = "message"
    name: str
    body: list["MessageElement"] = []
    comments: CommentBlock = CommentBlock()

    @property
    def fields(self) -> list[FieldDecl]:
        return [x for x in self.body if isinstance(x, FieldDecl)]


MessageElement = Annotated[FieldDecl | MessageDecl | EnumDecl, Field(discriminator="kind")]

MessageDecl.model_rebuild()  # necessary for recursive types


class RpcDecl(_Decl):
    name: str
    request_type: str
    response_type: str
    request_stream: bool = False
    response_stream: bool = False
    comments: CommentBlock = CommentBlock()


class ServiceDecl(_Decl):
    kind: Literal["service"] = "service"
    name: str
    rpcs: list[RpcDecl] = []
    comments: CommentBlock = CommentBlock()


TopLevelElement = Annotated[ServiceDecl | MessageDecl | EnumDecl, Field(discriminator="kind")]


class SchemaUnit(_Decl):
    filename: str = "<memory>"
    package: str | None = None
    body: list[TopLevelElement] = []

    @property
    def services(self) -> list[ServiceDecl]:
        return [x for x in self.body if isinstance(x, ServiceDecl)]
