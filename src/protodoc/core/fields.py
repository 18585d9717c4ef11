from protodoc.core.comments import compose_block
from protodoc.core.document import EnumField, Field
from protodoc.models import EnumDecl, MessageDecl


def extract_fields(message: MessageDecl, enclosing: str) -> list[Field]:
    """Return the fields declared directly in ``message``, in declaration order.

    Nested messages and enums are not fields. Type names are stored as written;
    they are resolved against the document catalogs at render time.
    """
    return [
        Field(
            name=decl.name,
            type_name=decl.type_name,
            repeated=decl.repeated,
            comment=compose_block(decl.comments, " "),
            enclosing=enclosing,
        )
        for decl in message.fields
    ]


def extract_enum_fields(enum: EnumDecl, enclosing: str) -> list[EnumField]:
    return [
        EnumField(
            name=value.name,
            value=value.value,
            comment=compose_block(value.comments, " "),
            enclosing=enclosing,
        )
        for value in enum.values
    ]
