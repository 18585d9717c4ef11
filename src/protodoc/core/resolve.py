"""Field type resolution against a document's enum and object catalogs.

A field's raw type name is looked up from its innermost enclosing scope
outward to the root scope. Enums are searched before objects; within a
scope the first catalog entry in declaration order wins. Names that match
nothing are shown as external references, never raised as errors.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from protodoc.core.document import Document, Field, href

SCALAR_TYPES: frozenset[str] = frozenset(
    {
        "double",
        "float",
        "int32",
        "int64",
        "uint32",
        "uint64",
        "sint32",
        "sint64",
        "fixed32",
        "fixed64",
        "sfixed32",
        "sfixed64",
        "bool",
        "string",
        "bytes",
    }
)

NIL_LABEL = "(nil)"
ARRAY_PREFIX = "array of "


class TypeKind(StrEnum):
    NIL = "nil"
    SCALAR = "scalar"
    ENUM = "enum"
    OBJECT = "object"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class Resolution:
    kind: TypeKind
    # fully qualified name for enums and objects, raw name otherwise
    name: str
    repeated: bool = False


def candidate_names(type_name: str, enclosing: str) -> Iterator[str]:
    """Yield qualified candidates for ``type_name``, innermost scope first."""
    scopes = enclosing.split(".")
    for i in range(len(scopes), -1, -1):
        prefix = ".".join(scopes[:i])
        yield f"{prefix}.{type_name}" if prefix else type_name


def _lookup(type_name: str, enclosing: str, names: Iterable[str]) -> str | None:
    catalog = list(names)
    for qualified in candidate_names(type_name, enclosing):
        for name in catalog:
            if name == qualified:
                return name
    return None


def resolve_type(document: Document, field: Field) -> Resolution:
    if not field.type_name:
        return Resolution(TypeKind.NIL, "")
    if field.type_name in SCALAR_TYPES:
        return Resolution(TypeKind.SCALAR, field.type_name, field.repeated)

    enum_name = _lookup(field.type_name, field.enclosing, (e.name for e in document.enums))
    if enum_name is not None:
        return Resolution(TypeKind.ENUM, enum_name, field.repeated)

    object_name = _lookup(field.type_name, field.enclosing, (o.name for o in document.objects))
    if object_name is not None:
        return Resolution(TypeKind.OBJECT, object_name, field.repeated)

    return Resolution(TypeKind.UNRESOLVED, field.type_name, field.repeated)


def format_label(resolution: Resolution) -> str:
    if resolution.kind == TypeKind.NIL:
        return NIL_LABEL
    if resolution.kind == TypeKind.SCALAR:
        label = resolution.name
    elif resolution.kind == TypeKind.UNRESOLVED:
        label = f"({resolution.name})"
    else:
        label = f"{resolution.kind} {resolution.name}"
    return ARRAY_PREFIX + label if resolution.repeated else label


def format_href(resolution: Resolution) -> str:
    if resolution.kind in (TypeKind.ENUM, TypeKind.OBJECT):
        label = f"[{resolution.kind} {resolution.name}](#{resolution.kind}-{href(resolution.name)})"
        return ARRAY_PREFIX + label if resolution.repeated else label
    return format_label(resolution)


def type_label(document: Document, field: Field) -> str:
    """Plain-text rendering of a field's type."""
    return format_label(resolve_type(document, field))


def type_href(document: Document, field: Field) -> str:
    """Markdown rendering of a field's type, with a link for enums and objects."""
    return format_href(resolve_type(document, field))
