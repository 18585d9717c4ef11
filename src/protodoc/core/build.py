"""Build a :class:`Document` from a parsed schema unit."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from protodoc.core.comments import compose_head_comment
from protodoc.core.document import DocEnum, DocObject, Document, Service
from protodoc.core.endpoints import MISSING_PACKAGE, compose_methods
from protodoc.core.fields import extract_enum_fields, extract_fields
from protodoc.models import EnumDecl, MessageDecl, SchemaUnit, ServiceDecl

logger = logging.getLogger(__name__)


def build_services(unit: SchemaUnit) -> list[Service]:
    return [
        Service(
            comment=compose_head_comment(decl.comments.leading),
            package_name=unit.package or MISSING_PACKAGE,
            service_name=decl.name,
            methods=compose_methods(unit, decl),
        )
        for decl in unit.body
        if isinstance(decl, ServiceDecl)
    ]


def payload_types(services: Sequence[Service]) -> set[str]:
    """Qualified names of the messages used as a request or response payload."""
    excludes: set[str] = set()
    for service in services:
        for method in service.methods:
            excludes.add(method.request.message_name)
            excludes.add(method.response.message_name)
    return excludes


def build_catalog(unit: SchemaUnit, excludes: set[str]) -> tuple[list[DocObject], list[DocEnum]]:
    """Collect every message and enum, depth first.

    Messages whose qualified name is in ``excludes`` are left out of the
    objects, but their nested declarations are still collected.
    """
    objects: list[DocObject] = []
    enums: list[DocEnum] = []

    def walk(body: Sequence[object], enclosing: str) -> None:
        for decl in body:
            if isinstance(decl, EnumDecl):
                name = enclosing[1:] + decl.name
                enums.append(
                    DocEnum(
                        name=name,
                        comment=compose_head_comment(decl.comments.leading),
                        constants=extract_enum_fields(decl, name),
                    )
                )
            elif isinstance(decl, MessageDecl):
                name = enclosing[1:] + decl.name
                if name in excludes:
                    logger.debug("Skipping payload message %s", name)
                else:
                    objects.append(
                        DocObject(
                            name=name,
                            comment=compose_head_comment(decl.comments.leading),
                            attrs=extract_fields(decl, name),
                        )
                    )
                walk(decl.body, enclosing + decl.name + ".")

    walk(unit.body, ".")
    return objects, enums


def build_document(unit: SchemaUnit) -> Document:
    services = build_services(unit)
    objects, enums = build_catalog(unit, payload_types(services))
    logger.info(
        "Built document for %s: %d service(s), %d enum(s), %d object(s)",
        unit.filename,
        len(services),
        len(enums),
        len(objects),
    )
    return Document(services=services, objects=objects, enums=enums)
