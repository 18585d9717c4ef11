"""Unit tests for field type resolution."""

from __future__ import annotations

import pytest

from protodoc.core.build import build_document
from protodoc.core.document import DocEnum, DocObject, Document, Field
from protodoc.core.resolve import (
    SCALAR_TYPES,
    Resolution,
    TypeKind,
    candidate_names,
    resolve_type,
    type_href,
    type_label,
)
from protodoc.models import SchemaUnit


def _doc(enums: list[str] = [], objects: list[str] = []) -> Document:  # noqa: B006
    return Document(
        enums=[DocEnum(name=name) for name in enums],
        objects=[DocObject(name=name) for name in objects],
    )


class TestCandidateNames:
    def test_innermost_scope_first(self) -> None:
        assert list(candidate_names("T", "A.B")) == ["A.B.T", "A.T", "T"]

    def test_root_scope(self) -> None:
        assert list(candidate_names("T", "")) == ["T", "T"]


class TestScalars:
    @pytest.mark.parametrize("name", sorted(SCALAR_TYPES))
    def test_scalar_never_looks_up_catalogs(self, name: str) -> None:
        # a catalog entry with the same name must not win over the scalar
        doc = _doc(enums=[name], objects=[name])
        field = Field(name="f", type_name=name)
        assert resolve_type(doc, field) == Resolution(TypeKind.SCALAR, name)
        assert type_label(doc, field) == name
        assert type_href(doc, field) == name


class TestNil:
    @pytest.mark.parametrize("repeated", [False, True])
    def test_empty_type_is_nil(self, repeated: bool) -> None:
        doc = _doc(enums=[""], objects=[""])
        field = Field(name="f", type_name="", repeated=repeated)
        assert resolve_type(doc, field).kind == TypeKind.NIL
        assert type_label(doc, field) == "(nil)"
        assert type_href(doc, field) == "(nil)"


class TestScopeSearch:
    def test_innermost_enum_wins(self) -> None:
        doc = _doc(enums=["A.T", "A.B.T"])
        field = Field(name="f", type_name="T", enclosing="A.B")
        assert type_label(doc, field) == "enum A.B.T"

    def test_falls_back_to_outer_scope(self) -> None:
        doc = _doc(enums=["A.T"])
        field = Field(name="f", type_name="T", enclosing="A.B")
        assert type_label(doc, field) == "enum A.T"

    def test_falls_back_to_root_scope(self) -> None:
        doc = _doc(objects=["T"])
        field = Field(name="f", type_name="T", enclosing="A.B")
        assert type_label(doc, field) == "object T"

    def test_enum_preferred_over_object_at_same_scope(self) -> None:
        doc = _doc(enums=["A.T"], objects=["A.T"])
        field = Field(name="f", type_name="T", enclosing="A")
        assert resolve_type(doc, field).kind == TypeKind.ENUM

    def test_enum_in_outer_scope_preferred_over_inner_object(self) -> None:
        doc = _doc(enums=["T"], objects=["A.T"])
        field = Field(name="f", type_name="T", enclosing="A")
        assert type_label(doc, field) == "enum T"

    def test_qualified_type_name(self) -> None:
        doc = _doc(objects=["Outer.Inner"])
        field = Field(name="f", type_name="Outer.Inner", enclosing="Other")
        assert type_label(doc, field) == "object Outer.Inner"

    def test_first_catalog_entry_wins_for_duplicates(self) -> None:
        doc = Document(objects=[DocObject(name="Dup", comment="first"), DocObject(name="Dup", comment="second")])
        field = Field(name="f", type_name="Dup")
        assert resolve_type(doc, field) == Resolution(TypeKind.OBJECT, "Dup")


class TestUnresolved:
    def test_external_reference_is_bracketed(self) -> None:
        field = Field(name="ts", type_name="google.protobuf.Timestamp")
        assert type_label(_doc(), field) == "(google.protobuf.Timestamp)"
        assert type_href(_doc(), field) == "(google.protobuf.Timestamp)"


class TestRepeated:
    @pytest.mark.parametrize(
        ("type_name", "expected_label", "expected_href"),
        [
            ("string", "array of string", "array of string"),
            ("Color", "array of enum Color", "array of [enum Color](#enum-color)"),
            ("Foo.Bar", "array of object Foo.Bar", "array of [object Foo.Bar](#object-foobar)"),
            ("Missing", "array of (Missing)", "array of (Missing)"),
        ],
    )
    def test_array_prefix(self, type_name: str, expected_label: str, expected_href: str) -> None:
        doc = _doc(enums=["Color"], objects=["Foo.Bar"])
        field = Field(name="f", type_name=type_name, repeated=True)
        assert type_label(doc, field) == expected_label
        assert type_href(doc, field) == expected_href

    def test_no_prefix_when_not_repeated(self) -> None:
        doc = _doc(enums=["Color"])
        field = Field(name="f", type_name="Color")
        assert not type_label(doc, field).startswith("array of ")
        assert not type_href(doc, field).startswith("array of ")


class TestAnchors:
    def test_anchor_is_lowercase_and_dotless(self) -> None:
        doc = _doc(objects=["Foo.Bar"])
        assert type_href(doc, Field(name="f", type_name="Foo.Bar")) == "[object Foo.Bar](#object-foobar)"

    def test_enum_anchor_uses_same_id(self) -> None:
        doc = _doc(enums=["Foo.Bar"])
        assert type_href(doc, Field(name="f", type_name="Foo.Bar")) == "[enum Foo.Bar](#enum-foobar)"
        assert doc.enums[0].anchor == "#enum-foobar"


def test_resolution_against_built_document(nested_unit: SchemaUnit) -> None:
    doc = build_document(nested_unit)
    outer = {f.name: f for f in doc.services[0].methods[0].request.params}
    inner = {f.name: f for f in next(o for o in doc.objects if o.name == "Outer.Inner").attrs}

    assert type_label(doc, outer["inner"]) == "object Outer.Inner"
    assert type_label(doc, outer["kind"]) == "enum Kind"
    assert type_label(doc, outer["items"]) == "array of object Item"
    assert type_label(doc, inner["kind"]) == "enum Outer.Inner.Kind"
    assert type_label(doc, inner["remote"]) == "(google.protobuf.Timestamp)"
