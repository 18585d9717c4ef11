"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

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

_REPO_ROOT = Path(__file__).parent.parent

PET_PROTO = """\
syntax = "proto3";

package pet;

// Pet management.
service PetService {
  // Fetch a single pet.
  rpc GetPet(GetPetRequest) returns (Pet); // by id
}

message GetPetRequest {
  string id = 1;
}

// A pet.
message Pet {
  string name = 1; // display name
  Status status = 2;
}

enum Status {
  ALIVE = 0;
  DEAD = 1; // no longer with us
}
"""


# ---------------------------------------------------------------------------
# Auto-marker: tag every test under tests/unit as "unit"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared schema fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def pet_unit() -> SchemaUnit:
    """The pet schema from ``PET_PROTO`` built by hand."""
    return SchemaUnit(
        filename="pet.proto",
        package="pet",
        body=[
            ServiceDecl(
                name="PetService",
                comments=CommentBlock(leading=["Pet management."]),
                rpcs=[
                    RpcDecl(
                        name="GetPet",
                        request_type="GetPetRequest",
                        response_type="Pet",
                        comments=CommentBlock(leading=["Fetch a single pet."], inline="by id"),
                    )
                ],
            ),
            MessageDecl(name="GetPetRequest", body=[FieldDecl(name="id", type_name="string")]),
            MessageDecl(
                name="Pet",
                comments=CommentBlock(leading=["A pet."]),
                body=[
                    FieldDecl(name="name", type_name="string", comments=CommentBlock(inline="display name")),
                    FieldDecl(name="status", type_name="Status"),
                ],
            ),
            EnumDecl(
                name="Status",
                values=[
                    EnumValueDecl(name="ALIVE", value="0"),
                    EnumValueDecl(name="DEAD", value="1", comments=CommentBlock(inline="no longer with us")),
                ],
            ),
        ],
    )


@pytest.fixture
def nested_unit() -> SchemaUnit:
    """Nested scopes: ``Outer.Inner`` shadows the top-level ``Inner`` and ``Kind``."""
    return SchemaUnit(
        filename="nested.proto",
        package="shop",
        body=[
            ServiceDecl(
                name="Shop",
                rpcs=[
                    RpcDecl(name="Watch", request_type="Outer", response_type="Inner", response_stream=True),
                ],
            ),
            EnumDecl(name="Kind", values=[EnumValueDecl(name="TOP", value="0")]),
            MessageDecl(
                name="Outer",
                body=[
                    FieldDecl(name="inner", type_name="Inner"),
                    FieldDecl(name="kind", type_name="Kind"),
                    FieldDecl(name="items", type_name="Item", repeated=True),
                    MessageDecl(
                        name="Inner",
                        body=[
                            FieldDecl(name="kind", type_name="Kind"),
                            FieldDecl(name="remote", type_name="google.protobuf.Timestamp"),
                            EnumDecl(name="Kind", values=[EnumValueDecl(name="NESTED", value="0")]),
                        ],
                    ),
                    EnumDecl(name="Level", values=[EnumValueDecl(name="LOW", value="0")]),
                ],
            ),
            MessageDecl(name="Inner", body=[FieldDecl(name="value", type_name="int64")]),
            MessageDecl(name="Item", body=[FieldDecl(name="sku", type_name="string")]),
        ],
    )


@pytest.fixture
def pet_proto_source() -> str:
    return PET_PROTO


@pytest.fixture
def pet_proto_file(tmp_path: Path) -> Path:
    path = tmp_path / "pet.proto"
    path.write_text(PET_PROTO, encoding="utf-8")
    return path
