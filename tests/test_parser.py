"""Tests for SDL parsing into the IR."""

import logging
import textwrap

import pytest

from gql_fraggen.core.errors import SchemaParseError
from gql_fraggen.core.ir import (
    IRInputType,
    IRInterface,
    IRListType,
    IRNamedType,
    IRNonNullType,
    IRObjectType,
    IRUnion,
)
from gql_fraggen.core.parser import SchemaParser


def parse(sdl: str):
    return SchemaParser(quiet=True).parse_string(textwrap.dedent(sdl))


# =============================================================================
# Tests: Type definitions
# =============================================================================


class TestDefinitions:
    """Each kind of type definition lands in its own registry bucket."""

    @pytest.fixture
    def ir(self):
        return parse("""
            \"\"\"A point in time\"\"\"
            scalar DateTime
            enum Style { PILSNER STOUT }
            interface Node { id: ID! }
            type Beer implements Node {
              id: ID!
              tags(first: Int = 10, style: Style = STOUT): [[String!]]!
              brewed: DateTime
            }
            union Drink = Beer
            input BeerInput { name: String! abv: Float = 4.5 }
            type Query { beer(id: ID!): Beer }
        """)

    def test_buckets(self, ir):
        assert isinstance(ir.types["Beer"], IRObjectType)
        assert isinstance(ir.interfaces["Node"], IRInterface)
        assert isinstance(ir.unions["Drink"], IRUnion)
        assert isinstance(ir.inputs["BeerInput"], IRInputType)
        assert ir.enums["Style"].values == ["PILSNER", "STOUT"]
        assert ir.scalars["DateTime"].description == "A point in time"

    def test_builtin_scalars_present(self, ir):
        for name in ("ID", "String", "Int", "Float", "Boolean"):
            assert name in ir.scalars
        assert list(ir.user_scalars) == ["DateTime"]

    def test_declaration_order(self, ir):
        assert list(ir.types) == ["Beer", "Query"]
        assert [f.name for f in ir.types["Beer"].fields] == ["id", "tags", "brewed"]

    def test_wrappers_preserved(self, ir):
        tags = ir.types["Beer"].fields[1]
        assert tags.type == IRNonNullType(
            IRListType(IRListType(IRNonNullType(IRNamedType("String"))))
        )
        assert str(tags.type) == "[[String!]]!"

    def test_arguments_and_defaults(self, ir):
        tags = ir.types["Beer"].fields[1]
        assert [a.name for a in tags.arguments] == ["first", "style"]
        assert [a.default_value for a in tags.arguments] == ["10", "STOUT"]
        abv = ir.inputs["BeerInput"].fields[1]
        assert abv.default_value == "4.5"
        assert ir.inputs["BeerInput"].fields[0].default_value is None

    def test_interfaces_and_members(self, ir):
        assert ir.types["Beer"].interfaces == ["Node"]
        assert ir.unions["Drink"].members == ["Beer"]

    def test_schema_and_directive_definitions_ignored(self):
        ir = parse("""
            directive @cached(ttl: Int) on FIELD_DEFINITION
            schema { query: Root }
            type Root { version: String @cached(ttl: 60) }
        """)
        assert list(ir.types) == ["Root"]


# =============================================================================
# Tests: Extensions
# =============================================================================


class TestExtensions:
    """``extend`` definitions are merged into their base types."""

    def test_object_extension(self):
        ir = parse("""
            interface Node { id: ID! }
            type User { name: String }
            extend type User implements Node { id: ID! }
        """)
        user = ir.types["User"]
        assert [f.name for f in user.fields] == ["name", "id"]
        assert user.interfaces == ["Node"]

    def test_extension_before_definition(self):
        ir = parse("""
            extend type User { email: String }
            type User { name: String }
        """)
        assert [f.name for f in ir.types["User"].fields] == ["name", "email"]

    def test_union_enum_and_input_extensions(self):
        ir = parse("""
            type Beer { id: ID }
            type Wine { id: ID }
            union Drink = Beer
            extend union Drink = Wine
            enum Style { PILSNER }
            extend enum Style { STOUT }
            input Filter { id: ID }
            extend input Filter { name: String }
        """)
        assert ir.unions["Drink"].members == ["Beer", "Wine"]
        assert ir.enums["Style"].values == ["PILSNER", "STOUT"]
        assert [f.name for f in ir.inputs["Filter"].fields] == ["id", "name"]

    def test_interface_extension(self):
        ir = parse("""
            interface Node { id: ID! }
            extend interface Node { createdAt: String }
        """)
        assert [f.name for f in ir.interfaces["Node"].fields] == ["id", "createdAt"]


# =============================================================================
# Tests: Errors and diagnostics
# =============================================================================


class TestErrors:
    """Invalid input is rejected before any IR is produced."""

    def test_syntax_error(self):
        with pytest.raises(SchemaParseError) as exc_info:
            parse("type User { name: }")
        assert "schema.graphql" in str(exc_info.value)
        assert exc_info.value.errors

    def test_unknown_type(self):
        with pytest.raises(SchemaParseError) as exc_info:
            parse("type User { group: Group }")
        assert "Group" in str(exc_info.value)

    def test_extension_of_unknown_type(self):
        with pytest.raises(SchemaParseError):
            parse("extend type Ghost { id: ID }")

    def test_missing_path(self):
        with pytest.raises(ValueError):
            SchemaParser().parse_all()


class TestDiagnostics:
    """Schema diagnostics are warnings, not failures."""

    SDL = "type User { name: String }"

    def test_warning_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gql_fraggen"):
            parser = SchemaParser()
            ir = parser.parse_string(self.SDL)
        assert "User" in ir.types
        assert any("Query root type" in message for message in parser.diagnostics)
        assert any("Query root type" in r.getMessage() for r in caplog.records)

    def test_quiet_suppresses_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gql_fraggen"):
            parser = SchemaParser(quiet=True)
            parser.parse_string(self.SDL)
        assert parser.diagnostics
        assert not caplog.records


# =============================================================================
# Tests: Schema files
# =============================================================================


class TestSchemaFiles:
    """Tests for reading schema files and directories."""

    def test_single_file(self, tmp_path):
        path = tmp_path / "schema.graphql"
        path.write_text("type Query { hello: String }")
        ir = SchemaParser(str(path)).parse_all()
        assert "Query" in ir.types

    def test_directory_is_walked(self, tmp_path):
        (tmp_path / "a.graphql").write_text("type Query { user: User }")
        nested = tmp_path / "types"
        nested.mkdir()
        (nested / "user.graphqls").write_text("type User { name: String }")
        (nested / "extra.gql").write_text("extend type User { email: String }")
        (tmp_path / "notes.txt").write_text("not a schema {")

        ir = SchemaParser(str(tmp_path)).parse_all()
        assert list(ir.types) == ["Query", "User"]
        assert [f.name for f in ir.types["User"].fields] == ["name", "email"]

    def test_syntax_error_names_the_file(self, tmp_path):
        (tmp_path / "broken.graphql").write_text("type {")
        with pytest.raises(SchemaParseError) as exc_info:
            SchemaParser(str(tmp_path)).parse_all()
        assert "broken.graphql" in str(exc_info.value)

    def test_empty_directory(self, tmp_path):
        with pytest.raises(SchemaParseError):
            SchemaParser(str(tmp_path)).parse_all()
