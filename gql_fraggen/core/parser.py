"""GraphQL schema parser using graphql-core.

Parses schema files (or SDL text), validates them, and produces an IRSchema.
Validation errors abort parsing; schema diagnostics that do not prevent
fragment generation are logged as warnings unless ``quiet`` is set.
"""

import logging
import os

from graphql import (
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    GraphQLError,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    Source,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    build_ast_schema,
    parse,
    print_ast,
    validate_schema,
)

from .errors import SchemaParseError
from .ir import (
    IRArgument,
    IREnum,
    IRField,
    IRInputType,
    IRInterface,
    IRListType,
    IRNamedType,
    IRNonNullType,
    IRObjectType,
    IRScalar,
    IRSchema,
    IRTypeRef,
    IRUnion,
)

log = logging.getLogger(__name__)

SCHEMA_FILE_EXTENSIONS = (".graphql", ".graphqls", ".gql")


class SchemaParser:
    """Parses GraphQL schema files into IR."""

    def __init__(self, schema_path: str | None = None, quiet: bool = False):
        """Initialize a parser.

        Args:
            schema_path: Schema file, or directory searched recursively for
                         .graphql, .graphqls and .gql files
            quiet: Do not log non-fatal schema diagnostics
        """
        self.schema_path = schema_path
        self.quiet = quiet
        self.diagnostics: list[str] = []
        self.ir = IRSchema()

    def parse_all(self) -> IRSchema:
        """Parse all schema files and return the complete IR."""
        if not self.schema_path:
            raise ValueError("No schema path given")
        schema_files = self._collect_schema_files()
        if not schema_files:
            raise SchemaParseError(f"No schema files found in {self.schema_path}")

        sources = []
        for file_path in schema_files:
            with open(file_path, encoding="utf-8") as f:
                sources.append(Source(f.read(), os.path.basename(file_path)))
        return self._parse_sources(sources)

    def parse_string(self, sdl: str, name: str = "schema.graphql") -> IRSchema:
        """Parse SDL text and return the complete IR."""
        return self._parse_sources([Source(sdl, name)])

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_FILE_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    def _parse_sources(self, sources: list[Source]) -> IRSchema:
        definitions = []
        for source in sources:
            try:
                document = parse(source)
            except GraphQLError as e:
                log.error("Error parsing %s", source.name)
                raise SchemaParseError(
                    f"Error parsing {source.name}: {e.message}", [e.message]
                ) from e
            definitions.extend(document.definitions)

        document = DocumentNode(definitions=tuple(definitions))
        self._validate(document)
        self._process_ast(document)
        log.info(
            "Parsed %d types (%d interfaces, %d unions, %d objects, %d inputs)",
            len(self.ir.types) + len(self.ir.interfaces) + len(self.ir.unions)
            + len(self.ir.inputs) + len(self.ir.enums) + len(self.ir.user_scalars),
            len(self.ir.interfaces),
            len(self.ir.unions),
            len(self.ir.types),
            len(self.ir.inputs),
        )
        return self.ir

    def _validate(self, document: DocumentNode):
        """Reject invalid schemas and report non-fatal diagnostics."""
        try:
            schema = build_ast_schema(document)
        except (GraphQLError, TypeError) as e:
            errors = str(e).split("\n\n")
            raise SchemaParseError(f"Invalid schema: {errors[0]}", errors) from e

        for error in validate_schema(schema):
            self.diagnostics.append(error.message)
            if not self.quiet:
                log.warning("%s", error.message)

    def _process_ast(self, document: DocumentNode):
        """Populate the IR from type definitions, then merge extensions."""
        extensions = []
        for definition in document.definitions:
            if isinstance(definition, ScalarTypeDefinitionNode):
                self._process_scalar(definition)
            elif isinstance(definition, EnumTypeDefinitionNode):
                self._process_enum(definition)
            elif isinstance(definition, InterfaceTypeDefinitionNode):
                self._process_interface(definition)
            elif isinstance(definition, ObjectTypeDefinitionNode):
                self._process_object_type(definition)
            elif isinstance(definition, UnionTypeDefinitionNode):
                self._process_union(definition)
            elif isinstance(definition, InputObjectTypeDefinitionNode):
                self._process_input_type(definition)
            elif isinstance(
                definition,
                (
                    EnumTypeExtensionNode,
                    ObjectTypeExtensionNode,
                    InterfaceTypeExtensionNode,
                    UnionTypeExtensionNode,
                    InputObjectTypeExtensionNode,
                ),
            ):
                extensions.append(definition)

        for extension in extensions:
            self._merge_extension(extension)

    @staticmethod
    def _description(node) -> str | None:
        return node.description.value if node.description else None

    def _process_scalar(self, node: ScalarTypeDefinitionNode):
        name = node.name.value
        self.ir.add(IRScalar(name=name, description=self._description(node)))

    def _process_enum(self, node: EnumTypeDefinitionNode):
        self.ir.add(
            IREnum(
                name=node.name.value,
                values=[v.name.value for v in node.values or []],
                description=self._description(node),
            )
        )

    def _process_interface(self, node: InterfaceTypeDefinitionNode):
        self.ir.add(
            IRInterface(
                name=node.name.value,
                fields=self._process_fields(node.fields),
                interfaces=[i.name.value for i in node.interfaces or []],
                description=self._description(node),
            )
        )

    def _process_object_type(self, node: ObjectTypeDefinitionNode):
        self.ir.add(
            IRObjectType(
                name=node.name.value,
                fields=self._process_fields(node.fields),
                interfaces=[i.name.value for i in node.interfaces or []],
                description=self._description(node),
            )
        )

    def _process_union(self, node: UnionTypeDefinitionNode):
        self.ir.add(
            IRUnion(
                name=node.name.value,
                members=[t.name.value for t in node.types or []],
                description=self._description(node),
            )
        )

    def _process_input_type(self, node: InputObjectTypeDefinitionNode):
        self.ir.add(
            IRInputType(
                name=node.name.value,
                fields=self._process_input_values(node.fields),
                description=self._description(node),
            )
        )

    def _merge_extension(self, node):
        """Merge an 'extend ...' definition into the existing type.

        Fields, implemented interfaces, union members and enum values are
        appended after the ones the base definition declares.
        """
        name = node.name.value
        existing = self.ir.get_type_by_name(name)
        if existing is None:
            raise SchemaParseError(f"Cannot extend unknown type {name}")

        if isinstance(node, EnumTypeExtensionNode):
            existing.values.extend(v.name.value for v in node.values or [])
        elif isinstance(node, UnionTypeExtensionNode):
            existing.members.extend(t.name.value for t in node.types or [])
        elif isinstance(node, InputObjectTypeExtensionNode):
            existing.fields.extend(self._process_input_values(node.fields))
        else:
            existing_names = {f.name for f in existing.fields}
            for field in self._process_fields(node.fields):
                if field.name not in existing_names:
                    existing.fields.append(field)
                    existing_names.add(field.name)
            for interface in node.interfaces or []:
                if interface.name.value not in existing.interfaces:
                    existing.interfaces.append(interface.name.value)

    def _process_fields(self, field_nodes) -> list[IRField]:
        """Process field definitions into the IRField list."""
        return [
            IRField(
                name=node.name.value,
                type=self._convert_type(node.type),
                arguments=self._process_input_values(node.arguments),
                description=self._description(node),
            )
            for node in field_nodes or []
        ]

    def _process_input_values(self, value_nodes) -> list[IRArgument]:
        """Process argument or input field definitions."""
        return [
            IRArgument(
                name=node.name.value,
                type=self._convert_type(node.type),
                default_value=print_ast(node.default_value) if node.default_value else None,
                description=self._description(node),
            )
            for node in value_nodes or []
        ]

    @classmethod
    def _convert_type(cls, type_node: TypeNode) -> IRTypeRef:
        """Convert a type node, keeping every list and non-null wrapper."""
        if isinstance(type_node, NonNullTypeNode):
            return IRNonNullType(cls._convert_type(type_node.type))
        if isinstance(type_node, ListTypeNode):
            return IRListType(cls._convert_type(type_node.type))
        assert isinstance(type_node, NamedTypeNode), f"Expected NamedTypeNode, got {type(type_node)}"
        return IRNamedType(type_node.name.value)
