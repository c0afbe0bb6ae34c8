"""Fragment generator for GraphQL schemas.

Renders one fragment per type through a Jinja2 template and writes the
fragments to a text sink, separated by blank lines.

Supports custom templates via the template_dir parameter:
    generator = FragmentGenerator(ir, sys.stdout, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import logging
from pathlib import Path
from typing import Optional, TextIO

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .arguments import ArgumentTemplater
from .classifier import ScalarityClassifier, kind_of
from .errors import SinkError, UnresolvedTypeError, UnsupportedFieldTypeError
from .ir import (
    IREnum,
    IRField,
    IRInputType,
    IRInterface,
    IRObjectType,
    IRScalar,
    IRSchema,
    IRTypeDefinition,
    IRUnion,
)
from .options import FragmentOptions
from .resolver import InterfaceResolver, ResolvedFieldSet

log = logging.getLogger(__name__)

FRAGMENT_TEMPLATE = "fragment.graphql.j2"
INDENT = "  "
COMMENT_INDENT = "  # "


class FragmentGenerator:
    """Generates fragments for every type in a schema.

    Fragments are emitted interfaces first (super-interfaces before the
    interfaces implementing them), then unions, objects and input objects,
    each kind in declaration order.

    Available templates to override:
        - fragment.graphql.j2: a single fragment, receives ``fragment_name``,
          ``type_name``, ``kind`` and the rendered body ``lines``

    Example:
        generator = FragmentGenerator(
            schema=ir,
            sink=sys.stdout,
            options=FragmentOptions(prefix="My", mark_concrete_types=True),
        )
        generator.execute()
    """

    def __init__(
        self,
        schema: IRSchema,
        sink: TextIO,
        options: Optional[FragmentOptions] = None,
        template_dir: Optional[str] = None,
    ):
        """Initialize the fragment generator.

        Args:
            schema: The type registry to generate fragments for
            sink: Text stream the fragments are written to
            options: Naming and rendering options
            template_dir: Optional directory with a custom fragment template.
                          Templates here override the built-in template.
        """
        self.schema = schema
        self.sink = sink
        self.options = options or FragmentOptions()
        self.classifier = ScalarityClassifier(schema)
        self.templater = ArgumentTemplater(self.classifier)
        self.resolver = InterfaceResolver(schema)
        self.resolved = ResolvedFieldSet()
        self.fragments_written = 0

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_fraggen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            keep_trailing_newline=True,
        )

    def execute(self) -> int:
        """Write fragments for all types to the sink.

        Returns:
            The number of fragments written

        Raises:
            FragmentGeneratorError: On the first type that cannot be rendered
        """
        interfaces = self.resolver.iter_ordered(
            self.schema.interfaces.values(), self.resolved
        )
        for interface in interfaces:
            self.emit(interface)
        for union in self.schema.unions.values():
            self.emit(union)
        for object_type in self.schema.types.values():
            self.emit(object_type)
        if self.options.include_input_objects:
            for input_type in self.schema.inputs.values():
                self.emit(input_type)

        log.info("Generated %d fragments", self.fragments_written)
        return self.fragments_written

    def emit(self, definition: IRTypeDefinition) -> str:
        """Render the fragment for one type and write it to the sink."""
        text = self.render_fragment(definition)
        try:
            if self.fragments_written:
                self.sink.write("\n")
            self.sink.write(text)
        except OSError as err:
            raise SinkError(f"Failed to write fragment for {definition.name}: {err}") from err
        self.fragments_written += 1
        return text

    def render_fragment(self, definition: IRTypeDefinition) -> str:
        """Render the fragment text for one type.

        The fields the fragment selects directly are recorded so that types
        implementing this one can skip them.
        """
        if isinstance(definition, (IRObjectType, IRInterface)):
            lines = self._selection_lines(definition)
        elif isinstance(definition, IRUnion):
            lines = self._union_lines(definition)
        elif isinstance(definition, IRInputType):
            lines = self._input_lines(definition)
        elif isinstance(definition, (IRScalar, IREnum)):
            raise TypeError(f"{definition.name} is {kind_of(definition)} and has no fragment")
        else:
            raise TypeError(f"Unknown type definition: {definition!r}")

        log.debug("Rendering fragment for %s", definition.name)
        template = self.env.get_template(FRAGMENT_TEMPLATE)
        return template.render(
            fragment_name=self.options.fragment_name(definition.name),
            type_name=definition.name,
            kind=kind_of(definition),
            lines=lines,
        )

    def _selection_lines(self, definition: IRObjectType | IRInterface) -> list[str]:
        """Body of an object or interface fragment."""
        lines = []
        if isinstance(definition, IRObjectType) and self.options.mark_concrete_types:
            lines.append(f"{INDENT}__typename")

        self.resolver.check_references(definition)
        inherited: set[str] = set()
        for interface_name in definition.interfaces:
            inherited.update(self.resolved.lookup(interface_name))
            lines.append(f"{INDENT}...{self.options.fragment_name(interface_name)}")

        own_fields = []
        for ir_field in definition.fields:
            if ir_field.name in inherited:
                continue
            lines.append(self._format_field(definition.name, ir_field))
            own_fields.append(ir_field.name)

        self.resolved.record(definition.name, own_fields)
        return lines

    def _union_lines(self, definition: IRUnion) -> list[str]:
        """Body of a union fragment: one inline fragment per member."""
        lines = []
        for member in definition.members:
            if self.schema.get_type_by_name(member) is None:
                raise UnresolvedTypeError(member, f"union {definition.name}")
            lines.append(
                f"{INDENT}... on {member} {{\n"
                f"{INDENT}  ...{self.options.fragment_name(member)}\n"
                f"{INDENT}}}"
            )
        self.resolved.record(definition.name, ())
        return lines

    def _input_lines(self, definition: IRInputType) -> list[str]:
        """Body of an input object fragment. Only leaf input fields are supported."""
        lines = []
        for input_field in definition.fields:
            classification = self.classifier.classify(
                input_field.type,
                referenced_by=f"input field {definition.name}.{input_field.name}",
            )
            if classification.is_compound:
                raise UnsupportedFieldTypeError(
                    definition.name,
                    input_field.name,
                    classification.type_name,
                    classification.kind,
                )
            lines.append(f"{INDENT}{input_field.name}")

        self.resolved.record(definition.name, [f.name for f in definition.fields])
        return lines

    def _format_field(self, owner: str, ir_field: IRField) -> str:
        """Render a field as a leaf selection or a commented-out placeholder."""
        qualified_name = f"{owner}.{ir_field.name}"
        classification = self.classifier.classify(
            ir_field.type, referenced_by=f"field {qualified_name}"
        )

        if classification.is_leaf:
            arglist = self.templater.template(ir_field.arguments, INDENT, qualified_name)
            return f"{INDENT}{ir_field.name}{arglist}"

        if isinstance(classification.definition, IRInputType):
            raise UnsupportedFieldTypeError(
                owner, ir_field.name, classification.type_name, classification.kind
            )

        # Compound fields stay commented out, one level deep
        arglist = self.templater.template(ir_field.arguments, COMMENT_INDENT, qualified_name)
        fragment_name = self.options.fragment_name(classification.type_name)
        return (
            f"{COMMENT_INDENT}{ir_field.name}{arglist} {{\n"
            f"{COMMENT_INDENT}  ...{fragment_name}\n"
            f"{COMMENT_INDENT}}}"
        )


def generate(
    schema: IRSchema,
    sink: TextIO,
    options: Optional[FragmentOptions] = None,
    template_dir: Optional[str] = None,
) -> int:
    """Write fragments for every type in ``schema`` to ``sink``.

    Returns:
        The number of fragments written
    """
    return FragmentGenerator(schema, sink, options, template_dir).execute()
