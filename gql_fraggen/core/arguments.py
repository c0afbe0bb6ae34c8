"""Argument list rendering for field selections.

Every argument is bound to a variable of the same name. Arguments of input
object type are expanded one level into an object value whose fields are
bound to variables in turn:

    postBeer (
      beer: {
        name: $name
        abv: $abv
      }
      submitter: $submitter
    )
"""

from .classifier import ScalarityClassifier
from .errors import UnsupportedFieldTypeError
from .ir import IRArgument, IRInputType


class ArgumentTemplater:
    """Renders declared arguments as variable bindings."""

    def __init__(self, classifier: ScalarityClassifier):
        self.classifier = classifier

    def template(self, arguments: list[IRArgument], indent: str, owner: str = "") -> str:
        """Render an argument list for a field selection.

        Args:
            arguments: Declared arguments, in declaration order
            indent: Line prefix of the field the arguments belong to
            owner: Dotted name of the field, for error messages

        Returns:
            An empty string when there are no arguments, otherwise a
            parenthesized block starting with a space, one argument per line.
        """
        if not arguments:
            return ""
        rendered = [self._format_argument(arg, indent, owner) for arg in arguments]
        separator = f"\n{indent}  "
        return f" (\n{indent}  {separator.join(rendered)}\n{indent})"

    def _format_argument(self, argument: IRArgument, indent: str, owner: str) -> str:
        classification = self.classifier.classify(
            argument.type, referenced_by=f"argument {owner}({argument.name})"
        )
        if classification.is_leaf:
            return f"{argument.name}: ${argument.name}"
        if isinstance(classification.definition, IRInputType):
            return self._format_input_argument(
                argument, classification.definition, indent, owner
            )
        raise UnsupportedFieldTypeError(
            owner, argument.name, classification.type_name, classification.kind
        )

    def _format_input_argument(
        self,
        argument: IRArgument,
        input_type: IRInputType,
        indent: str,
        owner: str,
    ) -> str:
        """Expand an input object argument into one binding per input field."""
        bindings = []
        for input_field in input_type.fields:
            classification = self.classifier.classify(
                input_field.type,
                referenced_by=f"input field {input_type.name}.{input_field.name}",
            )
            # Only one level of nesting is expanded
            if classification.is_compound:
                raise UnsupportedFieldTypeError(
                    input_type.name,
                    input_field.name,
                    classification.type_name,
                    classification.kind,
                )
            bindings.append(f"{input_field.name}: ${input_field.name}")

        separator = f"\n{indent}    "
        return f"{argument.name}: {{\n{indent}    {separator.join(bindings)}\n{indent}  }}"
