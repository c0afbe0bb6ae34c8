"""Exceptions raised while compiling a schema or generating fragments.

Every failure aborts the run. Fragments already written to the sink stay
there, but the caller must treat the output as incomplete.
"""

from typing import Iterable


class FragmentGeneratorError(Exception):
    """Base class for all fragment generation failures."""


class SchemaParseError(FragmentGeneratorError):
    """Raised when the schema text cannot be parsed or fails validation."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class UnresolvedTypeError(FragmentGeneratorError):
    """A referenced type name is absent from the registry."""

    def __init__(self, type_name: str, referenced_by: str = "", reason: str = ""):
        self.type_name = type_name
        self.referenced_by = referenced_by
        message = f"Unresolved type '{type_name}'"
        if referenced_by:
            message += f" referenced by {referenced_by}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DependencyCycleError(FragmentGeneratorError):
    """No emission order exists for the remaining interfaces."""

    def __init__(self, type_names: Iterable[str]):
        self.type_names = list(type_names)
        super().__init__(
            "Circular interface implementation between: "
            + ", ".join(self.type_names)
        )


class UnsupportedFieldTypeError(FragmentGeneratorError):
    """A field, argument or input field has a type with no rendering policy."""

    def __init__(self, owner: str, field_name: str, type_name: str, kind: str):
        self.owner = owner
        self.field_name = field_name
        self.type_name = type_name
        self.kind = kind
        super().__init__(
            f"Unsupported type for {owner}.{field_name}: "
            f"'{type_name}' is {kind}"
        )


class ResolutionOrderError(FragmentGeneratorError):
    """The resolved field set was used out of dependency order."""

    def __init__(self, type_name: str, message: str):
        self.type_name = type_name
        super().__init__(f"{message}: '{type_name}'")


class SinkError(FragmentGeneratorError):
    """The output sink rejected a write."""
