"""Leaf/compound classification of field and argument types."""

from typing import NamedTuple

from .errors import UnresolvedTypeError
from .ir import (
    IREnum,
    IRInputType,
    IRInterface,
    IRListType,
    IRNamedType,
    IRNonNullType,
    IRObjectType,
    IRScalar,
    IRSchema,
    IRTypeDefinition,
    IRTypeRef,
    IRUnion,
)


def unwrap_type(type_ref: IRTypeRef) -> str:
    """Strip list and non-null wrappers and return the named type."""
    while isinstance(type_ref, (IRListType, IRNonNullType)):
        type_ref = type_ref.of_type
    if not isinstance(type_ref, IRNamedType):
        raise TypeError(f"Expected a type reference, got {type(type_ref)}")
    return type_ref.name


def kind_of(definition: IRTypeDefinition) -> str:
    """Return a human-readable kind name for a type definition."""
    if isinstance(definition, IRScalar):
        return "a scalar"
    elif isinstance(definition, IREnum):
        return "an enum"
    elif isinstance(definition, IRObjectType):
        return "an object type"
    elif isinstance(definition, IRInterface):
        return "an interface"
    elif isinstance(definition, IRUnion):
        return "a union"
    elif isinstance(definition, IRInputType):
        return "an input object"
    raise TypeError(f"Unknown type definition: {definition!r}")


class Classification(NamedTuple):
    """Result of classifying a type reference."""
    type_name: str
    definition: IRTypeDefinition

    @property
    def is_leaf(self) -> bool:
        """True for scalars and enums, which take no sub-selection."""
        return isinstance(self.definition, (IRScalar, IREnum))

    @property
    def is_compound(self) -> bool:
        return not self.is_leaf

    @property
    def kind(self) -> str:
        return kind_of(self.definition)


class ScalarityClassifier:
    """Decides whether a type reference is selectable as a leaf."""

    def __init__(self, schema: IRSchema):
        self.schema = schema

    def classify(self, type_ref: IRTypeRef, referenced_by: str = "") -> Classification:
        """Classify a possibly wrapped type reference.

        Args:
            type_ref: Field, argument or input field type
            referenced_by: Description of the referencing site, for errors

        Raises:
            UnresolvedTypeError: If the named type is not in the registry
        """
        type_name = unwrap_type(type_ref)
        definition = self.schema.get_type_by_name(type_name)
        if definition is None:
            raise UnresolvedTypeError(type_name, referenced_by)
        return Classification(type_name, definition)
