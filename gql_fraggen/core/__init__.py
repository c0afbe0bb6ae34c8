"""Core modules for GraphQL fragment generation."""

from .arguments import ArgumentTemplater
from .auth import Auth, BearerAuth, ChainedAuth, HeaderAuth, NoAuth
from .classifier import Classification, ScalarityClassifier, unwrap_type
from .errors import (
    DependencyCycleError,
    FragmentGeneratorError,
    ResolutionOrderError,
    SchemaParseError,
    SinkError,
    UnresolvedTypeError,
    UnsupportedFieldTypeError,
)
from .generator import FragmentGenerator, generate
from .introspection import IntrospectionClient, IntrospectionError
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
    IRUnion,
)
from .options import FragmentOptions
from .parser import SchemaParser
from .resolver import InterfaceResolver, ResolvedFieldSet

__all__ = [
    # Auth
    "Auth",
    "BearerAuth",
    "ChainedAuth",
    "HeaderAuth",
    "NoAuth",
    # Errors
    "DependencyCycleError",
    "FragmentGeneratorError",
    "ResolutionOrderError",
    "SchemaParseError",
    "SinkError",
    "UnresolvedTypeError",
    "UnsupportedFieldTypeError",
    # IR types
    "IRArgument",
    "IREnum",
    "IRField",
    "IRInputType",
    "IRInterface",
    "IRListType",
    "IRNamedType",
    "IRNonNullType",
    "IRObjectType",
    "IRScalar",
    "IRSchema",
    "IRUnion",
    # Parser
    "SchemaParser",
    # Introspection
    "IntrospectionClient",
    "IntrospectionError",
    # Generation
    "ArgumentTemplater",
    "Classification",
    "FragmentGenerator",
    "FragmentOptions",
    "InterfaceResolver",
    "ResolvedFieldSet",
    "ScalarityClassifier",
    "generate",
    "unwrap_type",
]
