"""Intermediate Representation (IR) for GraphQL schemas.

This module defines dataclasses that represent GraphQL type system
definitions in a language-agnostic way. An ``IRSchema`` is the read-only
type registry the fragment generator works from.
"""

from dataclasses import dataclass, field
from typing import Any, Union

BUILTIN_SCALARS = ("ID", "String", "Int", "Float", "Boolean")


@dataclass(frozen=True)
class IRNamedType:
    """A bare reference to a named type."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IRListType:
    """A list wrapper around another type reference."""
    of_type: "IRTypeRef"

    def __str__(self) -> str:
        return f"[{self.of_type}]"


@dataclass(frozen=True)
class IRNonNullType:
    """A non-null wrapper around another type reference."""
    of_type: "IRTypeRef"

    def __str__(self) -> str:
        return f"{self.of_type}!"


IRTypeRef = Union[IRNamedType, IRListType, IRNonNullType]


@dataclass
class IRArgument:
    """Represents an argument to a field, or a field of an input type."""
    name: str
    type: IRTypeRef
    default_value: Any = None
    description: str | None = None


@dataclass
class IRField:
    """Represents a field in a GraphQL object type or interface."""
    name: str
    type: IRTypeRef
    arguments: list[IRArgument] = field(default_factory=list)
    description: str | None = None


@dataclass
class IRScalar:
    """Represents a GraphQL scalar type."""
    name: str
    description: str | None = None


@dataclass
class IREnum:
    """Represents a GraphQL enum type."""
    name: str
    values: list[str] = field(default_factory=list)
    description: str | None = None


@dataclass
class IRObjectType:
    """Represents a GraphQL object type."""
    name: str
    fields: list[IRField] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)
    description: str | None = None


@dataclass
class IRInterface:
    """Represents a GraphQL interface type.

    Interfaces may themselves implement other interfaces.
    """
    name: str
    fields: list[IRField] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)
    description: str | None = None


@dataclass
class IRUnion:
    """Represents a GraphQL union type."""
    name: str
    members: list[str] = field(default_factory=list)
    description: str | None = None


@dataclass
class IRInputType:
    """Represents a GraphQL input object type."""
    name: str
    fields: list[IRArgument] = field(default_factory=list)
    description: str | None = None


IRTypeDefinition = Union[IRScalar, IREnum, IRObjectType, IRInterface, IRUnion, IRInputType]


@dataclass
class IRSchema:
    """Complete intermediate representation of a GraphQL schema.

    Each mapping preserves declaration order. Type names are unique across
    all mappings. The built-in scalars are always registered.
    """
    scalars: dict[str, IRScalar] = field(default_factory=dict)
    enums: dict[str, IREnum] = field(default_factory=dict)
    types: dict[str, IRObjectType] = field(default_factory=dict)
    interfaces: dict[str, IRInterface] = field(default_factory=dict)
    unions: dict[str, IRUnion] = field(default_factory=dict)
    inputs: dict[str, IRInputType] = field(default_factory=dict)

    def __post_init__(self):
        for name in BUILTIN_SCALARS:
            self.scalars.setdefault(name, IRScalar(name=name))

    def get_type_by_name(self, name: str) -> IRTypeDefinition | None:
        """Look up a type definition of any kind by name."""
        for registry in (
            self.scalars,
            self.enums,
            self.types,
            self.interfaces,
            self.unions,
            self.inputs,
        ):
            if name in registry:
                return registry[name]
        return None

    def add(self, definition: IRTypeDefinition):
        """Register a type definition under its kind."""
        if isinstance(definition, IRScalar):
            self.scalars[definition.name] = definition
        elif isinstance(definition, IREnum):
            self.enums[definition.name] = definition
        elif isinstance(definition, IRObjectType):
            self.types[definition.name] = definition
        elif isinstance(definition, IRInterface):
            self.interfaces[definition.name] = definition
        elif isinstance(definition, IRUnion):
            self.unions[definition.name] = definition
        elif isinstance(definition, IRInputType):
            self.inputs[definition.name] = definition
        else:
            raise TypeError(f"Unknown type definition: {definition!r}")

    @property
    def user_scalars(self) -> dict[str, IRScalar]:
        """Return the scalars declared by the schema itself."""
        return {k: v for k, v in self.scalars.items() if k not in BUILTIN_SCALARS}
