"""Generate GraphQL fragments for every type in a schema."""

__version__ = "0.1.0"
