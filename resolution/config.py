"""
Configuration constants for GraphQL schema import resolution.

Defines the import comment syntax, schema file patterns and the graphql-core
node kind strings the projector and merger care about.
"""

import re
from typing import Pattern, Set, Tuple

# Comment prefixes that mark an import directive (checked after strip())
IMPORT_PREFIXES: Tuple[str, ...] = (
    "# import ",
    "#import ",
)

# Selector meaning "everything" (whole document, or all fields of a type)
WILDCARD: str = "*"

# Root operation types never count as "already seen" for bare wildcard imports
ROOT_TYPE_NAMES: Set[str] = {
    "Query",
    "Mutation",
    "Subscription",
}

# Schema file extensions: .graphql, .graphqls, .gql, .gqls
SCHEMA_FILE_PATTERN: Pattern[str] = re.compile(r"\.g(raph)?ql(s)?$")

# Module attributes searched when loading SDL exported from Python code
CODE_EXPORT_ATTRIBUTES: Tuple[str, ...] = (
    "type_defs",
    "typeDefs",
    "schema",
    "default",
)

# Module attributes searched when importing a custom loader by pointer
CUSTOM_LOADER_ATTRIBUTES: Tuple[str, ...] = (
    "default",
    "loader",
)

# Built-in scalars that never need a definition in the pool
BUILTIN_SCALARS: Set[str] = {
    "Int",
    "Float",
    "String",
    "Boolean",
    "ID",
}

# Built-in directives that never need a definition in the pool
BUILTIN_DIRECTIVES: Set[str] = {
    "skip",
    "include",
    "deprecated",
    "specifiedBy",
}

# Resolution policy defaults
DEFAULT_SORT_FIELDS: bool = False
DEFAULT_CONCURRENT: bool = False
DEFAULT_ENCODING: str = "utf-8"
