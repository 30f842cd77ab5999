"""
Directive values applied to schema elements.
"""

from typing import Any, Dict, Optional

from graphql import GraphQLSchema
from graphql.execution.values import get_directive_values

DirectiveUseMap = Dict[str, Any]


def get_directives(schema: Optional[GraphQLSchema], node: Any) -> DirectiveUseMap:
    """Collect the directives declared on ``schema`` that ``node`` uses.

    Args:
        schema: Built schema whose directive definitions are checked.
        node: A schema element (type, field, argument, enum value) with an
            ``ast_node``.

    Returns:
        Directive name -> argument values (``{}`` for directives without
        arguments). Elements without an AST node yield an empty map.
    """
    schema_directives = schema.directives if schema is not None else ()
    ast_node = getattr(node, "ast_node", None)
    result: DirectiveUseMap = {}

    if ast_node is None:
        return result

    for directive in schema_directives:
        directive_value = get_directive_values(directive, ast_node)
        if directive_value is not None:
            result[directive.name] = directive_value or {}

    return result
