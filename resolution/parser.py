"""
graphql-core parsing helpers.

This module wraps ``graphql.parse`` for schema sources and provides the
shared node ordering used wherever fields are sorted.
"""

import dataclasses
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from graphql import parse
from graphql.language import ast

logger = logging.getLogger(__name__)


def is_empty_sdl(sdl: str) -> bool:
    """Check if a schema source contains any definitions at all.

    Args:
        sdl: Schema source text.

    Returns:
        True if the source only contains comments and/or whitespace.
    """
    return all(
        len(line) == 0 or line.startswith("#")
        for line in (raw.strip() for raw in sdl.split("\n"))
    )


def get_document_from_sdl(sdl: str) -> ast.DocumentNode:
    """Parse schema source into a graphql-core DocumentNode.

    Empty sources produce a document with no definitions instead of the
    syntax error ``graphql.parse`` would raise.

    Args:
        sdl: Schema source text.

    Returns:
        The parsed document, without location information.

    Raises:
        graphql.GraphQLError: If the source is not valid GraphQL.

    Example:
        >>> doc = get_document_from_sdl("type Query { ok: Boolean }")
        >>> doc.definitions[0].name.value
        'Query'
    """
    if not isinstance(sdl, str):
        raise TypeError(f"Source must be str, got {type(sdl).__name__}")

    if is_empty_sdl(sdl):
        logger.debug("Empty schema source, returning empty document")
        return ast.DocumentNode(definitions=())

    document = parse(sdl, no_location=True)
    logger.debug(f"Parsed {len(document.definitions)} definitions")
    return document


def filter_kind(
    document: ast.DocumentNode,
    filter_kinds: Optional[Sequence[str]],
) -> ast.DocumentNode:
    """Drop definitions whose node kind is listed in ``filter_kinds``.

    Kinds are graphql-core kind strings, e.g. ``"operation_definition"``.
    """
    if not document.definitions or not filter_kinds:
        return document

    valid: List[ast.DefinitionNode] = []
    for definition in document.definitions:
        if definition.kind in filter_kinds:
            logger.debug(
                "Filtered document of kind %s due to filter policy (%s)",
                definition.kind,
                ", ".join(filter_kinds),
            )
            continue
        valid.append(definition)

    if len(valid) == len(document.definitions):
        return document
    return ast.DocumentNode(definitions=tuple(valid))


def node_sort_key(node: ast.Node) -> Tuple[str, str]:
    """Ordering key shared by every field sort: name (or alias), then kind."""
    alias = getattr(node, "alias", None)
    if alias is not None:
        label = alias.value
    else:
        name = getattr(node, "name", None)
        label = name.value if name is not None else node.kind
    return label, node.kind


def sort_nodes(nodes: Iterable[ast.Node]) -> List[ast.Node]:
    return sorted(nodes, key=node_sort_key)


def with_fields(node: ast.Node, fields: Iterable[ast.Node]) -> ast.Node:
    """Build a new node like ``node`` but carrying ``fields``.

    AST nodes are frozen dataclasses on newer graphql-core releases and plain
    slotted classes on older ones, so the node is rebuilt rather than
    assigned to. ``node`` itself is left untouched.
    """
    fields = tuple(fields)
    if dataclasses.is_dataclass(node):
        return dataclasses.replace(node, fields=fields)
    values = {key: getattr(node, key, None) for key in node.keys}
    values["fields"] = fields
    return type(node)(**values)
