"""
Cross-file merge of same-named type definitions.
"""

import logging
from typing import Dict, List, Sequence, Set

from graphql.language import ast

from resolution.models import definition_name, is_field_bearing
from resolution.parser import sort_nodes, with_fields

logger = logging.getLogger(__name__)


def build_candidate_set(
    type_definitions: Sequence[Sequence[ast.DefinitionNode]],
) -> List[ast.DefinitionNode]:
    """Order the projected definitions for merging.

    All projections in visitation order, then the entry document's again,
    then every other document's again. Root operation types from the entry
    document therefore always come first.
    """
    candidates: List[ast.DefinitionNode] = []
    for definitions in type_definitions:
        candidates.extend(definitions)
    if type_definitions:
        candidates.extend(type_definitions[0])
    for definitions in type_definitions[1:]:
        candidates.extend(definitions)
    return candidates


def merge_fields(
    existing: ast.DefinitionNode,
    incoming: ast.DefinitionNode,
    sort_fields: bool = False,
) -> ast.DefinitionNode:
    """Union two field lists into a copy of ``existing``.

    Fields are de-duplicated by name; the first one seen is kept.
    """
    fields = list(existing.fields or ())
    names = {f.name.value for f in fields}
    for f in incoming.fields or ():
        if f.name.value not in names:
            names.add(f.name.value)
            fields.append(f)
    if sort_fields:
        fields = sort_nodes(fields)
    return with_fields(existing, fields)


def merge_type_definitions(
    candidates: Sequence[ast.DefinitionNode],
    sort_fields: bool = False,
) -> List[ast.DefinitionNode]:
    """Merge same-named definitions, keeping first-seen order.

    Args:
        candidates: Output of ``build_candidate_set``.
        sort_fields: Sort merged field lists.

    Returns:
        One definition per name. When a name recurs and both occurrences are
        field-bearing, the first one's fields are extended with the later
        one's. Unnamed definitions are passed through once each.
    """
    merged: List[ast.DefinitionNode] = []
    positions: Dict[str, int] = {}
    seen_unnamed: Set[int] = set()

    for definition in candidates:
        name = definition_name(definition)
        if name is None:
            if id(definition) not in seen_unnamed:
                seen_unnamed.add(id(definition))
                merged.append(definition)
            continue

        position = positions.get(name)
        if position is None:
            positions[name] = len(merged)
            merged.append(definition)
            continue

        existing = merged[position]
        if is_field_bearing(existing) and is_field_bearing(definition):
            merged[position] = merge_fields(existing, definition, sort_fields)

    logger.debug(
        "Merged %d candidates into %d definitions", len(candidates), len(merged)
    )
    return merged
