"""
Projection of a document's definitions down to what an import selects.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Sequence

from graphql.language import ast

from resolution.config import ROOT_TYPE_NAMES, WILDCARD
from resolution.models import (
    DefinitionVariant,
    classify_definition,
    definition_name,
    is_field_bearing,
)
from resolution.parser import sort_nodes, with_fields

logger = logging.getLogger(__name__)


def _previously_seen_names(
    all_definitions: Sequence[Sequence[ast.DefinitionNode]],
) -> set:
    seen = set()
    for definitions in all_definitions[:-1]:
        for definition in definitions:
            name = definition_name(definition)
            if name is not None and name not in ROOT_TYPE_NAMES:
                seen.add(name)
    return seen


def project_fields(
    definition: ast.DefinitionNode,
    field_names: Sequence[str],
    sort_fields: bool,
) -> ast.DefinitionNode:
    """Return a copy of ``definition`` keeping only ``field_names``."""
    fields = [
        f for f in definition.fields or () if f.name.value in field_names
    ]
    if sort_fields:
        fields = sort_nodes(fields)
    return with_fields(definition, fields)


def filter_imported_definitions(
    imports: Sequence[str],
    definitions: Sequence[ast.DefinitionNode],
    all_definitions: Sequence[Sequence[ast.DefinitionNode]],
    sort_fields: bool = False,
) -> List[ast.DefinitionNode]:
    """Filter a document's definitions by the selectors of an import.

    Args:
        imports: Selectors of the import that caused this visit.
        definitions: All definitions of the visited document.
        all_definitions: Definitions of every document visited so far, the
            visited document last.
        sort_fields: Sort projected field lists.

    Returns:
        The selected definitions. Field-level selections return copies; the
        input nodes are never modified.

    Rules:
        - ``*`` alone, from any document but the entry: only object types
          already defined by an earlier document (root operation types
          excluded from that lookup).
        - ``*`` anywhere else: everything.
        - Otherwise: named types, with ``Type.field`` selectors narrowing the
          type's fields unless ``Type.*`` is among them.

    Unknown names select nothing.
    """
    if WILDCARD in imports:
        if len(imports) == 1 and len(all_definitions) > 1:
            seen = _previously_seen_names(all_definitions)
            return [
                d for d in definitions
                if classify_definition(d) is DefinitionVariant.OBJECT
                and definition_name(d) in seen
            ]
        return list(definitions)

    imported_types = {selector.split(".")[0] for selector in imports}
    result = [
        d for d in definitions
        if definition_name(d) is not None and definition_name(d) in imported_types
    ]

    field_imports: Dict[str, List[str]] = defaultdict(list)
    for selector in imports:
        parts = selector.split(".")
        if len(parts) > 1:
            field_imports[parts[0]].append(parts[1])

    for type_name, field_names in field_imports.items():
        if WILDCARD in field_names:
            continue
        for index, definition in enumerate(result):
            if definition_name(definition) != type_name:
                continue
            if is_field_bearing(definition):
                result[index] = project_fields(definition, field_names, sort_fields)
                logger.debug(
                    "Projected %s to fields %s", type_name, ", ".join(field_names)
                )
            break

    return result
