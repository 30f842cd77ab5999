"""
Default completion step: pull in every type the merged definitions refer to.

A wildcard or field import can select a type whose fields reference types
the import never named. Those are looked up in the full pool of loaded
definitions and appended, transitively.
"""

import logging
from collections import deque
from typing import Deque, Dict, List, Sequence, Set

from graphql.language import Visitor, ast, visit

from resolution.config import BUILTIN_DIRECTIVES, BUILTIN_SCALARS
from resolution.errors import DefinitionPoolError
from resolution.models import DefinitionVariant, classify_definition, definition_name

logger = logging.getLogger(__name__)

_EXTENSION_VARIANTS = frozenset({
    DefinitionVariant.OBJECT_EXTENSION,
    DefinitionVariant.INTERFACE_EXTENSION,
    DefinitionVariant.INPUT_OBJECT_EXTENSION,
    DefinitionVariant.ENUM_EXTENSION,
    DefinitionVariant.UNION_EXTENSION,
    DefinitionVariant.SCALAR_EXTENSION,
})

_EXECUTABLE_VARIANTS = frozenset({
    DefinitionVariant.OPERATION,
    DefinitionVariant.FRAGMENT,
})


class _ReferenceCollector(Visitor):
    """Collect named type and directive references below a node."""

    def __init__(self):
        super().__init__()
        self.type_names: List[str] = []
        self.directive_names: List[str] = []

    def enter_named_type(self, node, *_args):
        self.type_names.append(node.name.value)

    def enter_directive(self, node, *_args):
        self.directive_names.append(node.name.value)


def collect_references(definition: ast.DefinitionNode) -> _ReferenceCollector:
    collector = _ReferenceCollector()
    visit(definition, collector)
    return collector


def _index_pool(
    all_definitions: Sequence[ast.DefinitionNode],
) -> tuple:
    types: Dict[str, ast.DefinitionNode] = {}
    directives: Dict[str, ast.DefinitionNode] = {}
    for definition in all_definitions:
        variant = classify_definition(definition)
        name = definition_name(definition)
        if name is None or variant in _EXTENSION_VARIANTS:
            continue
        if variant in _EXECUTABLE_VARIANTS:
            continue
        target = directives if variant is DefinitionVariant.DIRECTIVE else types
        target.setdefault(name, definition)
    return types, directives


def _pool_key(definition: ast.DefinitionNode) -> str:
    if classify_definition(definition) is DefinitionVariant.DIRECTIVE:
        return f"@{definition_name(definition)}"
    return definition_name(definition)


def complete_definition_pool(
    all_definitions: List[ast.DefinitionNode],
    definition_pool: List[ast.DefinitionNode],
    new_type_definitions: List[ast.DefinitionNode],
) -> List[ast.DefinitionNode]:
    """Add missing referenced definitions to the merged pool.

    Args:
        all_definitions: Every definition of every visited document, flattened.
        definition_pool: Merged definitions; these take priority.
        new_type_definitions: Projected definitions of every visited document,
            flattened. Scanned after the pool for further references.

    Returns:
        The pool followed by the definitions it was missing, de-duplicated by
        name (first occurrence wins). Unnamed definitions are kept once.

    Raises:
        DefinitionPoolError: If a referenced type or directive is neither
            built in nor defined in any loaded document.
    """
    type_map, directive_map = _index_pool(all_definitions)
    pool: List[ast.DefinitionNode] = list(definition_pool)
    present: Set[str] = {
        _pool_key(d) for d in pool if definition_name(d) is not None
    }
    queue: Deque[ast.DefinitionNode] = deque(pool)
    queue.extend(new_type_definitions)
    visited: Set[str] = set()

    while queue:
        definition = queue.popleft()
        name = definition_name(definition)
        if name is not None:
            key = _pool_key(definition)
            if key in visited:
                continue
            visited.add(key)

        references = collect_references(definition)
        for type_name in references.type_names:
            if type_name in BUILTIN_SCALARS or type_name in present:
                continue
            found = type_map.get(type_name)
            if found is None:
                raise DefinitionPoolError(
                    f"Couldn't find type {type_name} in any of the schemas."
                )
            logger.debug("Completing pool with referenced type %s", type_name)
            present.add(type_name)
            pool.append(found)
            queue.append(found)

        for directive_name in references.directive_names:
            key = f"@{directive_name}"
            if directive_name in BUILTIN_DIRECTIVES or key in present:
                continue
            found = directive_map.get(directive_name)
            if found is None:
                raise DefinitionPoolError(
                    f"Couldn't find directive {directive_name} in any of the schemas."
                )
            present.add(key)
            pool.append(found)
            queue.append(found)

    completed: List[ast.DefinitionNode] = []
    seen_names: Set[str] = set()
    seen_unnamed: Set[int] = set()
    for definition in pool:
        if definition_name(definition) is None:
            if id(definition) in seen_unnamed:
                continue
            seen_unnamed.add(id(definition))
        else:
            key = _pool_key(definition)
            if key in seen_names:
                continue
            seen_names.add(key)
        completed.append(definition)
    return completed
