"""
Data models for schema import resolution.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from graphql.language import ast

from resolution.config import WILDCARD


@dataclass(frozen=True)
class ImportRecord:
    """One parsed import directive.

    Attributes:
        imports: Selectors in source order. Each is ``*``, a type name or
            ``Type.field``.
        from_: Path or module reference the selectors are imported from.
    """

    imports: Tuple[str, ...]
    from_: str

    @classmethod
    def wildcard(cls, from_: str) -> "ImportRecord":
        """Build an import of everything from ``from_``."""
        return cls(imports=(WILDCARD,), from_=from_)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a JSON-friendly dictionary."""
        return {"imports": list(self.imports), "from": self.from_}


@dataclass
class SourceDocument:
    """A loaded and parsed schema file.

    Attributes:
        location: Canonical identity of the file (absolute path, module
            reference or an inline marker for SDL given as text).
        document: Parsed graphql-core document.
        raw_sdl: Source text; import directives are read from here.
    """

    location: str
    document: ast.DocumentNode
    raw_sdl: str

    @property
    def definitions(self) -> List[ast.DefinitionNode]:
        return list(self.document.definitions or ())


class DefinitionVariant(Enum):
    """Closed set of definition kinds the projector and merger distinguish."""

    OBJECT = "object"
    OBJECT_EXTENSION = "object_extension"
    INTERFACE = "interface"
    INTERFACE_EXTENSION = "interface_extension"
    INPUT_OBJECT = "input_object"
    INPUT_OBJECT_EXTENSION = "input_object_extension"
    ENUM = "enum"
    ENUM_EXTENSION = "enum_extension"
    UNION = "union"
    UNION_EXTENSION = "union_extension"
    SCALAR = "scalar"
    SCALAR_EXTENSION = "scalar_extension"
    DIRECTIVE = "directive"
    SCHEMA = "schema"
    SCHEMA_EXTENSION = "schema_extension"
    OPERATION = "operation"
    FRAGMENT = "fragment"
    PASSTHROUGH = "passthrough"


_VARIANT_BY_NODE_CLASS: Dict[type, DefinitionVariant] = {
    ast.ObjectTypeDefinitionNode: DefinitionVariant.OBJECT,
    ast.ObjectTypeExtensionNode: DefinitionVariant.OBJECT_EXTENSION,
    ast.InterfaceTypeDefinitionNode: DefinitionVariant.INTERFACE,
    ast.InterfaceTypeExtensionNode: DefinitionVariant.INTERFACE_EXTENSION,
    ast.InputObjectTypeDefinitionNode: DefinitionVariant.INPUT_OBJECT,
    ast.InputObjectTypeExtensionNode: DefinitionVariant.INPUT_OBJECT_EXTENSION,
    ast.EnumTypeDefinitionNode: DefinitionVariant.ENUM,
    ast.EnumTypeExtensionNode: DefinitionVariant.ENUM_EXTENSION,
    ast.UnionTypeDefinitionNode: DefinitionVariant.UNION,
    ast.UnionTypeExtensionNode: DefinitionVariant.UNION_EXTENSION,
    ast.ScalarTypeDefinitionNode: DefinitionVariant.SCALAR,
    ast.ScalarTypeExtensionNode: DefinitionVariant.SCALAR_EXTENSION,
    ast.DirectiveDefinitionNode: DefinitionVariant.DIRECTIVE,
    ast.SchemaDefinitionNode: DefinitionVariant.SCHEMA,
    ast.SchemaExtensionNode: DefinitionVariant.SCHEMA_EXTENSION,
    ast.OperationDefinitionNode: DefinitionVariant.OPERATION,
    ast.FragmentDefinitionNode: DefinitionVariant.FRAGMENT,
}

# Variants carrying a ``fields`` list that imports may project and merges may union
FIELD_BEARING_VARIANTS = frozenset({
    DefinitionVariant.OBJECT,
    DefinitionVariant.OBJECT_EXTENSION,
    DefinitionVariant.INTERFACE,
    DefinitionVariant.INTERFACE_EXTENSION,
    DefinitionVariant.INPUT_OBJECT,
    DefinitionVariant.INPUT_OBJECT_EXTENSION,
})

# Variants that never carry a name
UNNAMED_VARIANTS = frozenset({
    DefinitionVariant.SCHEMA,
    DefinitionVariant.SCHEMA_EXTENSION,
    DefinitionVariant.PASSTHROUGH,
})


def classify_definition(node: ast.Node) -> DefinitionVariant:
    """Map a graphql-core definition node onto its variant.

    Node classes outside the known set (including future graphql-core
    additions) map to ``PASSTHROUGH`` and are carried along untouched.
    """
    variant = _VARIANT_BY_NODE_CLASS.get(type(node))
    if variant is not None:
        return variant
    for base in type(node).__mro__[1:]:
        variant = _VARIANT_BY_NODE_CLASS.get(base)
        if variant is not None:
            return variant
    return DefinitionVariant.PASSTHROUGH


def definition_name(node: ast.Node) -> Optional[str]:
    """Return the definition's name, or None for unnamed variants."""
    if classify_definition(node) in UNNAMED_VARIANTS:
        return None
    name = node.name
    return name.value if name is not None else None


def is_field_bearing(node: ast.Node) -> bool:
    return classify_definition(node) in FIELD_BEARING_VARIANTS


class ResolutionStats:
    """Statistics for one resolution pass."""

    def __init__(self):
        self.documents_visited = 0
        self.imports_followed = 0
        self.imports_skipped = 0
        self.definitions_loaded = 0
        self.definitions_projected = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "documents_visited": self.documents_visited,
            "imports_followed": self.imports_followed,
            "imports_skipped": self.imports_skipped,
            "definitions_loaded": self.definitions_loaded,
            "definitions_projected": self.definitions_projected,
        }

    def __str__(self) -> str:
        return (
            f"ResolutionStats(visited={self.documents_visited}, "
            f"followed={self.imports_followed}, skipped={self.imports_skipped}, "
            f"loaded={self.definitions_loaded}, "
            f"projected={self.definitions_projected})"
        )


@dataclass
class ResolutionState:
    """Mutable accumulator threaded through one resolution pass.

    Attributes:
        all_definitions: Full definition list of every visited document, in
            visitation order.
        type_definitions: Projected definition list of every visited document,
            parallel to ``all_definitions`` in sequential mode.
        processed_imports: Canonical path -> import records already followed
            against that path.
        stats: Counters for logging and run reports.
    """

    all_definitions: List[List[ast.DefinitionNode]] = field(default_factory=list)
    type_definitions: List[List[ast.DefinitionNode]] = field(default_factory=list)
    processed_imports: Dict[str, List[ImportRecord]] = field(default_factory=dict)
    stats: ResolutionStats = field(default_factory=ResolutionStats)
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    def claim_import(self, path: str, record: ImportRecord) -> bool:
        """Record ``record`` against ``path`` unless an equal one is there.

        Returns:
            True if the caller should follow the import, False if it was
            already followed during this pass.
        """
        with self.lock:
            processed = self.processed_imports.setdefault(path, [])
            if record in processed:
                self.stats.imports_skipped += 1
                return False
            processed.append(record)
            self.stats.imports_followed += 1
            return True

    def add_document(
        self, definitions: List[ast.DefinitionNode]
    ) -> List[List[ast.DefinitionNode]]:
        """Append a visited document's definitions and snapshot the total."""
        with self.lock:
            self.all_definitions.append(definitions)
            self.stats.documents_visited += 1
            self.stats.definitions_loaded += len(definitions)
            return list(self.all_definitions)

    def add_projection(self, definitions: List[ast.DefinitionNode]) -> None:
        with self.lock:
            self.type_definitions.append(definitions)
            self.stats.definitions_projected += len(definitions)


@dataclass
class ResolutionResult:
    """Output of a resolution pass.

    Attributes:
        definitions: Completed, merged definitions in output order.
        merged: Merger output before completion.
        all_definitions: Full per-document definitions.
        type_definitions: Projected per-document definitions.
        stats: Pass statistics.
    """

    definitions: List[ast.DefinitionNode]
    merged: List[ast.DefinitionNode]
    all_definitions: List[List[ast.DefinitionNode]]
    type_definitions: List[List[ast.DefinitionNode]]
    stats: ResolutionStats

    @property
    def document(self) -> ast.DocumentNode:
        return ast.DocumentNode(definitions=tuple(self.definitions))

    def names(self) -> List[str]:
        """Names of the named output definitions, in order."""
        return [
            name
            for name in (definition_name(d) for d in self.definitions)
            if name is not None
        ]

    def get(self, name: str) -> Optional[ast.DefinitionNode]:
        """Find an output definition by name."""
        for definition in self.definitions:
            if definition_name(definition) == name:
                return definition
        return None
