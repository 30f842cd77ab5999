"""
Caller-supplied options for a resolution pass.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from graphql.language import ast

from resolution.code_loader import use_custom_loader
from resolution.completion import complete_definition_pool
from resolution.config import DEFAULT_CONCURRENT, DEFAULT_SORT_FIELDS
from resolution.loader import load_document
from resolution.models import SourceDocument
from resolution.paths import FileSystem, LocalFileSystem

DocumentLoader = Callable[[str, "ResolverOptions"], SourceDocument]
CompletionStep = Callable[
    [
        List[ast.DefinitionNode],
        List[ast.DefinitionNode],
        List[ast.DefinitionNode],
    ],
    List[ast.DefinitionNode],
]


@dataclass
class ResolverOptions:
    """Options read (never written) during one resolution pass.

    Attributes:
        sort_fields: Sort projected and merged field lists by name.
        cwd: Directory relative paths and module references are resolved from.
        filesystem: Path-existence capability. ``None`` disables sibling-file
            resolution, leaving every target to the loader.
        load_document: Single-file loader, ``(path, options) -> SourceDocument``.
        complete: Completion step applied to the merged definitions.
        filter_kinds: graphql-core node kinds dropped from every loaded file.
        concurrent: Visit sibling imports on a thread pool.
        max_workers: Thread pool size per visited document.
    """

    sort_fields: bool = DEFAULT_SORT_FIELDS
    cwd: str = field(default_factory=os.getcwd)
    filesystem: Optional[FileSystem] = field(default_factory=LocalFileSystem)
    load_document: DocumentLoader = load_document
    complete: CompletionStep = complete_definition_pool
    filter_kinds: Tuple[str, ...] = ()
    concurrent: bool = DEFAULT_CONCURRENT
    max_workers: Optional[int] = None

    @classmethod
    def from_settings(cls, settings: Any, **overrides: Any) -> "ResolverOptions":
        """Build options from ``core.resolver_config.ResolverSettings``."""
        cwd = os.path.abspath(settings.cwd)
        values = {
            "sort_fields": settings.sort_fields,
            "cwd": cwd,
            "filter_kinds": tuple(settings.filter_kinds),
            "concurrent": settings.concurrent,
            "max_workers": settings.max_workers,
        }
        if settings.loader:
            values["load_document"] = use_custom_loader(settings.loader, cwd)
        values.update(overrides)
        return cls(**values)
