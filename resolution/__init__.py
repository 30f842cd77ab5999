"""
GraphQL schema import resolution.

Follows ``# import`` comment directives across schema files and merges the
imported definitions into a single document.
"""

from resolution.errors import (
    DefinitionPoolError,
    ImportResolutionError,
    LoaderError,
    MalformedImportError,
    PathResolutionError,
)
from resolution.models import (
    DefinitionVariant,
    ImportRecord,
    ResolutionResult,
    ResolutionState,
    ResolutionStats,
    SourceDocument,
    classify_definition,
    definition_name,
)
from resolution.import_parser import parse_import_line, parse_sdl, iter_import_records
from resolution.parser import get_document_from_sdl, is_empty_sdl, filter_kind
from resolution.paths import LocalFileSystem, resolve_module_file_path
from resolution.projection import filter_imported_definitions
from resolution.merger import build_candidate_set, merge_type_definitions
from resolution.completion import complete_definition_pool
from resolution.loader import load_document, source_from_sdl
from resolution.code_loader import load_code_file, use_custom_loader
from resolution.directive_values import get_directives
from resolution.options import ResolverOptions
from resolution.traversal import collect_definitions, load_source
from resolution.resolver import (
    process_import_syntax,
    resolve_file,
    resolve_sdl,
    result_to_sdl,
)

__all__ = [
    # Errors
    "ImportResolutionError",
    "MalformedImportError",
    "PathResolutionError",
    "LoaderError",
    "DefinitionPoolError",
    # Data models
    "DefinitionVariant",
    "ImportRecord",
    "ResolutionResult",
    "ResolutionState",
    "ResolutionStats",
    "SourceDocument",
    "classify_definition",
    "definition_name",
    # Import directives
    "parse_import_line",
    "parse_sdl",
    "iter_import_records",
    # Parsing
    "get_document_from_sdl",
    "is_empty_sdl",
    "filter_kind",
    # Paths and loading
    "LocalFileSystem",
    "resolve_module_file_path",
    "load_document",
    "source_from_sdl",
    "load_code_file",
    "use_custom_loader",
    # Projection, merge, completion
    "filter_imported_definitions",
    "build_candidate_set",
    "merge_type_definitions",
    "complete_definition_pool",
    "get_directives",
    # High-level orchestration
    "ResolverOptions",
    "collect_definitions",
    "load_source",
    "process_import_syntax",
    "resolve_file",
    "resolve_sdl",
    "result_to_sdl",
]
