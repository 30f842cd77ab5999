"""
High-level entry points for resolving schema imports.

This module runs one resolution pass: traverse the import graph from an
entry document, merge the projected definitions, and hand the result to the
completion step.
"""

import logging
from typing import List, Optional

from graphql import print_ast

from core.structured_logging import phase_scope
from resolution.config import WILDCARD
from resolution.loader import source_from_sdl
from resolution.merger import build_candidate_set, merge_type_definitions
from resolution.models import ResolutionResult, ResolutionState, SourceDocument
from resolution.options import ResolverOptions
from resolution.traversal import collect_definitions, load_source

logger = logging.getLogger(__name__)


def _flatten(nested: List[list]) -> list:
    return [item for items in nested for item in items]


def process_import_syntax(
    source: SourceDocument,
    options: Optional[ResolverOptions] = None,
    state: Optional[ResolutionState] = None,
) -> ResolutionResult:
    """Recursively process all import directives reachable from ``source``.

    Args:
        source: Entry document. All of its definitions are kept.
        options: Resolver options; defaults are used when omitted.
        state: Accumulator, normally left to this function to create. Each
            call must get its own.

    Returns:
        ResolutionResult with the completed definitions.

    Raises:
        ImportResolutionError: Any malformed import, unresolvable path or
            loader failure aborts the pass.
    """
    options = options or ResolverOptions()
    state = state or ResolutionState()

    logger.info("Resolving imports from %s", source.location)

    with phase_scope("traverse"):
        collect_definitions([WILDCARD], source, options, state)

    with phase_scope("merge"):
        candidates = build_candidate_set(state.type_definitions)
        merged = merge_type_definitions(candidates, options.sort_fields)

    with phase_scope("complete"):
        definitions = options.complete(
            _flatten(state.all_definitions),
            merged,
            _flatten(state.type_definitions),
        )

    logger.info(
        "Resolved %s: %d definitions (%s)",
        source.location,
        len(definitions),
        state.stats,
    )
    return ResolutionResult(
        definitions=definitions,
        merged=merged,
        all_definitions=state.all_definitions,
        type_definitions=state.type_definitions,
        stats=state.stats,
    )


def resolve_file(
    file_path: str,
    options: Optional[ResolverOptions] = None,
) -> ResolutionResult:
    """Load an entry schema file and resolve its imports.

    Raises:
        LoaderError: If the entry file cannot be loaded, whatever the loader
            raised.
        ImportResolutionError: For failures further down the import graph.

    Example:
        >>> result = resolve_file("schema/main.graphql")
        >>> print(result_to_sdl(result))
    """
    options = options or ResolverOptions()
    source = load_source(file_path, options)
    return process_import_syntax(source, options)


def resolve_sdl(
    sdl: str,
    options: Optional[ResolverOptions] = None,
    location: Optional[str] = None,
) -> ResolutionResult:
    """Resolve imports of schema text that was not read from a file.

    Without ``location``, import targets are handed to the loader relative to
    ``options.cwd``. Give a ``.graphql`` location to resolve them relative to
    that file instead.
    """
    options = options or ResolverOptions()
    source = source_from_sdl(sdl, location or "<inline>")
    return process_import_syntax(source, options)


def result_to_sdl(result: ResolutionResult) -> str:
    """Print the resolved definitions as schema text."""
    return print_ast(result.document)
