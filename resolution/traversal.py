"""
Recursive traversal of the schema import graph.

Each visited document contributes its full definitions and its projected
definitions to the shared ResolutionState. An import edge, identified by the
canonical target path and the ImportRecord, is followed at most once per
pass, which is what terminates circular imports.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from core.structured_logging import bind_context, document_scope
from resolution.errors import ImportResolutionError, LoaderError
from resolution.import_parser import parse_sdl
from resolution.models import ImportRecord, ResolutionState, SourceDocument
from resolution.options import ResolverOptions
from resolution.paths import resolve_module_file_path
from resolution.projection import filter_imported_definitions

logger = logging.getLogger(__name__)


def load_source(path: str, options: ResolverOptions) -> SourceDocument:
    """Run the configured loader, reporting any failure as LoaderError."""
    try:
        return options.load_document(path, options)
    except ImportResolutionError:
        raise
    except Exception as e:
        raise LoaderError(f"Unable to load {path}: {e}") from e


def _follow_import(
    location: str,
    record: ImportRecord,
    options: ResolverOptions,
    state: ResolutionState,
) -> None:
    target = resolve_module_file_path(
        location, record.from_, options.cwd, options.filesystem
    )
    if not state.claim_import(target, record):
        logger.debug(
            "Skipping already processed import of %s from %s",
            ", ".join(record.imports),
            target,
        )
        return

    logger.debug("Following import of %s from %s", ", ".join(record.imports), target)
    source = load_source(target, options)
    collect_definitions(record.imports, source, options, state)


def collect_definitions(
    imports: Sequence[str],
    source: SourceDocument,
    options: ResolverOptions,
    state: ResolutionState,
) -> None:
    """Visit a document and, recursively, everything it imports.

    Args:
        imports: Selectors of the import that led here (``["*"]`` for the
            entry document).
        source: The loaded document.
        options: Resolver options.
        state: Accumulator for this pass.

    Raises:
        MalformedImportError: If the document has a malformed import line.
        PathResolutionError: If an import target cannot be resolved.
        LoaderError: If an imported document cannot be loaded.
    """
    with document_scope(source.location):
        _visit(imports, source, options, state)


def _visit(
    imports: Sequence[str],
    source: SourceDocument,
    options: ResolverOptions,
    state: ResolutionState,
) -> None:
    definitions = source.definitions
    seen_so_far = state.add_document(definitions)

    projected = filter_imported_definitions(
        imports, definitions, seen_so_far, options.sort_fields
    )
    state.add_projection(projected)

    records: List[ImportRecord] = parse_sdl(source.raw_sdl)
    if not records:
        return

    if not options.concurrent or len(records) == 1:
        for record in records:
            _follow_import(source.location, record, options, state)
        return

    with ThreadPoolExecutor(max_workers=options.max_workers) as executor:
        futures = [
            executor.submit(
                bind_context(_follow_import), source.location, record, options, state
            )
            for record in records
        ]
        # result() re-raises the first sibling failure in source order
        for future in futures:
            future.result()
