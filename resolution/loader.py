"""
Default single-file loader.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from graphql import GraphQLError

from resolution.code_loader import is_code_pointer, load_code_file
from resolution.config import DEFAULT_ENCODING
from resolution.errors import LoaderError
from resolution.models import SourceDocument
from resolution.parser import filter_kind, get_document_from_sdl

if TYPE_CHECKING:
    from resolution.options import ResolverOptions

logger = logging.getLogger(__name__)


def source_from_sdl(sdl: str, location: str = "<inline>") -> SourceDocument:
    """Wrap schema text that did not come from a file.

    Raises:
        graphql.GraphQLError: If the text is not valid GraphQL.
    """
    return SourceDocument(
        location=location,
        document=get_document_from_sdl(sdl),
        raw_sdl=sdl,
    )


def load_document(path: str, options: ResolverOptions) -> SourceDocument:
    """Load and parse one schema file.

    Args:
        path: Canonical path from the path resolver, or an opaque reference
            (relative path, Python module pointer) taken relative to
            ``options.cwd``.
        options: Resolver options; ``cwd`` and ``filter_kinds`` are used.

    Returns:
        The loaded SourceDocument.

    Raises:
        LoaderError: If the file cannot be read or does not parse.
    """
    if is_code_pointer(path):
        source = load_code_file(path, options.cwd)
    else:
        file_path = os.path.abspath(os.path.join(options.cwd, path))
        try:
            with open(file_path, "r", encoding=DEFAULT_ENCODING) as f:
                sdl = f.read()
        except FileNotFoundError as e:
            logger.error(f"File not found: {file_path}")
            raise LoaderError(f"Schema file not found: {file_path}") from e
        except OSError as e:
            logger.error(f"Error reading file {file_path}: {e}")
            raise LoaderError(f"Unable to read schema file {file_path}: {e}") from e
        except UnicodeDecodeError as e:
            logger.error(f"File is not valid UTF-8: {file_path}")
            raise LoaderError(f"Unable to decode schema file {file_path}: {e}") from e

        try:
            source = source_from_sdl(sdl, location=file_path)
        except GraphQLError as e:
            raise LoaderError(f"Unable to parse {file_path}: {e.message}") from e

    if options.filter_kinds:
        source.document = filter_kind(source.document, options.filter_kinds)

    logger.debug(
        "Loaded %s (%d definitions)", source.location, len(source.definitions)
    )
    return source
