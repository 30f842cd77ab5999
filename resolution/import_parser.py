"""
Import directive grammar and scanner.

Schema files pull definitions from each other through comment lines such as::

    # import Query.*, User, Post.author from 'posts.graphql'
    # import * from "common.graphql"
    #import 'scalars.graphql'

This module turns those lines into ``ImportRecord`` objects.
"""

import logging
import re
from typing import Iterator, List

from resolution.config import IMPORT_PREFIXES, WILDCARD
from resolution.errors import MalformedImportError
from resolution.models import ImportRecord

logger = logging.getLogger(__name__)

_IMPORT_FROM_RE = re.compile(r"""^import\s+(\*|(.*))\s+from\s+('|")(.*)('|");?$""")
_IMPORT_DEFAULT_RE = re.compile(r"""^import\s+('|")(.*)('|");?$""")


def parse_import_line(import_line: str) -> ImportRecord:
    """Parse a single import statement.

    Args:
        import_line: Trimmed line with the leading ``#`` already removed.

    Returns:
        The parsed ImportRecord.

    Raises:
        MalformedImportError: If the line matches neither
            ``import <selectors> from '<path>'`` nor ``import '<path>'``.

    Example:
        >>> parse_import_line("import A, B.c from 'schema.graphql'")
        ImportRecord(imports=('A', 'B.c'), from_='schema.graphql')
    """
    match = _IMPORT_FROM_RE.match(import_line)
    if match is not None:
        wildcard, selectors, _, from_, _ = match.groups()
        if from_:
            if wildcard == WILDCARD:
                imports = (WILDCARD,)
            else:
                imports = tuple(s.strip() for s in selectors.split(","))
            return ImportRecord(imports=imports, from_=from_)
    else:
        match = _IMPORT_DEFAULT_RE.match(import_line)
        if match is not None:
            return ImportRecord.wildcard(match.group(2))

    raise MalformedImportError(import_line)


def is_import_directive(line: str) -> bool:
    """Check whether a trimmed line is an import comment."""
    return line.startswith(IMPORT_PREFIXES)


def iter_import_records(sdl: str) -> Iterator[ImportRecord]:
    """Yield the import records of a schema source, in source order.

    Args:
        sdl: Raw schema text.

    Yields:
        One ImportRecord per import comment line.

    Raises:
        MalformedImportError: On the first malformed import line.
    """
    for raw_line in sdl.split("\n"):
        line = raw_line.strip()
        if not is_import_directive(line):
            continue
        yield parse_import_line(line.replace("#", "", 1).strip())


def parse_sdl(sdl: str) -> List[ImportRecord]:
    """Collect all import records of a schema source.

    A source without import comments yields an empty list.
    """
    records = list(iter_import_records(sdl))
    logger.debug(f"Found {len(records)} import directives")
    return records
