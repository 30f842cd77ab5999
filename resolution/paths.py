"""
Import target path resolution.

A target is first looked up next to the importing schema file; if no such
file exists it is treated as a reference into a Python package, so schemas
shipped inside installed packages can be imported with the same syntax.
"""

import importlib.util
import logging
import os
from typing import Optional, Protocol

from resolution.config import SCHEMA_FILE_PATTERN
from resolution.errors import PathResolutionError

logger = logging.getLogger(__name__)


class FileSystem(Protocol):
    """Path-existence capability used by the resolver."""

    def realpath(self, path: str) -> str:
        """Return the canonical path, raising FileNotFoundError if missing."""
        ...


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    def realpath(self, path: str) -> str:
        if not os.path.exists(path):
            raise FileNotFoundError(path)
        return os.path.realpath(path)


def is_schema_file(path: str) -> bool:
    """Check whether a path names a .graphql/.graphqls/.gql/.gqls file."""
    return SCHEMA_FILE_PATTERN.search(path) is not None


def _package_directory(package: str) -> Optional[str]:
    try:
        spec = importlib.util.find_spec(package)
    except (ImportError, ValueError):
        return None
    if spec is None or not spec.submodule_search_locations:
        return None
    return list(spec.submodule_search_locations)[0]


def resolve_module_reference(reference: str, cwd: str) -> str:
    """Resolve an import target that is not a sibling file.

    Lookup order:
    1. ``reference`` relative to ``cwd``.
    2. ``<package>/<rest>``: the first path segment is found as an importable
       Python package and the rest is taken from its directory.

    Args:
        reference: Raw import target, e.g. ``"shared_schemas/user.graphql"``.
        cwd: Working directory of the resolution pass.

    Returns:
        Absolute real path of the schema file.

    Raises:
        PathResolutionError: If neither lookup finds an existing file.
    """
    candidate = os.path.join(cwd, reference)
    if os.path.isfile(candidate):
        return os.path.realpath(candidate)

    normalized = reference.replace("\\", "/")
    package, _, rest = normalized.partition("/")
    if package and rest:
        package_dir = _package_directory(package.replace("-", "_"))
        if package_dir is not None:
            candidate = os.path.join(package_dir, *rest.split("/"))
            if os.path.isfile(candidate):
                return os.path.realpath(candidate)

    raise PathResolutionError(
        f"Cannot resolve import '{reference}': not a file under {cwd} "
        "and not found in any importable package"
    )


def resolve_module_file_path(
    file_path: str,
    import_from: str,
    cwd: str,
    filesystem: Optional[FileSystem] = None,
) -> str:
    """Resolve the canonical path of an import target.

    Args:
        file_path: Location of the file containing the import.
        import_from: Target as written in the import directive.
        cwd: Working directory of the resolution pass.
        filesystem: Path-existence capability. Without one the target is
            returned unchanged.

    Returns:
        The canonical target path, or ``import_from`` unchanged when either
        side is not a schema file.

    Raises:
        PathResolutionError: If the target cannot be found as a sibling file
            or as a module reference, or the filesystem lookup fails.
    """
    if filesystem is None:
        return import_from

    full_path = os.path.abspath(os.path.join(cwd, file_path))
    dir_name = os.path.dirname(full_path)
    if not (is_schema_file(full_path) and is_schema_file(import_from)):
        return import_from

    try:
        return filesystem.realpath(os.path.join(dir_name, import_from))
    except FileNotFoundError:
        logger.debug(
            "No sibling file %s next to %s, trying module lookup",
            import_from,
            full_path,
        )
        return resolve_module_reference(import_from, cwd)
    except OSError as e:
        raise PathResolutionError(
            f"Error resolving import '{import_from}' from {full_path}: {e}"
        ) from e
