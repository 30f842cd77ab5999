"""
Loading schema sources and custom loaders from Python code.

A schema can be exported from a module instead of living in a ``.graphql``
file::

    # app/schema.py
    type_defs = '''
    # import User from 'users.graphql'
    type Query { me: User }
    '''

and imported as ``app/schema.py`` or ``app.schema:type_defs``.
"""

import importlib
import importlib.util
import logging
import os
from types import ModuleType
from typing import Any, Callable, Optional, Tuple

from graphql import GraphQLSchema, print_ast, print_schema
from graphql.language import ast

from resolution.config import CODE_EXPORT_ATTRIBUTES, CUSTOM_LOADER_ATTRIBUTES
from resolution.errors import LoaderError
from resolution.models import SourceDocument
from resolution.parser import get_document_from_sdl

logger = logging.getLogger(__name__)


def split_pointer(pointer: str) -> Tuple[str, Optional[str]]:
    """Split ``module:attr`` into its parts. Drive letters are left alone."""
    module, sep, attr = pointer.rpartition(":")
    if sep and len(module) > 1 and attr.isidentifier():
        return module, attr
    return pointer, None


def is_code_pointer(pointer: str) -> bool:
    """Check whether a load target refers to Python code."""
    module, attr = split_pointer(pointer)
    return attr is not None or module.endswith(".py")


def _import_module(module_ref: str, cwd: str) -> ModuleType:
    if module_ref.endswith(".py"):
        file_path = os.path.abspath(os.path.join(cwd, module_ref))
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")
        module_name = os.path.splitext(os.path.basename(file_path))[0]
        spec = importlib.util.spec_from_file_location(module_name, file_path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load module from {file_path}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
    return importlib.import_module(module_ref)


def _export_to_sdl(value: Any) -> Tuple[str, Optional[ast.DocumentNode]]:
    if callable(value) and not isinstance(value, GraphQLSchema):
        value = value()
    if isinstance(value, str):
        return value, None
    if isinstance(value, ast.DocumentNode):
        return print_ast(value), value
    if isinstance(value, GraphQLSchema):
        return print_schema(value), None
    raise TypeError(f"Unsupported schema export type: {type(value).__name__}")


def load_code_file(pointer: str, cwd: str) -> SourceDocument:
    """Load schema source exported by a Python module.

    Args:
        pointer: ``path/to/module.py``, ``dotted.module`` or either with an
            explicit ``:attribute`` suffix.
        cwd: Directory relative file paths are taken from.

    Returns:
        SourceDocument whose ``raw_sdl`` is the exported text, so import
        directives inside it are followed.

    Raises:
        LoaderError: If the module cannot be imported, exports nothing usable,
            or the exported SDL does not parse.
    """
    module_ref, attr = split_pointer(pointer)
    try:
        module = _import_module(module_ref, cwd)
    except (ImportError, OSError) as e:
        raise LoaderError(f"Unable to import schema module {module_ref}: {e}") from e

    names = (attr,) if attr else CODE_EXPORT_ATTRIBUTES
    for name in names:
        if not hasattr(module, name):
            continue
        try:
            sdl, document = _export_to_sdl(getattr(module, name))
            if document is None:
                document = get_document_from_sdl(sdl)
        except Exception as e:
            raise LoaderError(
                f"Invalid schema export {module_ref}:{name}: {e}"
            ) from e
        logger.debug("Loaded schema export %s:%s", module_ref, name)
        return SourceDocument(location=pointer, document=document, raw_sdl=sdl)

    raise LoaderError(
        f"Module {module_ref} exports none of: {', '.join(names)}"
    )


def use_custom_loader(loader_pointer: Any, cwd: str) -> Callable[..., Any]:
    """Turn a loader pointer into a callable.

    Args:
        loader_pointer: A callable, or a ``module[:attr]`` string. Without an
            attribute the module's ``default``/``loader`` callable is used, or
            the module itself when it is callable.
        cwd: Directory relative ``.py`` paths are taken from.

    Returns:
        The loader callable.

    Raises:
        LoaderError: If no callable can be found.
    """
    loader = None
    if callable(loader_pointer):
        loader = loader_pointer
    elif isinstance(loader_pointer, str):
        module_ref, attr = split_pointer(loader_pointer)
        try:
            module = _import_module(module_ref, cwd)
        except (ImportError, OSError) as e:
            logger.debug("Cannot import custom loader %s: %s", module_ref, e)
            module = None
        if module is not None:
            candidates = (attr,) if attr else CUSTOM_LOADER_ATTRIBUTES
            for name in candidates:
                value = getattr(module, name, None)
                if callable(value):
                    loader = value
                    break
            else:
                if callable(module):
                    loader = module

    if loader is None:
        raise LoaderError(f"Failed to load custom loader: {loader_pointer}")
    return loader
