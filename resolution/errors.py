"""
Exception taxonomy for schema import resolution.

Every failure aborts the whole resolution pass; nothing here is retried.
"""


class ImportResolutionError(Exception):
    """Base class for failures raised while resolving schema imports."""


class MalformedImportError(ImportResolutionError):
    """Raised when an import comment matches neither accepted grammar."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(
            f"Import statement is not valid: {line}\n"
            "If you want to have comments starting with '# import', "
            "please use ''' instead!\n"
            "You can only have 'import' statements in the following pattern:\n"
            "  # import [Type].[Field] from [File]\n"
            "  # import * from [File]\n"
            "  # import [File]"
        )


class PathResolutionError(ImportResolutionError):
    """Raised when an import target is neither a readable file nor a module."""


class LoaderError(ImportResolutionError):
    """Raised when the single-file loader fails to produce a document."""


class DefinitionPoolError(ImportResolutionError):
    """Raised when the completion step cannot find a referenced type."""
