"""Core shared settings, logging and reporting utilities."""

from core.structured_logging import (
    bind_context,
    configure_structured_logging,
    document_scope,
    get_document,
    get_phase,
    get_run_id,
    phase_scope,
    resolve_debug_logging,
    set_run_id,
)
from core.resolver_config import (
    ConfigValidationError,
    ResolverSettings,
    apply_env_overrides,
    load_resolver_settings,
    parse_resolver_settings,
    resolve_strict_config_validation,
)
from core.run_artifacts import build_run_report, write_run_report

__all__ = [
    "bind_context",
    "configure_structured_logging",
    "document_scope",
    "get_document",
    "get_phase",
    "get_run_id",
    "phase_scope",
    "resolve_debug_logging",
    "set_run_id",
    "ConfigValidationError",
    "ResolverSettings",
    "apply_env_overrides",
    "load_resolver_settings",
    "parse_resolver_settings",
    "resolve_strict_config_validation",
    "build_run_report",
    "write_run_report",
]
