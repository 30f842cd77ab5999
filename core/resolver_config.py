"""Resolver settings file contract.

Settings are read from YAML (or JSON, by suffix), for example::

    entry: schema/main.graphql
    cwd: .
    sort_fields: true
    filter_kinds: [operation_definition, fragment_definition]
    concurrent: false
    output: build/schema.graphql

Environment flags ``SCHEMA_IMPORT_SORT_FIELDS`` and
``SCHEMA_IMPORT_CONCURRENT`` override the file.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

_BOOL_KEYS = ("sort_fields", "concurrent")


class ConfigValidationError(RuntimeError):
    """Raised when a settings file is unreadable or invalid."""


@dataclass(frozen=True)
class ResolverSettings:
    """Settings for one resolver run."""

    entry: str | None = None
    cwd: str = "."
    sort_fields: bool = False
    concurrent: bool = False
    max_workers: int | None = None
    filter_kinds: tuple[str, ...] = ()
    loader: str | None = None
    output: str | None = None
    report_dir: str = "output/run_reports"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def _load_settings_payload(path: str) -> dict[str, Any]:
    settings_path = Path(path)
    try:
        text = settings_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigValidationError(f"Settings file not found: {settings_path}") from exc

    try:
        if settings_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidationError(
            f"Failed to parse settings at {settings_path}: {exc}"
        ) from exc

    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigValidationError(
            f"Unexpected settings payload type: {type(payload).__name__}"
        )
    return payload


def _optional_str(payload: dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_resolver_settings(payload: dict[str, Any], strict: bool = False) -> ResolverSettings:
    """Validate a settings mapping.

    Unknown keys are ignored with a warning, or rejected in strict mode.
    """
    known = set(ResolverSettings.__dataclass_fields__)
    unknown = sorted(set(payload) - known)
    if unknown:
        msg = f"Unknown settings keys: {', '.join(unknown)}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; ignoring", msg)

    for key in _BOOL_KEYS:
        if key in payload and not isinstance(payload[key], bool):
            raise ConfigValidationError(f"{key} must be a boolean")

    max_workers = payload.get("max_workers")
    if max_workers is not None:
        if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
            raise ConfigValidationError("max_workers must be a positive integer")

    filter_raw = payload.get("filter_kinds") or []
    if isinstance(filter_raw, str):
        filter_raw = [filter_raw]
    if not isinstance(filter_raw, list):
        raise ConfigValidationError("filter_kinds must be a list of node kinds")
    filter_kinds = tuple(str(kind).strip() for kind in filter_raw if str(kind).strip())

    return ResolverSettings(
        entry=_optional_str(payload, "entry"),
        cwd=_optional_str(payload, "cwd") or ".",
        sort_fields=payload.get("sort_fields", False),
        concurrent=payload.get("concurrent", False),
        max_workers=max_workers,
        filter_kinds=filter_kinds,
        loader=_optional_str(payload, "loader"),
        output=_optional_str(payload, "output"),
        report_dir=_optional_str(payload, "report_dir") or "output/run_reports",
    )


def apply_env_overrides(settings: ResolverSettings) -> ResolverSettings:
    """Apply ``SCHEMA_IMPORT_*`` environment flags on top of ``settings``."""
    return replace(
        settings,
        sort_fields=_env_flag("SCHEMA_IMPORT_SORT_FIELDS", settings.sort_fields),
        concurrent=_env_flag("SCHEMA_IMPORT_CONCURRENT", settings.concurrent),
    )


def load_resolver_settings(path: str | None, strict: bool | None = None) -> ResolverSettings:
    """Load, validate and env-override resolver settings.

    Args:
        path: YAML/JSON settings file, or None for defaults.
        strict: Reject unknown keys. Defaults to ``STRICT_CONFIG_VALIDATION``.

    Raises:
        ConfigValidationError: If the file is missing, unparsable or invalid.
    """
    if strict is None:
        strict = resolve_strict_config_validation()
    payload = _load_settings_payload(path) if path else {}
    settings = parse_resolver_settings(payload, strict=strict)
    return apply_env_overrides(settings)
