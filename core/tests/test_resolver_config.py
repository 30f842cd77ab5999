"""Tests for resolver settings parsing and validation."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from core.resolver_config import (
    ConfigValidationError,
    ResolverSettings,
    apply_env_overrides,
    load_resolver_settings,
    parse_resolver_settings,
)


class TestResolverSettings(unittest.TestCase):
    def _write_settings(self, text: str, suffix: str = ".yml") -> str:
        handle = tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False)
        handle.write(text)
        handle.flush()
        handle.close()
        return handle.name

    def test_load_valid_yaml(self) -> None:
        path = self._write_settings(
            """
entry: schema/main.graphql
cwd: /srv/app
sort_fields: true
filter_kinds:
  - operation_definition
max_workers: 4
"""
        )
        try:
            with mock.patch.dict(os.environ, {}, clear=True):
                settings = load_resolver_settings(path, strict=True)
            self.assertEqual(settings.entry, "schema/main.graphql")
            self.assertEqual(settings.cwd, "/srv/app")
            self.assertTrue(settings.sort_fields)
            self.assertFalse(settings.concurrent)
            self.assertEqual(settings.filter_kinds, ("operation_definition",))
            self.assertEqual(settings.max_workers, 4)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_load_json(self) -> None:
        path = self._write_settings('{"entry": "a.graphql", "concurrent": true}', suffix=".json")
        try:
            with mock.patch.dict(os.environ, {}, clear=True):
                settings = load_resolver_settings(path)
            self.assertEqual(settings.entry, "a.graphql")
            self.assertTrue(settings.concurrent)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_empty_file_gives_defaults(self) -> None:
        path = self._write_settings("")
        try:
            with mock.patch.dict(os.environ, {}, clear=True):
                settings = load_resolver_settings(path)
            self.assertEqual(settings, ResolverSettings())
        finally:
            Path(path).unlink(missing_ok=True)

    def test_no_path_gives_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(load_resolver_settings(None), ResolverSettings())

    def test_missing_file_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            load_resolver_settings("/definitely/missing.yml")

    def test_malformed_yaml_raises(self) -> None:
        path = self._write_settings("entry: [unclosed")
        try:
            with self.assertRaises(ConfigValidationError):
                load_resolver_settings(path)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_non_mapping_raises(self) -> None:
        path = self._write_settings("- a\n- b\n")
        try:
            with self.assertRaises(ConfigValidationError):
                load_resolver_settings(path)
        finally:
            Path(path).unlink(missing_ok=True)

    def test_non_boolean_flag_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            parse_resolver_settings({"sort_fields": "yes"})

    def test_invalid_max_workers_raises(self) -> None:
        for value in (0, -1, "4", True):
            with self.assertRaises(ConfigValidationError):
                parse_resolver_settings({"max_workers": value})

    def test_single_filter_kind_string(self) -> None:
        settings = parse_resolver_settings({"filter_kinds": "fragment_definition"})
        self.assertEqual(settings.filter_kinds, ("fragment_definition",))

    def test_unknown_keys(self) -> None:
        settings = parse_resolver_settings({"entry": "a.graphql", "colour": "red"})
        self.assertEqual(settings.entry, "a.graphql")
        with self.assertRaises(ConfigValidationError):
            parse_resolver_settings({"colour": "red"}, strict=True)

    def test_env_overrides(self) -> None:
        env = {"SCHEMA_IMPORT_SORT_FIELDS": "true", "SCHEMA_IMPORT_CONCURRENT": "0"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = apply_env_overrides(ResolverSettings(concurrent=True))
        self.assertTrue(settings.sort_fields)
        self.assertFalse(settings.concurrent)

    def test_strict_from_env(self) -> None:
        path = self._write_settings("colour: red\n")
        try:
            with mock.patch.dict(os.environ, {"STRICT_CONFIG_VALIDATION": "1"}, clear=True):
                with self.assertRaises(ConfigValidationError):
                    load_resolver_settings(path)
        finally:
            Path(path).unlink(missing_ok=True)


if __name__ == "__main__":
    unittest.main()
