"""
Unit tests for paths.py

Tests sibling-file resolution and the module reference fallback.
"""

import os
import tempfile
import unittest
from pathlib import Path

from resolution.errors import PathResolutionError
from resolution.paths import (
    LocalFileSystem,
    is_schema_file,
    resolve_module_file_path,
    resolve_module_reference,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class _DeniedFileSystem:
    def realpath(self, path):
        raise PermissionError(f"denied: {path}")


class TestIsSchemaFile(unittest.TestCase):

    def test_extensions(self):
        for name in ("a.graphql", "a.graphqls", "a.gql", "a.gqls", "dir/a.graphql"):
            self.assertTrue(is_schema_file(name), name)

    def test_non_schema(self):
        for name in ("a.py", "a.json", "a.graphql.bak", "module:attr"):
            self.assertFalse(is_schema_file(name), name)


class TestResolveModuleFilePath(unittest.TestCase):
    """Test resolving import targets from an importing file."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self.tmpdir.name)
        (self.root / "sub").mkdir()
        (self.root / "shared").mkdir()
        (self.root / "sub" / "a.graphql").write_text("type A { a: Int }")
        (self.root / "sub" / "b.graphql").write_text("type B { b: Int }")
        (self.root / "shared" / "c.graphql").write_text("type C { c: Int }")
        self.fs = LocalFileSystem()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_sibling_file(self):
        path = resolve_module_file_path(
            str(self.root / "sub" / "a.graphql"), "b.graphql", str(self.root), self.fs
        )
        self.assertEqual(path, os.path.realpath(self.root / "sub" / "b.graphql"))

    def test_importing_path_relative_to_cwd(self):
        path = resolve_module_file_path(
            "sub/a.graphql", "./b.graphql", str(self.root), self.fs
        )
        self.assertEqual(path, os.path.realpath(self.root / "sub" / "b.graphql"))

    def test_parent_directory(self):
        path = resolve_module_file_path(
            "sub/a.graphql", "../shared/c.graphql", str(self.root), self.fs
        )
        self.assertEqual(path, os.path.realpath(self.root / "shared" / "c.graphql"))

    def test_falls_back_to_cwd(self):
        path = resolve_module_file_path(
            "sub/a.graphql", "shared/c.graphql", str(self.root), self.fs
        )
        self.assertEqual(path, os.path.realpath(self.root / "shared" / "c.graphql"))

    def test_missing_everywhere_raises(self):
        with self.assertRaises(PathResolutionError):
            resolve_module_file_path(
                "sub/a.graphql", "nowhere.graphql", str(self.root), self.fs
            )

    def test_non_schema_target_unchanged(self):
        path = resolve_module_file_path(
            "sub/a.graphql", "pkg.module:type_defs", str(self.root), self.fs
        )
        self.assertEqual(path, "pkg.module:type_defs")

    def test_non_schema_importer_unchanged(self):
        path = resolve_module_file_path(
            "schema.py", "b.graphql", str(self.root), self.fs
        )
        self.assertEqual(path, "b.graphql")

    def test_without_filesystem_unchanged(self):
        path = resolve_module_file_path(
            "sub/a.graphql", "b.graphql", str(self.root), None
        )
        self.assertEqual(path, "b.graphql")

    def test_other_os_errors_raise(self):
        with self.assertRaises(PathResolutionError) as ctx:
            resolve_module_file_path(
                "sub/a.graphql", "b.graphql", str(self.root), _DeniedFileSystem()
            )
        self.assertIsInstance(ctx.exception.__cause__, PermissionError)


class TestResolveModuleReference(unittest.TestCase):
    """Test resolving targets shipped inside Python packages."""

    def test_package_relative_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = resolve_module_reference(
                "resolution/tests/fixtures/e2e/b.graphql", tmpdir
            )
        self.assertEqual(path, os.path.realpath(FIXTURES_DIR / "e2e" / "b.graphql"))

    def test_unknown_package_raises(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(PathResolutionError):
                resolve_module_reference("no_such_package_xyz/a.graphql", tmpdir)

    def test_missing_file_in_package_raises(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(PathResolutionError):
                resolve_module_reference("resolution/missing.graphql", tmpdir)


if __name__ == "__main__":
    unittest.main()
