"""Tests for the run_resolve command-line entry point."""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import run_resolve

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@patch("run_resolve.load_dotenv")
class TestRunResolve(unittest.TestCase):
    def setUp(self) -> None:
        patcher = patch.dict(os.environ, {}, clear=True)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_writes_merged_schema(self, _load_dotenv) -> None:
        entry = str(FIXTURES_DIR / "e2e" / "a.graphql")
        with tempfile.TemporaryDirectory() as tmpdir:
            output = os.path.join(tmpdir, "out", "schema.graphql")
            code = run_resolve.main([entry, "-o", output])
            self.assertEqual(code, 0)
            sdl = Path(output).read_text(encoding="utf-8")
        self.assertIn("type Query", sdl)
        self.assertIn("type Foo", sdl)
        self.assertNotIn("Unrelated", sdl)

    def test_settings_file_and_report(self, _load_dotenv) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            settings_path = os.path.join(tmpdir, "resolver.yml")
            report_dir = os.path.join(tmpdir, "reports")
            output = os.path.join(tmpdir, "schema.graphql")
            Path(settings_path).write_text(
                f"entry: fields/main_all.graphql\n"
                f"cwd: {FIXTURES_DIR}\n"
                f"sort_fields: true\n"
                f"output: {output}\n"
                f"report_dir: {report_dir}\n",
                encoding="utf-8",
            )
            code = run_resolve.main(["--config", settings_path, "--report"])
            self.assertEqual(code, 0)
            reports = list(Path(report_dir).glob("*.json"))
            self.assertEqual(len(reports), 1)
            payload = json.loads(reports[0].read_text(encoding="utf-8"))
            sdl = Path(output).read_text(encoding="utf-8")
        self.assertEqual(payload["entry"], "fields/main_all.graphql")
        self.assertEqual(payload["definitions"], ["Query", "Account", "Secret"])
        self.assertLess(sdl.index("fieldA"), sdl.index("fieldB"))

    def test_missing_entry_fails(self, _load_dotenv) -> None:
        self.assertEqual(run_resolve.main([]), 1)

    def test_unreadable_entry_fails(self, _load_dotenv) -> None:
        missing = str(FIXTURES_DIR / "e2e" / "missing.graphql")
        self.assertEqual(run_resolve.main([missing]), 1)

    def test_undecodable_entry_fails(self, _load_dotenv) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            entry = os.path.join(tmpdir, "bad.graphql")
            Path(entry).write_bytes(b"\xff\xfe type Query { a: Int }\n")
            self.assertEqual(run_resolve.main([entry]), 1)

    def test_bad_settings_fail(self, _load_dotenv) -> None:
        self.assertEqual(run_resolve.main(["--config", "/definitely/missing.yml"]), 1)


class TestRunResolveImports(unittest.TestCase):
    def test_resolver_entry_points_bound_at_import(self) -> None:
        from resolution.errors import ImportResolutionError
        from resolution.resolver import resolve_file

        self.assertIs(run_resolve.resolve_file, resolve_file)
        self.assertIs(run_resolve.ImportResolutionError, ImportResolutionError)


if __name__ == "__main__":
    unittest.main()
