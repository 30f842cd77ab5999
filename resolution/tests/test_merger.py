"""
Unit tests for merger.py

Tests candidate ordering and the merge of same-named definitions.
"""

import unittest

from graphql import parse

from resolution.merger import build_candidate_set, merge_fields, merge_type_definitions


def _one(sdl):
    return parse(sdl).definitions[0]


def _field_names(definition):
    return [f.name.value for f in definition.fields]


class TestCandidateSet(unittest.TestCase):
    """Test the merge candidate ordering."""

    def test_empty(self):
        self.assertEqual(build_candidate_set([]), [])

    def test_entry_then_others_repeated(self):
        a, b, c = _one("type A { x: Int }"), _one("type B { x: Int }"), _one("type C { x: Int }")
        candidates = build_candidate_set([[a], [b], [c]])
        self.assertEqual(candidates, [a, b, c, a, b, c])

    def test_single_document(self):
        a = _one("type A { x: Int }")
        self.assertEqual(build_candidate_set([[a]]), [a, a])


class TestMergeTypeDefinitions(unittest.TestCase):
    """Test merging definitions by name."""

    def test_identical_copies_merge_to_one(self):
        first = _one("type A { x: Int y: String }")
        second = _one("type A { x: Int y: String }")
        for candidates in ([first, second], [second, first]):
            merged = merge_type_definitions(candidates)
            self.assertEqual(len(merged), 1)
            self.assertEqual(_field_names(merged[0]), ["x", "y"])

    def test_fields_are_unioned(self):
        merged = merge_type_definitions(
            [_one("type Query { b: Int }"), _one("type Query { a: Int b: Int }")]
        )
        self.assertEqual(len(merged), 1)
        self.assertEqual(_field_names(merged[0]), ["b", "a"])

    def test_fields_sorted_when_requested(self):
        merged = merge_type_definitions(
            [_one("type Query { b: Int }"), _one("type Query { a: Int }")],
            sort_fields=True,
        )
        self.assertEqual(_field_names(merged[0]), ["a", "b"])

    def test_first_seen_field_wins(self):
        merged = merge_type_definitions(
            [_one("type A { x: Int }"), _one("type A { x: String y: Int }")]
        )
        fields = merged[0].fields
        self.assertEqual(_field_names(merged[0]), ["x", "y"])
        self.assertEqual(fields[0].type.name.value, "Int")

    def test_first_occurrence_keeps_position(self):
        merged = merge_type_definitions(
            [
                _one("type Query { a: Int }"),
                _one("type Foo { x: Int }"),
                _one("type Query { b: Int }"),
            ]
        )
        self.assertEqual([d.name.value for d in merged], ["Query", "Foo"])

    def test_inputs_not_mutated(self):
        first = _one("type A { x: Int }")
        second = _one("type A { y: Int }")
        merge_type_definitions([first, second])
        self.assertEqual(_field_names(first), ["x"])
        self.assertEqual(_field_names(second), ["y"])

    def test_non_field_bearing_duplicates_keep_first(self):
        first = _one("enum Role { ADMIN }")
        second = _one("enum Role { USER }")
        merged = merge_type_definitions([first, second])
        self.assertEqual(merged, [first])

    def test_extension_fields_merge_into_definition(self):
        merged = merge_type_definitions(
            [_one("type Query { a: Int }"), _one("extend type Query { b: Int }")]
        )
        self.assertEqual(merged[0].kind, "object_type_definition")
        self.assertEqual(_field_names(merged[0]), ["a", "b"])

    def test_unnamed_definitions_pass_through_once(self):
        schema = _one("schema { query: Query }")
        query = _one("type Query { a: Int }")
        merged = merge_type_definitions([schema, query, schema, query])
        self.assertEqual(merged[0], schema)
        self.assertEqual(len(merged), 2)


class TestMergeFields(unittest.TestCase):
    """Test the two-definition field union."""

    def test_returns_copy(self):
        existing = _one("interface Node { id: ID }")
        incoming = _one("interface Node { id: ID created: String }")
        merged = merge_fields(existing, incoming)
        self.assertIsNot(merged, existing)
        self.assertEqual(merged.kind, "interface_type_definition")
        self.assertEqual(_field_names(merged), ["id", "created"])


if __name__ == "__main__":
    unittest.main()
