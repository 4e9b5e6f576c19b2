import unittest

from celery_script.ast import normalize
from celery_script.schema import DEFAULT_SCHEMA_PATH, SchemaValidationError, validate_node_schema
from celery_script.serialize import node_to_dict


class SchemaTests(unittest.TestCase):
    def test_schema_ships_with_package(self):
        self.assertTrue(DEFAULT_SCHEMA_PATH.exists())

    def test_canonical_tree_matches_schema(self):
        node = normalize(
            {
                "kind": "sequence",
                "args": {"version": 1, "locals": {"kind": "scope_declaration", "args": {}}},
                "body": [{"kind": "wait", "args": {"milliseconds": 100}}],
            }
        )
        validate_node_schema(node_to_dict(node))

    def test_missing_body_fails(self):
        with self.assertRaisesRegex(SchemaValidationError, "Schema validation failed at root"):
            validate_node_schema({"kind": "wait", "args": {}})

    def test_raw_node_in_args_fails(self):
        document = {"kind": "main", "args": {"node": {"kind": "sub", "args": {}}}, "body": []}
        with self.assertRaises(SchemaValidationError):
            validate_node_schema(document)

    def test_bad_body_element_reports_location(self):
        document = {"kind": "main", "args": {}, "body": [{"kind": 3, "args": {}, "body": []}]}
        with self.assertRaisesRegex(SchemaValidationError, "body.0.kind"):
            validate_node_schema(document)


if __name__ == "__main__":
    unittest.main()
