"""test_tree.py - flatten / inflate between nested documents and path mappings"""

import io
import unittest
from contextlib import redirect_stderr

import helpers  # noqa: F401
from locale_sync.errors import MalformedPathError, PathConflictError
from locale_sync.tree import flatten, inflate


class TestFlatten(unittest.TestCase):

    def test_nested_mapping(self):
        self.assertEqual(flatten({"a": {"b": "Hello"}}), {"a.b": "Hello"})

    def test_list(self):
        self.assertEqual(flatten({"list": ["x", "y"]}), {"list[0]": "x", "list[1]": "y"})

    def test_mixed_nesting_keeps_document_order(self):
        tree = {
            "menu": {"items": [{"label": "Open"}, {"label": "Close", "hint": "Ctrl+W"}]},
            "title": "App",
        }
        flat = flatten(tree)
        self.assertEqual(
            list(flat.items()),
            [
                ("menu.items[0].label", "Open"),
                ("menu.items[1].label", "Close"),
                ("menu.items[1].hint", "Ctrl+W"),
                ("title", "App"),
            ],
        )

    def test_non_string_leaves_are_skipped(self):
        tree = {"n": 3, "flag": True, "none": None, "s": "keep", "arr": [1, "two", None]}
        self.assertEqual(flatten(tree), {"s": "keep", "arr[1]": "two"})

    def test_root_list(self):
        self.assertEqual(flatten(["a", {"b": "c"}]), {"[0]": "a", "[1].b": "c"})

    def test_scalar_root_has_no_leaves(self):
        self.assertEqual(flatten("just a string"), {})
        self.assertEqual(flatten(None), {})

    def test_dotted_keys_do_not_collide_with_nesting(self):
        flat = flatten({"a.b": "flat", "a": {"b": "nested"}})
        self.assertEqual(flat, {"a\\.b": "flat", "a.b": "nested"})

    def test_empty_key_is_rejected(self):
        with self.assertRaises(MalformedPathError):
            flatten({"": "x"})

    def test_empty_key_skipped_when_not_strict(self):
        err = io.StringIO()
        with redirect_stderr(err):
            flat = flatten({"": "x", "a": {"": {"b": "y"}, "c": "z"}}, strict=False)
        self.assertEqual(flat, {"a.c": "z"})
        self.assertIn("[WARN]", err.getvalue())


class TestInflate(unittest.TestCase):

    def test_nested_mapping(self):
        self.assertEqual(inflate({"a.b": "Hej"}), {"a": {"b": "Hej"}})

    def test_list(self):
        self.assertEqual(inflate({"list[0]": "x", "list[1]": "y"}), {"list": ["x", "y"]})

    def test_order_of_pairs_does_not_matter(self):
        self.assertEqual(inflate({"list[1]": "y", "list[0]": "x"}), {"list": ["x", "y"]})

    def test_list_gaps_are_filled_with_none(self):
        self.assertEqual(inflate({"l[0]": "a", "l[2]": "c"}), {"l": ["a", None, "c"]})

    def test_root_list(self):
        self.assertEqual(inflate({"[0]": "a", "[1].b": "c"}), ["a", {"b": "c"}])

    def test_empty_mapping(self):
        self.assertEqual(inflate({}), {})

    def test_conflicting_container_kinds(self):
        with self.assertRaises(PathConflictError) as ctx:
            inflate({"a.b": "x", "a[0]": "y"})
        self.assertEqual(ctx.exception.path, "a")

    def test_leaf_where_container_needed(self):
        with self.assertRaises(PathConflictError):
            inflate({"a": "x", "a.b": "y"})

    def test_container_where_leaf_set(self):
        with self.assertRaises(PathConflictError):
            inflate({"a.b": "y", "a": "x"})

    def test_root_kind_conflict(self):
        with self.assertRaises(PathConflictError):
            inflate({"a": "x", "[0]": "y"})

    def test_same_leaf_twice(self):
        # "a[1]" and "a[01]" are different keys naming the same position
        with self.assertRaises(PathConflictError):
            inflate({"a[1]": "x", "a[01]": "y"})

    def test_malformed_path(self):
        with self.assertRaises(MalformedPathError):
            inflate({"a[": "x"})


class TestRoundTrip(unittest.TestCase):

    def test_inflate_inverts_flatten(self):
        trees = [
            {"a": {"b": "Hello"}},
            {"list": ["x", "y"]},
            {"deep": {"er": [{"est": ["1", "2", {"k": "v"}]}, "tail"]}},
            ["root", ["list", "of"], {"lists": "!"}],
            {"a.b": "dotted", "x[0]": "bracketed", "a": {"b": "nested"}},
            {"ünicode": {"キー": "値"}},
        ]
        for tree in trees:
            with self.subTest(tree=tree):
                self.assertEqual(inflate(flatten(tree)), tree)

    def test_non_string_leaves_do_not_survive(self):
        tree = {"a": "x", "n": 1, "obj": {"flag": False, "s": "y"}}
        self.assertEqual(inflate(flatten(tree)), {"a": "x", "obj": {"s": "y"}})


if __name__ == "__main__":
    unittest.main()
