"""Tests for key paths and tree navigation."""

from conic.paths import split_path, join_path, navigate, lookup, contains, deep_merge


class TestSplitPath:
    """Tests for split_path."""

    def test_empty_key_is_root(self):
        assert split_path("") == []

    def test_dotted_key(self):
        assert split_path("a.b.c") == ["a", "b", "c"]

    def test_custom_delimiter(self):
        assert split_path("a/b", "/") == ["a", "b"]
        assert split_path("a.b", "/") == ["a.b"]

    def test_join_is_inverse(self):
        assert join_path(split_path("db.primary.host")) == "db.primary.host"


class TestNavigate:
    """Tests for navigate (auto-vivifying walk)."""

    def test_empty_path_returns_tree_itself(self):
        tree = {"a": 1}
        assert navigate(tree, []) is tree
        assert tree == {"a": 1}

    def test_creates_missing_levels(self):
        tree = {}
        result = navigate(tree, ["a", "b", "c"])
        assert result == {}
        assert tree == {"a": {"b": {"c": {}}}}
        assert tree["a"]["b"]["c"] is result

    def test_returns_existing_mapping(self):
        inner = {"host": "x"}
        tree = {"db": inner}
        assert navigate(tree, ["db"]) is inner

    def test_scalar_intermediate_is_unresolvable(self):
        tree = {"a": 5}
        assert navigate(tree, ["a", "b"]) is None
        assert tree == {"a": 5}

    def test_scalar_leaf_is_unresolvable(self):
        tree = {"a": "text"}
        assert navigate(tree, ["a"]) is None
        assert tree == {"a": "text"}

    def test_list_is_unresolvable(self):
        tree = {"a": [1, 2]}
        assert navigate(tree, ["a", "b"]) is None
        assert tree == {"a": [1, 2]}

    def test_none_value_replaced_with_mapping(self):
        tree = {"a": None}
        result = navigate(tree, ["a"])
        assert result == {}
        assert tree["a"] is result

    def test_partial_existing_path(self):
        tree = {"a": {"x": 1}}
        navigate(tree, ["a", "b"])
        assert tree == {"a": {"x": 1, "b": {}}}


class TestLookup:
    """Tests for read-only lookup."""

    def test_finds_leaf(self):
        tree = {"db": {"host": "x"}}
        assert lookup(tree, ["db", "host"]) == "x"

    def test_empty_path_returns_tree(self):
        tree = {"a": 1}
        assert lookup(tree, []) is tree

    def test_missing_returns_default_without_mutating(self):
        tree = {"a": {}}
        assert lookup(tree, ["a", "b", "c"], "dflt") == "dflt"
        assert tree == {"a": {}}

    def test_through_scalar_returns_default(self):
        tree = {"a": 1}
        assert lookup(tree, ["a", "b"]) is None

    def test_contains(self):
        tree = {"a": {"b": None}}
        assert contains(tree, ["a", "b"])
        assert not contains(tree, ["a", "c"])
        assert tree == {"a": {"b": None}}


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_merge(self):
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        override = {"a": {"y": 3}, "c": 4}
        assert deep_merge(base, override) == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}

    def test_does_not_modify_inputs(self):
        base = {"a": {"x": 1}}
        deep_merge(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}

    def test_non_dict_replaces(self):
        assert deep_merge({"a": {"x": 1}}, {"a": 5}) == {"a": 5}
