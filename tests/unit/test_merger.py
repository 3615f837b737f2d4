"""Unit tests for ConfigMerger."""
from configor.merger import ConfigMerger, ListMergeStrategy, deep_merge


def test_merge_nested_dicts_recursively():
    """Should merge nested mappings key by key."""
    base = {"database": {"host": "localhost", "port": 5432}, "workers": 1}
    override = {"database": {"host": "db.internal"}}

    result = deep_merge(base, override)

    assert result == {"database": {"host": "db.internal", "port": 5432}, "workers": 1}


def test_merge_replaces_scalars_and_lists():
    """Should replace scalars and lists by default."""
    base = {"workers": 1, "servers": [{"port": 80}, {"port": 81}]}
    override = {"workers": 2, "servers": [{"port": 8080}]}

    assert deep_merge(base, override) == {"workers": 2, "servers": [{"port": 8080}]}


def test_merge_type_mismatch_overrides():
    """Should let the override win when types differ."""
    assert deep_merge({"cache": {"ttl": 5}}, {"cache": None}) == {"cache": None}


def test_merge_does_not_modify_inputs():
    """Should leave both inputs untouched."""
    base = {"database": {"host": "localhost"}, "tags": ["a"]}
    override = {"database": {"port": 1}, "tags": ["b"]}

    result = deep_merge(base, override)
    result["database"]["host"] = "changed"
    result["tags"].append("c")

    assert base == {"database": {"host": "localhost"}, "tags": ["a"]}
    assert override == {"database": {"port": 1}, "tags": ["b"]}


def test_extend_and_prepend_strategies():
    """Should combine lists according to the strategy."""
    base = {"tags": ["a"]}
    override = {"tags": ["b"]}

    assert ConfigMerger(ListMergeStrategy.EXTEND).merge(base, override) == {"tags": ["a", "b"]}
    assert ConfigMerger(ListMergeStrategy.PREPEND).merge(base, override) == {"tags": ["b", "a"]}


def test_merge_multiple_later_wins():
    """Should merge left to right."""
    merger = ConfigMerger()

    result = merger.merge_multiple(
        {"workers": 1, "app_name": "base"},
        {"workers": 2},
        {"workers": 3, "debug": True},
    )

    assert result == {"workers": 3, "app_name": "base", "debug": True}


def test_merge_multiple_empty():
    """Should return an empty dict with nothing to merge."""
    assert ConfigMerger().merge_multiple() == {}
