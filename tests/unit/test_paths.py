"""
Unit tests for slash-delimited path helpers.
"""

from trigger_adapter.logic.paths import apply_change, join_path, normalize_path, path_parts, prune_nulls, val_at


class TestPathHelpers:
    """Test cases for path normalization."""

    def test_normalize_strips_slashes(self):
        """Test leading and trailing slash removal."""
        assert normalize_path('/messages/m1/') == 'messages/m1'
        assert normalize_path(None) == ''

    def test_parts_of_root(self):
        """Test that the root has no segments."""
        assert path_parts('/') == []
        assert path_parts('a/b') == ['a', 'b']

    def test_join(self):
        """Test joining with empty components."""
        assert join_path('/a/', 'b/c') == 'a/b/c'
        assert join_path(None, 'b') == 'b'
        assert join_path('a', None) == 'a'


class TestApplyChange:
    """Test cases for apply_change."""

    def test_deep_merge(self):
        """Test that nested dicts are merged."""
        before = {'user': {'name': 'Ann', 'age': 30}, 'status': 'active'}

        after = apply_change(before, {'user': {'age': 31}})

        assert after == {'user': {'name': 'Ann', 'age': 31}, 'status': 'active'}
        assert before['user']['age'] == 30

    def test_none_deletes(self):
        """Test that None leaves remove keys."""
        assert apply_change({'a': 1, 'b': 2}, {'b': None}) == {'a': 1}

    def test_scalar_replaces(self):
        """Test that non-dict sides replace outright."""
        assert apply_change({'a': 1}, 'text') == 'text'
        assert apply_change(None, {'a': 1}) == {'a': 1}
        assert apply_change({'a': 1}, None) is None

    def test_prune_nulls_nested(self):
        """Test pruning inside nested dicts."""
        assert prune_nulls({'a': {'b': None, 'c': 1}, 'd': None}) == {'a': {'c': 1}}


class TestValAt:
    """Test cases for val_at."""

    def test_nested_lookup(self):
        """Test reading a nested value."""
        assert val_at({'a': {'b': 2}}, 'a/b') == 2

    def test_missing_path(self):
        """Test that leaving the tree yields None."""
        assert val_at({'a': {'b': 2}}, 'a/c') is None
        assert val_at({'a': 1}, 'a/b') is None
        assert val_at(None, 'a') is None

    def test_root_of_scalar(self):
        """Test reading the root of a scalar value."""
        assert val_at('hello') == 'hello'
        assert val_at('hello', 'x') is None
