"""Unit tests for string containment."""
from addrcrush.utils.strings import contains


class TestContains:
    """Test case-insensitive prefix containment."""

    def test_equal(self):
        """Test equal strings."""
        assert contains("abc", "abc") is True
        assert contains("ABC", "abc") is True

    def test_prefix_either_way(self):
        """Test that the shorter string may be a prefix of the longer."""
        assert contains("Main St", "Main Street Extra") is True
        assert contains("Main Street Extra", "Main St") is True

    def test_not_prefix(self):
        """Test that substrings elsewhere do not count."""
        assert contains("Street", "Main Street") is False
        assert contains("abc", "abd") is False
        assert contains("ab", "xy") is False

    def test_min_length(self):
        """Test that both strings must meet the minimum length."""
        assert contains("ab", "xy", 5) is False
        assert contains("abc", "abcdef", 4) is False
        assert contains("abcd", "abcdef", 4) is True
        assert contains("abcd", "abcd", 5) is False

    def test_empty_string(self):
        """Test that an empty string is a prefix of anything without a minimum."""
        assert contains("", "abc") is True
        assert contains("", "abc", 1) is False
