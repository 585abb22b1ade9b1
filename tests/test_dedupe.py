"""Unit tests for entity normalization and deduplication."""
import pandas as pd
import pytest

from addrcrush.entity.dedupe import cluster_by_containment, dedupe_entities, expand_entities
from addrcrush.entity.normalize import normalize_entities


@pytest.fixture
def entities():
    return pd.DataFrame({
        "name": ["Biltmore A", "Biltmore B", "Elm"],
        "address": [
            "123 Biltmore Boulevard #A-101",
            "One Two Three Biltmore Boulv Unit 101A",
            "55 Elm Street",
        ],
        "phone": [None, "555-0100", None],
    })


class TestNormalizeEntities:
    """Test adding address keys to entities."""

    def test_adds_key(self, entities, normalizer):
        """Test that each row gets a key."""
        df = normalize_entities(entities, "address", normalizer)
        assert list(df["address_key"]) == ["123BILTMOREBLVD101A", "123BILTMOREBLVD101A", "55ELMST"]
        assert "address_key" not in entities.columns

    def test_missing_address(self, normalizer):
        """Test that missing addresses get an empty key."""
        df = normalize_entities(pd.DataFrame({"address": [None, "55 Elm Street"]}), "address", normalizer)
        assert list(df["address_key"]) == ["", "55ELMST"]

    def test_missing_column(self, entities, normalizer):
        """Test that an unknown column raises KeyError."""
        with pytest.raises(KeyError):
            normalize_entities(entities, "street", normalizer)


class TestDedupeEntities:
    """Test deduplication by address key."""

    def test_exact_keys(self, entities, normalizer):
        """Test that matching keys collapse to the most complete record."""
        df = dedupe_entities(normalize_entities(entities, "address", normalizer))
        assert len(df) == 2

        biltmore = df[df["address_key"] == "123BILTMOREBLVD101A"].iloc[0]
        assert biltmore["name"] == "Biltmore B"
        assert biltmore["duplicate_count"] == 2

    def test_empty_keys_kept(self, normalizer):
        """Test that records without an address are never merged."""
        raw = pd.DataFrame({"address": ["", "#", "55 Elm Street"]})
        df = dedupe_entities(normalize_entities(raw, "address", normalizer))
        assert len(df) == 3

    def test_prefix_matching(self, normalizer):
        """Test that prefix keys merge only when enabled."""
        raw = pd.DataFrame({"address": ["55 Elm Street", "55 Elm Street Unit 101A"]})
        keyed = normalize_entities(raw, "address", normalizer)
        assert len(dedupe_entities(keyed)) == 2
        assert len(dedupe_entities(keyed, min_length=5)) == 1
        assert len(dedupe_entities(keyed, min_length=10)) == 2

    def test_sibling_units_kept(self, normalizer):
        """Test that two units on the same street are not merged through it."""
        raw = pd.DataFrame({
            "address": ["55 Elm Street", "55 Elm Street Unit 101A", "55 Elm Street Unit 101B"],
        })
        df = dedupe_entities(normalize_entities(raw, "address", normalizer), min_length=5)
        assert len(df) == 2
        assert set(df["address_key"]) == {"55ELMST101A", "55ELMST101B"}

    def test_missing_key_column(self, entities):
        """Test that dedupe requires address keys."""
        with pytest.raises(KeyError):
            dedupe_entities(entities)


class TestClusterByContainment:
    """Test prefix clustering of keys."""

    def test_clusters(self):
        """Test that keys join the cluster of their prefix."""
        mapping = cluster_by_containment(["55ELMST101A", "9OAKWAY", "55ELMST", ""])
        assert mapping == {
            "55ELMST": "55ELMST",
            "55ELMST101A": "55ELMST",
            "9OAKWAY": "9OAKWAY",
        }

    def test_siblings_split(self):
        """Test that keys sharing only a common prefix form separate chains."""
        mapping = cluster_by_containment(["55ELMST101B", "55ELMST101A", "55ELMST"], min_length=5)
        assert mapping == {
            "55ELMST": "55ELMST",
            "55ELMST101A": "55ELMST",
            "55ELMST101B": "55ELMST101B",
        }


class TestExpandEntities:
    """Test range expansion of entity rows."""

    def test_expand_and_dedupe(self, normalizer):
        """Test that expanded rows dedupe against single addresses."""
        raw = pd.DataFrame({
            "id": [1, 2],
            "address": ["110-112 Mayberry Way", "111 Mayberry Way"],
        })
        expanded = expand_entities(raw, "address", normalizer)
        assert len(expanded) == 4
        assert list(expanded[expanded["id"] == 1]["address_key"]) == [
            "110MAYBERRYWAY",
            "111MAYBERRYWAY",
            "112MAYBERRYWAY",
        ]

        df = dedupe_entities(expanded)
        assert len(df) == 3
        assert df[df["address_key"] == "111MAYBERRYWAY"].iloc[0]["duplicate_count"] == 2

    def test_blank_address(self, normalizer):
        """Test that blank addresses pass through with an empty key."""
        expanded = expand_entities(pd.DataFrame({"address": [None, "  "]}), "address", normalizer)
        assert list(expanded["address_key"]) == ["", ""]

    def test_oversized_range_kept(self, normalizer, caplog):
        """Test that an oversized range keeps its row unexpanded."""
        raw = pd.DataFrame({
            "id": [1, 2],
            "address": ["110-112 Mayberry Way", "1-5000 Main Street"],
        })
        expanded = expand_entities(raw, "address", normalizer, max_expansion=1000)

        assert len(expanded) == 4
        assert list(expanded[expanded["id"] == 1]["address_key"]) == [
            "110MAYBERRYWAY",
            "111MAYBERRYWAY",
            "112MAYBERRYWAY",
        ]
        assert list(expanded[expanded["id"] == 2]["address_key"]) == ["15000MAINST"]
        assert "Keeping unexpanded address" in caplog.text
