"""Shared fixtures for address tests."""
import pytest

from addrcrush.address.indices import AddressIndices
from addrcrush.address.normalizer import AddressNormalizer

STREET_ROWS = [
    ("BOULEVARD", "BLVD"),
    ("BOULV", "BLVD"),
    ("STREET", "ST"),
    ("UNIT", ""),
    ("APT", ""),
    ("ONE", "1"),
    ("TWO", "2"),
    ("THREE", "3"),
]

ABBREVIATION_ROWS = [
    ("POST OFFICE BOX", "PO BOX"),
    ("POST OFFICE", "PO"),
]


@pytest.fixture
def indices():
    """Small lookup tables independent of the bundled data."""
    return AddressIndices.from_tables(STREET_ROWS, ABBREVIATION_ROWS)


@pytest.fixture
def normalizer(indices):
    return AddressNormalizer(indices)
