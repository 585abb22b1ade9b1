"""Fuzzy header matching utilities."""
from typing import Optional, Sequence
from rapidfuzz import fuzz

# Header names that usually hold a street address line
ADDRESS_HEADERS = [
    "address",
    "street_address",
    "address_1",
    "address1",
    "address_line_1",
    "site_address",
    "mailing_address",
    "property_address",
]


def find_header_match(
    target: str,
    candidate_headers: list,
    threshold: float = 80.0
) -> Optional[str]:
    """
    Find the best matching header using fuzzy string matching.

    Args:
        target: The header name to match
        candidate_headers: List of candidate header names
        threshold: Minimum similarity score (0-100)

    Returns:
        Best matching header name or None if below threshold
    """
    if not candidate_headers:
        return None

    best_match = None
    best_score = 0.0

    for header in candidate_headers:
        score = fuzz.ratio(target.upper(), str(header).upper())
        if score > best_score:
            best_score = score
            best_match = header

    if best_score >= threshold:
        return best_match
    return None


def find_address_column(
    actual_headers: list,
    expected_headers: Sequence[str] = ADDRESS_HEADERS,
    threshold: float = 80.0
) -> Optional[str]:
    """
    Pick the column that holds the street address.

    Exact (case-insensitive) matches win; otherwise the first expected name
    with a fuzzy match above the threshold is used.

    Args:
        actual_headers: List of actual header names from file
        expected_headers: Expected header names, most preferred first
        threshold: Minimum similarity score for fuzzy matching

    Returns:
        Header name or None if nothing looks like an address column
    """
    # First pass: exact matches (case-insensitive)
    for expected in expected_headers:
        for actual in actual_headers:
            if str(actual).strip().upper() == expected.upper():
                return actual

    # Second pass: fuzzy matches
    for expected in expected_headers:
        match = find_header_match(expected, actual_headers, threshold)
        if match:
            return match

    return None
