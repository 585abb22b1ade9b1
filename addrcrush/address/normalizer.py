"""
Address normalization.

Crushes a free-form U.S. postal address into a compact key so that records
entered with different spellings, punctuation or unit styles compare equal:

    >>> normalize("123 Biltmore Boulevard #A-101")
    '123BILTMOREBLVD101A'

The stages run in a fixed order and every stage is a plain function so it
can be tested on its own.
"""
import re
import string
from functools import lru_cache
from typing import Iterable, List, Mapping, Optional, Tuple

from addrcrush.address.indices import AddressIndices, default_indices

_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)

ZIP_PLUS_FOUR = re.compile(r"(?<![0-9])([0-9]{5})([0-9]{4})(?![0-9])")
ZIP_PLUS_FOUR_HYPHEN = re.compile(r"(?<![0-9])([0-9]{5})-([0-9]{4})(?![0-9])")
NON_ADDRESS_CHARS = re.compile(r"[^A-Z0-9 ]")

# "4 TH " is folded to "4TH " before suffixes are removed
SPLIT_ORDINAL = re.compile(r"([0-9]) TH ")
ORDINAL_SUFFIXES = tuple(
    re.compile(rf"([0-9]){suffix}") for suffix in ("ND", "ST", "RD", "TH")
)


def fold_case(address: str) -> str:
    """Uppercase ASCII letters, leaving every other character untouched."""
    return address.translate(_ASCII_UPPER)


def truncate_zip_code(address: str) -> str:
    """Cut a ZIP+4 (``123456789`` or ``12345-6789``) down to its first five digits."""
    address = ZIP_PLUS_FOUR.sub(r"\1", address)
    return ZIP_PLUS_FOUR_HYPHEN.sub(r"\1", address)


def clean_text(address: str) -> str:
    """Drop everything except A-Z, 0-9 and spaces."""
    return NON_ADDRESS_CHARS.sub("", address)


def clean_suffixes(address: str) -> str:
    """Remove ordinal suffixes from numbers (1ST, 2ND, 3RD, 4TH)."""
    address = SPLIT_ORDINAL.sub(r"\1TH ", address)
    for pattern in ORDINAL_SUFFIXES:
        address = pattern.sub(r"\1", address)
    return address


def apply_street_index(address: str, street_index: Mapping[str, str]) -> str:
    """Replace whole words found in the street index."""
    words = address.split(" ")
    return " ".join(street_index.get(word, word) for word in words)


def apply_abbreviation_index(address: str, abbreviations: Iterable[Tuple[str, str]]) -> str:
    """Apply substring replacements in table order."""
    for old_value, new_value in abbreviations:
        address = address.replace(old_value, new_value)
    return address


def collapse_whitespace(address: str) -> str:
    while "  " in address:
        address = address.replace("  ", " ")
    return address.strip()


def unit_fix(word: str) -> str:
    """
    Move the digits of a word in front of its letters.

    Both runs keep their original order, so ``A101`` and ``101A`` both
    become ``101A`` and ``15B2`` becomes ``152B``.
    """
    digits = "".join(char for char in word if char in string.digits)
    letters = "".join(char for char in word if char not in string.digits)
    return digits + letters


def _merge_unit_words(words: List[str]) -> List[str]:
    """
    One pass of the unit fix.

    A single character is glued onto the front of the next word. A single
    character with no next word is kept as the last word.
    """
    merged = []
    carry = ""
    for word in words:
        word = carry + word
        carry = ""
        if len(word) == 1:
            carry = word
            continue
        merged.append(unit_fix(word))
    if carry:
        merged.append(carry)
    return merged


def apply_unit_fix(address: str) -> str:
    """
    Standardize unit designators and crush the address into one token.

    ``101-A``, ``A-101`` and ``A101`` all end up as ``101A``. Two passes are
    made so residue left by the first pass is merged as well; the words are
    then joined without separators.
    """
    words = address.split(" ")
    for _ in range(2):
        words = _merge_unit_words(words)
    return "".join(words)


class AddressNormalizer:
    """Normalizes addresses against a fixed pair of lookup tables."""

    def __init__(self, indices: Optional[AddressIndices] = None):
        self.indices = indices if indices is not None else default_indices()

    def normalize(self, address: str) -> str:
        """
        Crush an address to its comparison key.

        Args:
            address: Free-form address string

        Returns:
            Uppercase key with no spaces or punctuation (may be empty)
        """
        if not address:
            return ""

        address = fold_case(address)
        address = truncate_zip_code(address)
        address = clean_text(address)
        address = clean_suffixes(address)
        address = apply_street_index(address, self.indices.street)
        address = apply_abbreviation_index(address, self.indices.abbreviations)
        address = collapse_whitespace(address)

        return apply_unit_fix(address)

    __call__ = normalize


@lru_cache(maxsize=1)
def default_normalizer() -> AddressNormalizer:
    """Normalizer backed by the configured lookup tables."""
    return AddressNormalizer()


def normalize(address: str) -> str:
    """Crush an address using the configured lookup tables."""
    return default_normalizer().normalize(address)
