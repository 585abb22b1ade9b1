"""
Address range expansion.

Splits addresses whose house number is a range or a list into one key per
number, i.e. ``110-120 Mayberry Way`` becomes ``110MAYBERRYWAY``,
``111MAYBERRYWAY`` and so on up to ``120MAYBERRYWAY``.
"""
import logging
import re
from typing import Optional, Set

from addrcrush.address.normalizer import AddressNormalizer, default_normalizer
from addrcrush.config import settings

logger = logging.getLogger(__name__)

SPLIT_DELIMITERS = ("-", "/")

LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")
PLAIN_INTEGER = re.compile(r"[0-9]+")


class AddressRangeError(ValueError):
    """Base error for range expansion."""


class RangeLimitExceeded(AddressRangeError):
    """Raised when a range would expand to more addresses than allowed."""

    def __init__(self, address: str, size: int, limit: int):
        self.address = address
        self.size = size
        self.limit = limit
        super().__init__(
            f"Range in '{address}' expands to {size} addresses (limit {limit})"
        )


class InvalidRangeError(AddressRangeError):
    """Raised in strict mode when a range bound is not a whole number."""


def coerce_bound(part: str, strict: bool = False) -> int:
    """
    Convert one side of a range to an integer.

    Legacy data is read leniently: the leading integer is used and anything
    without one counts as 0 (``"120B"`` -> 120, ``"A"`` -> 0). In strict
    mode only plain digit strings are accepted.

    Raises:
        InvalidRangeError: If strict and the bound is not a plain integer
    """
    if strict:
        if not PLAIN_INTEGER.fullmatch(part):
            raise InvalidRangeError(f"Range bound is not a number: '{part}'")
        return int(part)

    match = LEADING_INTEGER.match(part)
    return int(match.group(1)) if match else 0


def close_delimiter_gaps(address: str) -> str:
    """Remove single spaces next to range delimiters ("110 - 120" -> "110-120")."""
    for delimiter in SPLIT_DELIMITERS:
        address = address.replace(f"{delimiter} ", delimiter)
        address = address.replace(f" {delimiter}", delimiter)
    return address


def expand_range(
    address: str,
    normalizer: Optional[AddressNormalizer] = None,
    max_expansion: Optional[int] = None,
    strict: Optional[bool] = None
) -> Set[str]:
    """
    Expand a ranged house number into one normalized key per number.

    Only the first word is inspected. ``-`` is tried before ``/`` and the
    first delimiter found wins. An address without a range yields a single
    key. A reversed range (``120-110``) yields nothing.

    Args:
        address: Free-form address string
        normalizer: Normalizer to use (default: configured tables)
        max_expansion: Largest range allowed (default: settings)
        strict: Reject non-numeric bounds instead of reading them as 0
            (default: settings)

    Returns:
        Set of normalized keys

    Raises:
        RangeLimitExceeded: If the range is wider than ``max_expansion``
        InvalidRangeError: If strict and a bound is not a number
    """
    normalizer = normalizer or default_normalizer()
    if max_expansion is None:
        max_expansion = settings.max_range_expansion
    if strict is None:
        strict = settings.strict_range_bounds

    address = close_delimiter_gaps(address or "")
    words = address.split(" ")
    first_word, rest = words[0], " ".join(words[1:])

    for delimiter in SPLIT_DELIMITERS:
        if delimiter not in first_word:
            continue

        bounds = first_word.split(delimiter)
        low = coerce_bound(bounds[0], strict)
        high = coerce_bound(bounds[1], strict)

        size = high - low + 1
        if size > max_expansion:
            logger.warning(f"Refusing to expand {size} addresses from '{address}'")
            raise RangeLimitExceeded(address, size, max_expansion)

        logger.debug(f"Expanding '{address}' from {low} to {high}")
        return {normalizer.normalize(f"{number} {rest}") for number in range(low, high + 1)}

    return {normalizer.normalize(address)}
