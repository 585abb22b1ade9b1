"""Street and abbreviation lookup tables used by the address normalizer."""
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple, Union

import pandas as pd

from addrcrush.config import settings
from addrcrush.utils.io import read_data_file

logger = logging.getLogger(__name__)

INDEX_COLUMNS = ("key", "value")


class IndexLoadError(ValueError):
    """Raised when a lookup table is malformed."""


@dataclass(frozen=True)
class AddressIndices:
    """
    Immutable pair of lookup tables.

    Attributes:
        street: Whole-word replacements, keyed by uppercase token
        abbreviations: Ordered (substring, replacement) pairs
    """

    street: Mapping[str, str]
    abbreviations: Tuple[Tuple[str, str], ...]

    @classmethod
    def from_tables(
        cls,
        street_rows: Iterable[Tuple[str, str]],
        abbreviation_rows: Iterable[Tuple[str, str]] = ()
    ) -> "AddressIndices":
        """
        Build indices from (key, value) rows.

        Street keys are uppercased and must be unique. Abbreviation rows keep
        their order; rows with an empty key are skipped since they would
        match everywhere.

        Raises:
            IndexLoadError: If a street key appears twice
        """
        street = {}
        for key, value in street_rows:
            key = str(key).strip().upper()
            if not key:
                continue
            if key in street:
                raise IndexLoadError(f"Duplicate street index key: {key}")
            street[key] = str(value).strip().upper()

        abbreviations = tuple(
            (str(key), str(value))
            for key, value in abbreviation_rows
            if str(key)
        )

        return cls(street=MappingProxyType(street), abbreviations=abbreviations)


def _table_rows(df: pd.DataFrame, source: Union[str, Path]) -> list:
    missing = [column for column in INDEX_COLUMNS if column not in df.columns]
    if missing:
        raise IndexLoadError(f"{source} is missing columns: {', '.join(missing)}")
    return list(zip(df["key"], df["value"]))


def load_indices(
    street_path: Union[str, Path],
    abbreviation_path: Optional[Union[str, Path]] = None
) -> AddressIndices:
    """
    Load street and abbreviation indices from CSV or XLSX files.

    Both files need ``key`` and ``value`` columns. Row order of the
    abbreviation file is preserved because replacements run in sequence.

    Args:
        street_path: Path to the street index table
        abbreviation_path: Path to the abbreviation table (optional)

    Returns:
        AddressIndices built from the files
    """
    street_rows = _table_rows(read_data_file(street_path), street_path)

    abbreviation_rows = []
    if abbreviation_path is not None:
        abbreviation_rows = _table_rows(read_data_file(abbreviation_path), abbreviation_path)

    indices = AddressIndices.from_tables(street_rows, abbreviation_rows)
    logger.info(
        f"Loaded {len(indices.street)} street index entries and "
        f"{len(indices.abbreviations)} abbreviation entries"
    )
    return indices


@lru_cache(maxsize=1)
def default_indices() -> AddressIndices:
    """Load the configured indices once per process."""
    return load_indices(settings.street_index_path, settings.abbreviation_index_path)
