"""Entity deduplication module."""
import logging
from typing import Dict, Iterable, Optional

import pandas as pd
from tqdm import tqdm

from addrcrush.address.normalizer import AddressNormalizer, default_normalizer
from addrcrush.address.ranges import AddressRangeError, expand_range
from addrcrush.entity.normalize import KEY_COLUMN
from addrcrush.utils.strings import contains

logger = logging.getLogger(__name__)


def expand_entities(
    df: pd.DataFrame,
    column: str = "address",
    normalizer: Optional[AddressNormalizer] = None,
    max_expansion: Optional[int] = None,
    strict: Optional[bool] = None
) -> pd.DataFrame:
    """
    Expand ranged addresses into one row per house number.

    Args:
        df: Input DataFrame with entity data
        column: Column holding the address string
        normalizer: Normalizer to use (default: configured tables)
        max_expansion: Largest range allowed per address (default: settings)
        strict: Reject non-numeric range bounds (default: settings)

    Returns:
        DataFrame with an ``address_key`` column and one row per key
    """
    if column not in df.columns:
        raise KeyError(f"Address column not found: {column}")

    normalizer = normalizer or default_normalizer()
    logger.info(f"Expanding address ranges for {len(df)} entities...")

    rows = []
    for record in tqdm(df.to_dict("records"), total=len(df), desc="Expanding ranges"):
        address = record.get(column)
        if pd.isna(address) or not str(address).strip():
            rows.append({**record, KEY_COLUMN: ""})
            continue

        try:
            keys = expand_range(str(address), normalizer, max_expansion=max_expansion, strict=strict)
        except AddressRangeError as e:
            logger.warning(f"Keeping unexpanded address: {e}")
            keys = {normalizer.normalize(str(address))}
        for key in sorted(keys):
            rows.append({**record, KEY_COLUMN: key})

    columns = [c for c in df.columns if c != KEY_COLUMN] + [KEY_COLUMN]
    result_df = pd.DataFrame(rows, columns=columns)
    logger.info(f"Range expansion complete: {len(df)} -> {len(result_df)} rows")
    return result_df


def cluster_by_containment(keys: Iterable[str], min_length: int = 0) -> Dict[str, str]:
    """
    Group keys where one is a prefix of another.

    Keys are visited in sorted order. A key joins a cluster only when it is
    prefix-related to every key already in it, so each cluster is a single
    prefix chain and sibling units (101A, 101B) stay apart. Empty keys are
    never clustered.

    Args:
        keys: Address keys
        min_length: Minimum key length for a prefix match

    Returns:
        Dict mapping each key to the first key of its cluster
    """
    clusters = []
    mapping = {}

    for key in sorted(set(keys)):
        if not key:
            continue

        for members in clusters:
            if all(contains(key, member, min_length) for member in members):
                members.append(key)
                mapping[key] = members[0]
                break
        else:
            clusters.append([key])
            mapping[key] = key

    return mapping


def _completeness(record: dict) -> int:
    return sum(1 for v in record.values() if pd.notna(v) and v != "")


def dedupe_entities(df: pd.DataFrame, min_length: Optional[int] = None) -> pd.DataFrame:
    """
    Deduplicate entities by address key.

    Records sharing a key (or, when ``min_length`` is given, a key prefix)
    collapse to the most complete record. Records with an empty key are
    all kept.

    Args:
        df: DataFrame with an ``address_key`` column
        min_length: Enable prefix matching for keys at least this long

    Returns:
        Deduplicated DataFrame with a ``duplicate_count`` column
    """
    if KEY_COLUMN not in df.columns:
        raise KeyError(f"Missing {KEY_COLUMN} column; run normalize_entities first")

    logger.info(f"Deduplicating {len(df)} entities...")

    if min_length is None:
        cluster_of = {key: key for key in df[KEY_COLUMN] if key}
    else:
        cluster_of = cluster_by_containment(df[KEY_COLUMN], min_length)

    deduplicated = []
    groups: Dict[str, list] = {}

    for record in df.to_dict("records"):
        key = record[KEY_COLUMN]
        if not key:
            deduplicated.append({**record, "duplicate_count": 1})
            continue
        groups.setdefault(cluster_of[key], []).append(record)

    # Keep most complete record from each cluster, then the most specific key
    for cluster in groups.values():
        best_record = max(cluster, key=lambda r: (_completeness(r), len(r[KEY_COLUMN])))
        deduplicated.append({**best_record, "duplicate_count": len(cluster)})

    columns = [c for c in df.columns if c != "duplicate_count"] + ["duplicate_count"]
    result_df = pd.DataFrame(deduplicated, columns=columns)
    logger.info(f"Deduplication complete: {len(df)} -> {len(result_df)} entities")

    return result_df
