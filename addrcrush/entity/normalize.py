"""Entity normalization module."""
import logging
from typing import Optional

import pandas as pd

from addrcrush.address.normalizer import AddressNormalizer, default_normalizer

logger = logging.getLogger(__name__)

KEY_COLUMN = "address_key"


def normalize_entities(
    df: pd.DataFrame,
    column: str = "address",
    normalizer: Optional[AddressNormalizer] = None
) -> pd.DataFrame:
    """
    Add a normalized address key to each entity.

    Args:
        df: Input DataFrame with entity data
        column: Column holding the address string
        normalizer: Normalizer to use (default: configured tables)

    Returns:
        DataFrame with an ``address_key`` column
    """
    if column not in df.columns:
        raise KeyError(f"Address column not found: {column}")

    normalizer = normalizer or default_normalizer()
    logger.info(f"Normalizing {len(df)} entities...")

    df = df.copy()
    df[KEY_COLUMN] = df[column].apply(
        lambda x: normalizer.normalize(str(x)) if pd.notna(x) else ""
    )

    logger.info("Entity normalization complete")
    return df
