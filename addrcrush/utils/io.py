"""Reading and writing address tables."""
import logging
from pathlib import Path
from typing import Union

import pandas as pd

logger = logging.getLogger(__name__)

# Every cell is read as text; blank cells stay "" so empty index values survive
READERS = {
    ".csv": lambda path: pd.read_csv(path, dtype=str, keep_default_na=False, low_memory=False),
    ".xlsx": lambda path: pd.read_excel(path, engine="openpyxl", dtype=str, keep_default_na=False),
}


def read_data_file(file_path: Union[str, Path]) -> pd.DataFrame:
    """
    Read a CSV or XLSX table of addresses or lookup entries.

    Args:
        file_path: Path to the table

    Returns:
        DataFrame of text columns

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the extension is not .csv or .xlsx
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    reader = READERS.get(file_path.suffix.lower())
    if reader is None:
        raise ValueError(
            f"Unsupported file format: {file_path.suffix} (expected {', '.join(READERS)})"
        )

    df = reader(file_path)
    logger.info(f"Loaded {len(df)} rows from {file_path}")
    return df


def write_csv(df: pd.DataFrame, output_path: Union[str, Path]) -> Path:
    """Write ``df`` to CSV, creating parent directories, and return the path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    df.to_csv(output_path, index=False)
    logger.info(f"Wrote {len(df)} rows to {output_path}")
    return output_path
