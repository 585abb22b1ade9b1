"""Job to deduplicate an address file by normalized address key."""
import argparse
import logging
import sys
from pathlib import Path

from addrcrush.address.indices import load_indices
from addrcrush.address.normalizer import AddressNormalizer
from addrcrush.config import settings
from addrcrush.entity.dedupe import dedupe_entities, expand_entities
from addrcrush.entity.normalize import normalize_entities
from addrcrush.utils.fuzzy import find_address_column
from addrcrush.utils.io import read_data_file, write_csv

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Deduplicate address records by their normalized address key"
    )
    parser.add_argument(
        "input",
        type=str,
        help="CSV or XLSX file with address records"
    )
    parser.add_argument(
        "--column",
        type=str,
        help="Address column (default: detected from headers)"
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Output CSV path (default: <OUT_DIR>/<input>_deduped.csv)"
    )
    parser.add_argument(
        "--expand-ranges",
        action="store_true",
        default=False,
        help="Expand ranged house numbers (110-120 Main St) into one row per number"
    )
    parser.add_argument(
        "--max-range",
        type=int,
        default=settings.max_range_expansion,
        help=f"Largest range to expand per address (default: {settings.max_range_expansion})"
    )
    parser.add_argument(
        "--strict-ranges",
        action="store_true",
        default=settings.strict_range_bounds,
        help="Fail on non-numeric range bounds instead of reading them as 0"
    )
    parser.add_argument(
        "--min-length",
        type=int,
        default=settings.containment_min_length,
        help="Also merge keys that are prefixes of each other when both are at least this long"
    )
    return parser


def main(argv=None):
    """Main entry point for address deduplication."""
    args = build_parser().parse_args(argv)

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else settings.out_dir / f"{input_path.stem}_deduped.csv"

    try:
        normalizer = AddressNormalizer(
            load_indices(settings.street_index_path, settings.abbreviation_index_path)
        )
        df = read_data_file(input_path)
        input_count = len(df)

        column = args.column or find_address_column(
            list(df.columns), threshold=settings.address_header_similarity_min
        )
        if not column:
            logger.error(f"No address column found in {input_path}; use --column")
            sys.exit(1)
        logger.info(f"Using address column '{column}'")

        if args.expand_ranges:
            df = expand_entities(
                df,
                column,
                normalizer,
                max_expansion=args.max_range,
                strict=args.strict_ranges
            )
        else:
            df = normalize_entities(df, column, normalizer)

        deduped_df = dedupe_entities(df, min_length=args.min_length)
    except (FileNotFoundError, KeyError, ValueError) as e:
        logger.error(f"Address dedupe failed: {e}")
        sys.exit(1)

    write_csv(deduped_df, output_path)
    logger.info(f"Kept {len(deduped_df)} of {input_count} records")

    return deduped_df


if __name__ == "__main__":
    main()
