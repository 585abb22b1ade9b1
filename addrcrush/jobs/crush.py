"""Print the normalized key for each address given on the command line or stdin."""
import argparse
import logging
import sys

from addrcrush.address.normalizer import normalize
from addrcrush.address.ranges import AddressRangeError, expand_range
from addrcrush.config import settings

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main(argv=None):
    """Main entry point for crushing addresses."""
    parser = argparse.ArgumentParser(description="Crush U.S. addresses into comparison keys")
    parser.add_argument(
        "addresses",
        nargs="*",
        help="Addresses to crush (default: one per line from stdin)"
    )
    parser.add_argument(
        "--expand-ranges",
        action="store_true",
        default=False,
        help="Print one key per house number for ranged addresses"
    )
    parser.add_argument(
        "--max-range",
        type=int,
        default=settings.max_range_expansion,
        help=f"Largest range to expand per address (default: {settings.max_range_expansion})"
    )
    args = parser.parse_args(argv)

    addresses = args.addresses or [line.rstrip("\n") for line in sys.stdin]

    keys = []
    for address in addresses:
        if not args.expand_ranges:
            keys.append(normalize(address))
            continue
        try:
            keys.extend(sorted(expand_range(address, max_expansion=args.max_range)))
        except AddressRangeError as e:
            logger.error(str(e))
            sys.exit(1)

    for key in keys:
        print(key)

    return keys


if __name__ == "__main__":
    main()
