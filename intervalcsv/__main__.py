"""Command-line front end: python -m intervalcsv FILE [FILE ...]"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .convert import convert_file
from .errors import ConversionError


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="intervalcsv",
        description="Write one CSV per 200 group found in each envelope file",
    )
    ap.add_argument("files", nargs="+", help="Envelope files to convert")
    ap.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the CSV files (default: next to each input)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Log state transitions")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    for path in args.files:
        try:
            written = convert_file(path, output_dir=args.output_dir)
        except ConversionError as exc:
            print(exc, file=sys.stderr)
            return 1
        print(f"Built {len(written)} CSV files.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
