#!/usr/bin/env python3
"""
ATP Cycle 6 Applications PDF Parser

Parses the Active Transportation Program "Applications Received to Date"
listing into a JSON array:

    No. | Application Number | Implementing Agency | Project Name | Received Date

Usage:
    python -m ballot_parsers.parse_applications [AppsRecdToDate.pdf]
"""

import argparse
import logging
import sys

import pdfplumber

from .config import ParserConfig, load_config
from .export import export_to_json
from .repair import partition, repair_application, strip_blank
from .runs import APPLICATION_MIN_TOKENS, iter_page_groups, log_document_summary

log = logging.getLogger(__name__)

DEFAULT_PDF = "./AppsRecdToDate-20220628.pdf"
OUTPUT_FILE = "./ATP-Cycle-6-Applications.json"

HEADER_ID = "No."


def parse_applications_pdf(pdf_path: str, config: ParserConfig) -> dict:
    log.info(f"Parsing: {pdf_path}")

    with pdfplumber.open(pdf_path) as pdf:
        log_document_summary(pdf)
        results = [
            repair_application(strip_blank(group), config)
            for _, group in iter_page_groups(pdf, APPLICATION_MIN_TOKENS)
        ]

    records, unresolved = partition(results)
    # Drop the header row
    records = [r for r in records if r.applicationID != HEADER_ID]
    log.info(f"  Applications: {len(records)}, dropped: {len(unresolved)}")

    return {
        'source_file': str(pdf_path),
        'records': records,
        'unresolved': unresolved,
    }


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    parser = argparse.ArgumentParser(
        description="Parse the ATP Cycle 6 applications PDF into JSON.",
        epilog="Example: python -m ballot_parsers.parse_applications AppsRecdToDate-20220628.pdf",
    )
    parser.add_argument("pdf_file", nargs="?", default=DEFAULT_PDF,
                        help=f"Applications PDF (default: {DEFAULT_PDF})")
    args = parser.parse_args(argv)

    try:
        data = parse_applications_pdf(args.pdf_file, load_config())
        export_to_json(data['records'], OUTPUT_FILE)
    except Exception as e:
        log.error(f"Failed to parse {args.pdf_file}: {e}")
        import traceback
        traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
