#!/usr/bin/env python3
"""
County Canvass PDF Parser (Measures C and D)

Reads the Statement of Votes canvass, one row per precinct and reporting
method:

    Precinct | Method | Registered Voters | Ballots Cast | Turnout |
    Measure C YES | Measure C NO | Measure D YES | Measure D NO

Rows the PDF mangles (unreported precincts, zero-turnout precincts, known bad
rows) are repaired; anything else is logged and skipped. The rows are then
pivoted into one row per precinct for each measure and written to
measure-c.arrow and measure-d.arrow.

Usage:
    python -m ballot_parsers.parse_canvass [canvass.pdf]
"""

import argparse
import logging
import sys
from pathlib import Path

import pdfplumber

from .config import ParserConfig, load_config
from .export import write_frames
from .pivot import pivot_measures
from .repair import partition, repair_canvass, strip_blank
from .runs import CANVASS_MIN_TOKENS, PRECINCT_RE, iter_page_groups, log_document_summary

log = logging.getLogger(__name__)

DEFAULT_PDF = "./Canvass-Measures-C-D.pdf"
MEASURE_C_FILE = "measure-c.arrow"
MEASURE_D_FILE = "measure-d.arrow"


def parse_canvass_pdf(pdf_path: str, config: ParserConfig) -> dict:
    """Parse a canvass PDF.

    Returns:
        {
            'source_file': str,
            'records': [CanvassRecord, ...],
            'unresolved': [Unresolved, ...],
        }
    """
    log.info(f"Parsing: {pdf_path}")

    with pdfplumber.open(pdf_path) as pdf:
        log_document_summary(pdf)
        results = [
            repair_canvass(strip_blank(group), config)
            for _, group in iter_page_groups(pdf, CANVASS_MIN_TOKENS, PRECINCT_RE)
        ]

    records, unresolved = partition(results)
    log.info(f"  Records: {len(records)}, dropped: {len(unresolved)}")

    return {
        'source_file': str(pdf_path),
        'records': records,
        'unresolved': unresolved,
    }


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    parser = argparse.ArgumentParser(
        description="Parse a Measures C/D canvass PDF into Arrow files.",
        epilog="Example: python -m ballot_parsers.parse_canvass canvass.pdf",
    )
    parser.add_argument("pdf_file", nargs="?", default=DEFAULT_PDF,
                        help=f"Canvass PDF (default: {DEFAULT_PDF})")
    args = parser.parse_args(argv)

    try:
        config = load_config()
        data = parse_canvass_pdf(args.pdf_file, config)
        measure_c, measure_d = pivot_measures(data['records'])
        write_frames({
            Path(MEASURE_C_FILE): measure_c,
            Path(MEASURE_D_FILE): measure_d,
        })
    except Exception as e:
        log.error(f"Failed to parse {args.pdf_file}: {e}")
        import traceback
        traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
