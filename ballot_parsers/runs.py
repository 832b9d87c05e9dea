"""
Turn the text runs on a PDF page into candidate record groups.

pdfplumber gives us the words on a page in content-stream order. Each word
becomes a Token flagged with ``eol`` when it is the last word on its line.
Tokens are then folded into groups, one group per printed line, and groups
that are too short (or don't start like a record) are thrown away.
"""

import json
import logging
import re
from typing import Iterable, Iterator, NamedTuple, Optional

log = logging.getLogger(__name__)

# Words closer together than this (pt) are joined into one run
X_TOLERANCE = 3
# Words whose tops differ by more than this (pt) are on different lines
Y_TOLERANCE = 3

CANVASS_MIN_TOKENS = 2
APPLICATION_MIN_TOKENS = 3
PRECINCT_RE = re.compile(r'^\d{5}$')


class Token(NamedTuple):
    text: str
    eol: bool


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

def group_runs(tokens: Iterable[Token], min_tokens: int,
               lead: Optional[re.Pattern] = None) -> list[list[str]]:
    """Split one page's tokens into groups at each end-of-line token.

    A group is kept when it has more than ``min_tokens`` entries and, if
    ``lead`` is given, its first entry matches it. Tokens after the last
    end-of-line are dropped.
    """
    groups = []
    buffer: list[str] = []

    for token in tokens:
        buffer.append(token.text)
        if not token.eol:
            continue

        if len(buffer) > min_tokens and (lead is None or lead.match(buffer[0])):
            groups.append(buffer)
        buffer = []

    return groups


# ---------------------------------------------------------------------------
# pdfplumber adapter
# ---------------------------------------------------------------------------

def page_tokens(page, x_tolerance: float = X_TOLERANCE,
                y_tolerance: float = Y_TOLERANCE) -> list[Token]:
    """Tokens for a pdfplumber page, in content-stream order."""
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=y_tolerance,
        keep_blank_chars=True,
        use_text_flow=True,
    )

    tokens = []
    for i, word in enumerate(words):
        if i + 1 < len(words):
            eol = abs(words[i + 1]["top"] - word["top"]) > y_tolerance
        else:
            eol = True
        # keep_blank_chars leaves cell padding on the word
        tokens.append(Token(word["text"].strip(), eol))
    return tokens


def iter_page_groups(pdf, min_tokens: int,
                     lead: Optional[re.Pattern] = None) -> Iterator[tuple[int, list[str]]]:
    """Yield (page_number, group) for every page, one page at a time."""
    for page_num, page in enumerate(pdf.pages, start=1):
        groups = group_runs(page_tokens(page), min_tokens, lead)
        log.debug(f"  Page {page_num}: {len(groups)} groups")
        for group in groups:
            yield page_num, group
        page.flush_cache()


def log_document_summary(pdf):
    """Log the page count and document info dictionary."""
    log.info("# Document Loaded")
    log.info(f"Number of Pages: {len(pdf.pages)}")
    log.info("# Metadata")
    log.info(json.dumps(pdf.metadata, indent=2, default=str))
