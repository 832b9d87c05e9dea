"""
Typed records assembled from a fixed-length list of PDF text fields.

Canvass rows (9 fields):
    Precinct | Method | Registered Voters | Ballots Cast | Turnout |
    Measure C YES | Measure C NO | Measure D YES | Measure D NO

Application rows (5 fields):
    No. | Application Number | Implementing Agency | Project Name | Received Date
"""

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from .classify import classify_precinct
from .errors import WrongFieldCount

log = logging.getLogger(__name__)

CANVASS_FIELDS = 9
APPLICATION_FIELDS = 5

ELECTION_DAY = "Election Day"
VOTE_BY_MAIL = "Vote by Mail"
TOTAL = "Total"
METHODS = (ELECTION_DAY, VOTE_BY_MAIL, TOTAL)

ZERO_TURNOUT = "0.00 %"

LEADING_INT_RE = re.compile(r'^\s*([+-]?\d+)')


# ---------------------------------------------------------------------------
# Number parsing
# ---------------------------------------------------------------------------

def parse_count(s: str) -> Optional[int]:
    """Parse the leading integer of a field, handling commas.

    Returns None instead of raising when there is no number to read.
    """
    m = LEADING_INT_RE.match(s.replace(",", ""))
    if not m:
        log.debug(f"  Not a number: {s!r}")
        return None
    return int(m.group(1))


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CanvassRecord:
    precinct: str
    jurisdiction: str
    district: str
    method: str                          # Election Day | Vote by Mail | Total
    registered_voters: Optional[int]
    ballots_cast: Optional[int]
    turnout: str                         # As printed, e.g. "12.20 %"
    measure_c_yes: Optional[int]
    measure_c_no: Optional[int]
    measure_d_yes: Optional[int]
    measure_d_no: Optional[int]


@dataclass(frozen=True)
class ApplicationRecord:
    applicationID: str
    applicationNumber: str
    implementingAgencyName: str
    projectName: str
    receivedDate: str


def assemble_canvass(fields: list[str], jurisdictions: Mapping[str, str]) -> CanvassRecord:
    if len(fields) != CANVASS_FIELDS:
        raise WrongFieldCount(fields, CANVASS_FIELDS)

    precinct = fields[0]
    jurisdiction, district = classify_precinct(precinct, jurisdictions)

    return CanvassRecord(
        precinct=precinct,
        jurisdiction=jurisdiction,
        district=district,
        method=fields[1],
        registered_voters=parse_count(fields[2]),
        ballots_cast=parse_count(fields[3]),
        turnout=fields[4],
        measure_c_yes=parse_count(fields[5]),
        measure_c_no=parse_count(fields[6]),
        measure_d_yes=parse_count(fields[7]),
        measure_d_no=parse_count(fields[8]),
    )


def assemble_application(fields: list[str]) -> ApplicationRecord:
    if len(fields) != APPLICATION_FIELDS:
        raise WrongFieldCount(fields, APPLICATION_FIELDS)

    return ApplicationRecord(*fields)
