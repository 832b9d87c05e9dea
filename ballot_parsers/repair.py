"""
Repair rules for candidate groups that don't come out of the PDF with the
expected number of fields.

Canvass groups go through these rules in order, first match wins:

  1. Method isn't a known reporting method -> unresolved (corrupt row)
  2. Full 9-field row                      -> assemble as-is
  3. 4 fields, registered and cast both "0" -> unreported precinct, measures missing
  4. 5 fields, turnout "0.00 %"            -> nobody voted, measures are 0
  5. Matches a manual correction entry     -> use the correction
  6. Anything else                         -> unresolved, logged for review

Application groups only have the full-row, correction and unresolved rules.

Every group comes back as either ``Resolved`` or ``Unresolved``; only
``partition()`` turns those into plain record lists.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Union

from .config import ParserConfig, application_key, canvass_key
from .records import (
    APPLICATION_FIELDS,
    CANVASS_FIELDS,
    METHODS,
    ZERO_TURNOUT,
    ApplicationRecord,
    CanvassRecord,
    assemble_application,
    assemble_canvass,
)

log = logging.getLogger(__name__)

UNREPORTED_FIELDS = 4
ZERO_TURNOUT_FIELDS = 5


@dataclass(frozen=True)
class Resolved:
    record: Union[CanvassRecord, ApplicationRecord]


@dataclass(frozen=True)
class Unresolved:
    fields: tuple[str, ...]
    reason: str


RepairResult = Union[Resolved, Unresolved]


def strip_blank(fields: Iterable[str]) -> list[str]:
    """Drop empty and whitespace-only fields."""
    return [f for f in fields if f.strip()]


def _unresolved(fields: list[str], reason: str) -> Unresolved:
    log.warning(f"  Unresolved ({reason}): {fields}")
    return Unresolved(tuple(fields), reason)


# ---------------------------------------------------------------------------
# Canvass
# ---------------------------------------------------------------------------

def repair_canvass(fields: list[str], config: ParserConfig) -> RepairResult:
    # A full row with a bad method is still corrupt
    if len(fields) < 2 or fields[1] not in METHODS:
        return _unresolved(fields, "unknown method")

    if len(fields) == CANVASS_FIELDS:
        return Resolved(assemble_canvass(fields, config.jurisdictions))

    precinct, method = fields[0], fields[1]

    if len(fields) == UNREPORTED_FIELDS and fields[2] == "0" and fields[3] == "0":
        return Resolved(assemble_canvass(
            [precinct, method, "0", "0", ZERO_TURNOUT, "", "", "", ""],
            config.jurisdictions,
        ))

    if len(fields) == ZERO_TURNOUT_FIELDS and fields[4] == ZERO_TURNOUT:
        return Resolved(assemble_canvass(
            [precinct, method, fields[2], fields[3], ZERO_TURNOUT, "0", "0", "0", "0"],
            config.jurisdictions,
        ))

    correction = config.canvass_corrections.get(canvass_key(fields))
    if correction is not None:
        log.debug(f"  Corrected precinct {precinct} ({method}) from manual table")
        return Resolved(assemble_canvass(list(correction), config.jurisdictions))

    return _unresolved(fields, "no repair rule matched")


# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------

def repair_application(fields: list[str], config: ParserConfig) -> RepairResult:
    if len(fields) == APPLICATION_FIELDS:
        return Resolved(assemble_application(fields))

    if fields:
        correction = config.application_corrections.get(application_key(fields))
        if correction is not None:
            log.debug(f"  Corrected application {fields[0]} from manual table")
            return Resolved(assemble_application(list(correction)))

    return _unresolved(fields, "no repair rule matched")


def partition(results: Iterable[RepairResult]) -> tuple[list, list[Unresolved]]:
    """Split repair results into (records, unresolved)."""
    records = []
    unresolved = []
    for result in results:
        if isinstance(result, Resolved):
            records.append(result.record)
        else:
            unresolved.append(result)
    return records, unresolved
