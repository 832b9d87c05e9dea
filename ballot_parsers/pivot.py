"""
Reshape canvass records into one wide row per precinct for each measure.

The canvass prints up to three rows per precinct (Election Day, Vote by Mail,
Total). Each row fills in one YES/NO column pair of the precinct's MeasureRow;
folding every record in gives a Frame (precinct -> MeasureRow) per measure.
"""

import logging
import math
from dataclasses import dataclass, fields, replace
from functools import reduce
from typing import Iterable, Optional

from .errors import DuplicateRecord
from .records import ELECTION_DAY, TOTAL, VOTE_BY_MAIL, CanvassRecord

log = logging.getLogger(__name__)

MEASURES = ("measure_c", "measure_d")

METHOD_COLUMNS = {
    ELECTION_DAY: ("yes_election_day", "no_election_day"),
    VOTE_BY_MAIL: ("yes_vote_by_mail", "no_vote_by_mail"),
    TOTAL: ("yes_total", "no_total"),
}


@dataclass(frozen=True)
class MeasureRow:
    precinct: str
    jurisdiction: str
    district: str
    registered_voters: Optional[int]
    ballots_cast: Optional[int]
    yes_election_day: Optional[int] = None
    no_election_day: Optional[int] = None
    yes_vote_by_mail: Optional[int] = None
    no_vote_by_mail: Optional[int] = None
    yes_total: Optional[int] = None
    no_total: Optional[int] = None
    pct_no: float = math.nan
    pct_yes: float = math.nan


Frame = dict[str, MeasureRow]

_METHOD_FIELDS = frozenset(col for pair in METHOD_COLUMNS.values() for col in pair)


def split_record(record: CanvassRecord) -> tuple[MeasureRow, ...]:
    """One partial MeasureRow per measure, with only this method's columns set."""
    yes_col, no_col = METHOD_COLUMNS[record.method]
    rows = []
    for measure in MEASURES:
        rows.append(MeasureRow(
            precinct=record.precinct,
            jurisdiction=record.jurisdiction,
            district=record.district,
            registered_voters=record.registered_voters,
            ballots_cast=record.ballots_cast,
            **{
                yes_col: getattr(record, f"{measure}_yes"),
                no_col: getattr(record, f"{measure}_no"),
            },
        ))
    return tuple(rows)


def merge_rows(old: MeasureRow, new: MeasureRow) -> MeasureRow:
    """Combine two partial rows for the same precinct.

    Method columns set on ``new`` win; columns it leaves empty keep the value
    from ``old``. Shared precinct columns come from ``new``.
    """
    updates = {}
    for f in fields(MeasureRow):
        if f.name in _METHOD_FIELDS:
            value = getattr(new, f.name)
            updates[f.name] = getattr(old, f.name) if value is None else value
        elif f.name not in ("pct_no", "pct_yes"):
            updates[f.name] = getattr(new, f.name)
    return replace(old, **updates)


def _ratio(part: Optional[int], other: Optional[int]) -> float:
    if part is None or other is None:
        return math.nan
    total = part + other
    if total == 0:
        return math.nan
    return part / total


def with_ratios(row: MeasureRow) -> MeasureRow:
    """Fill in % of NO / % of YES from the Total columns."""
    return replace(
        row,
        pct_no=_ratio(row.no_total, row.yes_total),
        pct_yes=_ratio(row.yes_total, row.no_total),
    )


def _partials_by_precinct(records: Iterable[CanvassRecord]) -> dict[str, list[tuple[MeasureRow, ...]]]:
    """Split every record, grouped by precinct in input order."""
    seen = set()
    partials: dict[str, list[tuple[MeasureRow, ...]]] = {}
    for record in records:
        key = (record.precinct, record.method)
        if key in seen:
            raise DuplicateRecord(record.precinct, record.method)
        seen.add(key)
        partials.setdefault(record.precinct, []).append(split_record(record))
    return partials


def fold_frames(records: Iterable[CanvassRecord]) -> tuple[Frame, ...]:
    """Fold records into one Frame per measure (Measure C, Measure D)."""
    partials = _partials_by_precinct(records)
    return tuple(
        {
            precinct: reduce(merge_rows, (split[i] for split in splits))
            for precinct, splits in partials.items()
        }
        for i in range(len(MEASURES))
    )


def pivot_measures(records: Iterable[CanvassRecord]) -> tuple[Frame, ...]:
    """Build the Measure C and Measure D frames, ratios included."""
    frames = tuple(
        {precinct: with_ratios(row) for precinct, row in frame.items()}
        for frame in fold_frames(records)
    )
    log.info(f"  Pivoted {len(frames[0])} precincts per measure")
    return frames
