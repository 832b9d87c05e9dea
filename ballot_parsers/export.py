"""Write parsed records out to Arrow IPC and JSON files."""

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict
from pathlib import Path
from typing import Union

import pyarrow as pa
import pyarrow.ipc

from .pivot import Frame

log = logging.getLogger(__name__)

MEASURE_SCHEMA = pa.schema([
    ("precinct", pa.string()),
    ("jurisdiction", pa.string()),
    ("district", pa.string()),
    ("registered_voters", pa.int64()),
    ("ballots_cast", pa.int64()),
    ("yes_election_day", pa.int64()),
    ("no_election_day", pa.int64()),
    ("yes_vote_by_mail", pa.int64()),
    ("no_vote_by_mail", pa.int64()),
    ("yes_total", pa.int64()),
    ("no_total", pa.int64()),
    ("pct_no", pa.float64()),
    ("pct_yes", pa.float64()),
])


def frame_to_table(frame: Frame) -> pa.Table:
    rows = [asdict(row) for row in frame.values()]
    return pa.Table.from_pylist(rows, schema=MEASURE_SCHEMA)


def write_arrow(frame: Frame, path: Union[str, Path]) -> Path:
    """Write one Frame to an Arrow IPC file."""
    path = Path(path)
    table = frame_to_table(frame)
    with pa.OSFile(str(path), "wb") as sink:
        with pa.ipc.new_file(sink, table.schema) as writer:
            writer.write_table(table)
    log.info(f"  Wrote: {path} ({table.num_rows} rows)")
    return path


def write_frames(outputs: dict[str, Frame]) -> list[Path]:
    """Write several Frames at once.

    Each frame goes to ``<path>.tmp`` first. The final files only appear once
    every write has succeeded; if any write fails, no output file is left.
    """
    paths = [Path(path) for path in outputs]
    staged = [path.with_name(path.name + ".tmp") for path in paths]

    try:
        with ThreadPoolExecutor(max_workers=len(outputs) or 1) as pool:
            futures = [pool.submit(write_arrow, frame, tmp)
                       for tmp, frame in zip(staged, outputs.values())]
            for future in futures:
                future.result()
    except Exception:
        for tmp in staged:
            tmp.unlink(missing_ok=True)
        raise

    for tmp, path in zip(staged, paths):
        tmp.replace(path)
    return paths


def export_to_json(records: list, output_path: Union[str, Path]):
    """Export records (dataclasses) to a JSON array of objects."""
    with open(output_path, 'w') as f:
        json.dump([asdict(r) for r in records], f, indent=2)
    log.info(f"  Wrote: {output_path} ({len(records)} records)")
