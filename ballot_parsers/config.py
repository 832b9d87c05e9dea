"""
Curated lookup tables for the PDF parsers.

The jurisdiction table and the manual correction tables are JSON files under
``ballot_parsers/data``. They are read once by ``load_config()`` and handed to
the classifier and the repair rules as a frozen ``ParserConfig``.
"""

import json
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .records import APPLICATION_FIELDS, CANVASS_FIELDS, METHODS, parse_count

log = logging.getLogger(__name__)

JURISDICTIONS_FILE = "jurisdictions.json"
CANVASS_CORRECTIONS_FILE = "canvass_corrections.json"
APPLICATION_CORRECTIONS_FILE = "application_corrections.json"

CanvassKey = tuple[str, str, Optional[int], Optional[int]]
ApplicationKey = tuple[str, str]


@dataclass(frozen=True)
class ParserConfig:
    jurisdictions: Mapping[str, str]
    canvass_corrections: Mapping[CanvassKey, tuple[str, ...]]
    application_corrections: Mapping[ApplicationKey, tuple[str, ...]]


def canvass_key(fields) -> CanvassKey:
    """(precinct, method, registered, cast) used to look up a canvass correction."""
    registered = parse_count(fields[2]) if len(fields) > 2 else None
    cast = parse_count(fields[3]) if len(fields) > 3 else None
    return (fields[0], fields[1] if len(fields) > 1 else "", registered, cast)


def application_key(fields) -> ApplicationKey:
    return (fields[0], fields[1] if len(fields) > 1 else "")


def _read_json(name: str, data_dir: Optional[Path]):
    if data_dir is not None:
        with open(Path(data_dir) / name) as f:
            return json.load(f)
    source = resources.files("ballot_parsers") / "data" / name
    with source.open("r") as f:
        return json.load(f)


def _index_corrections(entries: list, width: int, key_func) -> dict:
    index = {}
    for entry in entries:
        if len(entry) != width:
            raise ValueError(f"Correction entry must have {width} fields: {entry}")
        key = key_func(entry)
        if key in index:
            raise ValueError(f"Duplicate correction entry for {key}")
        index[key] = tuple(entry)
    return index


def build_config(jurisdictions: dict, canvass_corrections: list,
                 application_corrections: list) -> ParserConfig:
    """Freeze already-loaded tables into a ParserConfig."""
    for entry in canvass_corrections:
        if len(entry) > 1 and entry[1] not in METHODS:
            raise ValueError(f"Correction entry has unknown method: {entry}")

    return ParserConfig(
        jurisdictions=MappingProxyType(dict(jurisdictions)),
        canvass_corrections=MappingProxyType(
            _index_corrections(canvass_corrections, CANVASS_FIELDS, canvass_key)
        ),
        application_corrections=MappingProxyType(
            _index_corrections(application_corrections, APPLICATION_FIELDS, application_key)
        ),
    )


def load_config(data_dir: Union[str, Path, None] = None) -> ParserConfig:
    """Load the lookup tables from package data, or from ``data_dir`` if given."""
    data_dir = Path(data_dir) if data_dir is not None else None
    config = build_config(
        _read_json(JURISDICTIONS_FILE, data_dir),
        _read_json(CANVASS_CORRECTIONS_FILE, data_dir),
        _read_json(APPLICATION_CORRECTIONS_FILE, data_dir),
    )
    log.debug(
        f"Loaded {len(config.jurisdictions)} jurisdictions, "
        f"{len(config.canvass_corrections)} canvass and "
        f"{len(config.application_corrections)} application corrections"
    )
    return config
