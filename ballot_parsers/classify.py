"""
Derive jurisdiction and supervisorial district from a canvass precinct number.

Precinct numbers are five digits. The first digit is the supervisorial
district (1-5) and the second digit is the jurisdiction code, where 0 is the
unincorporated county and 1-4 are the cities in the jurisdiction table.

    20470  ->  ("Unincorporated, District 2", "District 2")
    31102  ->  ("Salinas", "District 3")
"""

from typing import Mapping

from .errors import InvalidGroup, InvalidIdentifier

UNINCORPORATED_CODE = "0"
DISTRICTS = ("1", "2", "3", "4", "5")


def district_for(precinct: str) -> str:
    """Supervisorial district tag from the first digit of the precinct."""
    if not precinct or precinct[0] not in DISTRICTS:
        raise InvalidGroup(precinct)
    return f"District {precinct[0]}"


def jurisdiction_for(precinct: str, jurisdictions: Mapping[str, str]) -> str:
    if len(precinct) < 2:
        raise InvalidIdentifier(precinct)

    code = precinct[1]
    if code not in jurisdictions:
        raise InvalidIdentifier(precinct)

    name = jurisdictions[code]
    # Unincorporated precincts are split up by district
    if code == UNINCORPORATED_CODE and precinct[0] in DISTRICTS:
        return f"{name}, District {precinct[0]}"
    return name


def classify_precinct(precinct: str, jurisdictions: Mapping[str, str]) -> tuple[str, str]:
    """Return (jurisdiction, district) for a precinct number."""
    return jurisdiction_for(precinct, jurisdictions), district_for(precinct)
