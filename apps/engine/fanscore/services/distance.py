from typing import Iterable, Tuple, Union

from fanscore.config.constants import DEFAULT_AREA_MULTIPLIERS, NEUTRAL_MULTIPLIER, ONLINE
from fanscore.schemas import AreaMultiplier, AreaMultiplierTable


def resolve_distance_multiplier(from_area: str, to_area: str, table: AreaMultiplierTable) -> float:
    # Online venues have no geography; any table entry for them is ignored.
    if to_area == ONLINE:
        return NEUTRAL_MULTIPLIER
    return table.get((from_area, to_area), NEUTRAL_MULTIPLIER)


def build_multiplier_table(
    rows: Iterable[Union[AreaMultiplier, Tuple[str, str, float]]],
) -> AreaMultiplierTable:
    """Directed lookup table; a later row for the same pair wins."""
    table: AreaMultiplierTable = {}
    for row in rows:
        if isinstance(row, AreaMultiplier):
            table[(row.from_area, row.to_area)] = row.multiplier
        else:
            from_area, to_area, multiplier = row
            table[(from_area, to_area)] = float(multiplier)
    return table


def default_multiplier_table() -> AreaMultiplierTable:
    return build_multiplier_table(DEFAULT_AREA_MULTIPLIERS)
