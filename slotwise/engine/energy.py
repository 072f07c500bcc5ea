"""Energy window classification.

Maps an hour of the day to the energy tier the user configured for it.
"""

from typing import Optional

from slotwise.models.settings import AutoScheduleSettings
from slotwise.models.task import EnergyLevel


def _in_window(hour: int, start: Optional[int], end: Optional[int]) -> bool:
    if start is None or end is None:
        return False
    return start <= hour < end


def expected_energy(hour: int, settings: AutoScheduleSettings) -> Optional[EnergyLevel]:
    """Return the energy level configured for `hour`, or None if no window covers it.

    Windows are checked high, then medium, then low, so overlapping windows
    resolve to the higher tier.
    """
    if _in_window(hour, settings.high_energy_start, settings.high_energy_end):
        return EnergyLevel.HIGH
    if _in_window(hour, settings.medium_energy_start, settings.medium_energy_end):
        return EnergyLevel.MEDIUM
    if _in_window(hour, settings.low_energy_start, settings.low_energy_end):
        return EnergyLevel.LOW
    return None
