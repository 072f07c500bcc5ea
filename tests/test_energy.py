"""Tests for energy window classification."""

from slotwise.engine.energy import expected_energy
from slotwise.models.settings import AutoScheduleSettings
from slotwise.models.task import EnergyLevel


class TestExpectedEnergy:
    """Test expected_energy() with default and custom windows."""

    def test_default_windows(self, settings):
        assert expected_energy(9, settings) == EnergyLevel.HIGH
        assert expected_energy(11, settings) == EnergyLevel.HIGH
        assert expected_energy(13, settings) == EnergyLevel.MEDIUM
        assert expected_energy(16, settings) == EnergyLevel.LOW
        assert expected_energy(17, settings) == EnergyLevel.LOW

    def test_end_hour_is_exclusive(self, settings):
        """12 is the end of the high window and not inside any default window."""
        assert expected_energy(12, settings) is None
        assert expected_energy(18, settings) is None

    def test_hours_outside_every_window(self, settings):
        assert expected_energy(3, settings) is None
        assert expected_energy(22, settings) is None

    def test_overlapping_windows_resolve_to_higher_tier(self, test_user_id):
        settings = AutoScheduleSettings(
            user_id=test_user_id,
            high_energy_start=9, high_energy_end=12,
            medium_energy_start=10, medium_energy_end=14,
        )
        assert expected_energy(10, settings) == EnergyLevel.HIGH
        assert expected_energy(12, settings) == EnergyLevel.MEDIUM

    def test_unset_bound_disables_window(self, test_user_id):
        settings = AutoScheduleSettings(user_id=test_user_id, high_energy_start=None)
        assert expected_energy(10, settings) is None
        assert expected_energy(14, settings) == EnergyLevel.MEDIUM
