"""Tests for candidate slot generation."""

from datetime import datetime, timedelta

from slotwise.engine.slots import generate_slots
from slotwise.models.settings import AutoScheduleSettings


class TestGenerateSlots:
    """Test generate_slots() granularity and work-hour bounds."""

    def test_slots_within_work_hours(self, settings, now):
        """Every slot starts on the half hour and ends by 17:00 on its day."""
        slots = generate_slots(3, settings, 60, now=now)

        assert slots
        for slot in slots:
            assert slot.start.minute in (0, 30)
            assert slot.end - slot.start == timedelta(minutes=60)
            assert slot.start.hour >= settings.work_hour_start
            assert slot.end <= slot.start.replace(hour=0, minute=0) + timedelta(hours=settings.work_hour_end)

    def test_slot_count_before_work_hours(self, settings, now):
        """Before 09:00 a one-hour slot list runs 09:00..16:00, 15 per day."""
        slots = generate_slots(2, settings, 60, now=now)

        assert len(slots) == 30
        assert slots[0].start == datetime(2026, 3, 2, 9, 0)
        assert slots[14].start == datetime(2026, 3, 2, 16, 0)
        assert slots[15].start == datetime(2026, 3, 3, 9, 0)

    def test_today_starts_after_current_hour(self, settings):
        now = datetime(2026, 3, 2, 10, 15)
        slots = generate_slots(1, settings, 60, now=now)

        assert slots[0].start == datetime(2026, 3, 2, 11, 0)
        assert all(slot.start > now for slot in slots)
        assert len(slots) == 11

    def test_no_slots_today_after_work_hours(self, settings):
        now = datetime(2026, 3, 2, 17, 30)
        slots = generate_slots(2, settings, 30, now=now)

        assert all(slot.start.date() == datetime(2026, 3, 3).date() for slot in slots)

    def test_chronological_order(self, settings, now):
        slots = generate_slots(7, settings, 45, now=now)
        starts = [slot.start for slot in slots]
        assert starts == sorted(starts)

    def test_duration_longer_than_work_day(self, settings, now):
        assert generate_slots(3, settings, 9 * 60, now=now) == []

    def test_end_of_day_at_midnight(self, test_user_id, now):
        """With work ending at 24 the last one-hour slot is 23:00-00:00."""
        settings = AutoScheduleSettings(user_id=test_user_id, work_hour_start=20, work_hour_end=24)
        slots = generate_slots(1, settings, 60, now=now)

        assert slots[-1].start == datetime(2026, 3, 2, 23, 0)
        assert slots[-1].end == datetime(2026, 3, 3, 0, 0)
        assert all(slot.start != datetime(2026, 3, 2, 23, 30) for slot in slots)

    def test_zero_days(self, settings, now):
        assert generate_slots(0, settings, 60, now=now) == []
