"""Tests for the individual suggestion heuristics.

Each evaluator is exercised directly against an EvaluationContext; the
orchestrator is covered in test_suggestion_service.py.
"""

import pytest
from datetime import datetime, timedelta
import uuid

from slotwise.engine.evaluators import (
    EVALUATORS,
    EvaluationContext,
    continuous_work_minutes,
    evaluate_break_violation,
    evaluate_conflict,
    evaluate_deadline_proximity,
    evaluate_energy_mismatch,
    evaluate_overload,
)
from slotwise.engine.intervals import overlaps
from slotwise.models.calendar_event import CalendarEvent
from slotwise.models.settings import AutoScheduleSettings
from slotwise.models.suggestion import SuggestionType
from slotwise.models.task import EnergyLevel


def _at(hour, minute=0, day=0):
    return datetime(2026, 3, 2, hour, minute) + timedelta(days=day)


def _event(start, end):
    return CalendarEvent(id=str(uuid.uuid4()), feed_id="feed-1", title="Standup", start=start, end=end)


def _context(settings, tasks, events=(), now=None):
    return EvaluationContext(settings, tasks, list(events), now or datetime(2026, 3, 2, 7, 0))


class TestEvaluatorOrder:
    def test_registry_order(self):
        assert [e.__name__ for e in EVALUATORS] == [
            "evaluate_conflict",
            "evaluate_deadline_proximity",
            "evaluate_energy_mismatch",
            "evaluate_overload",
            "evaluate_break_violation",
        ]


class TestConflict:
    """Test evaluate_conflict()."""

    def test_conflict_with_event_suggests_free_slot(self, settings, make_task):
        task = make_task(start=_at(9))
        event = _event(_at(9, 30), _at(10, 30))

        candidate = evaluate_conflict(task, _context(settings, [task], [event]))

        assert candidate is not None
        assert candidate.suggestion_type == SuggestionType.CONFLICT
        assert candidate.confidence == 1.0
        assert candidate.suggested_start == _at(10, 30)
        assert candidate.suggested_end == _at(11, 30)
        assert not overlaps(candidate.suggested_start, candidate.suggested_end, event.start, event.end)

    def test_suggested_slot_avoids_other_tasks(self, settings, make_task):
        task = make_task(start=_at(9))
        blocker = make_task(start=_at(10, 30), duration=120)
        event = _event(_at(9, 30), _at(10, 30))

        candidate = evaluate_conflict(task, _context(settings, [task, blocker], [event]))

        assert candidate.suggested_start == _at(12, 30)

    def test_conflict_with_other_task(self, settings, make_task):
        task = make_task(start=_at(9))
        other = make_task(start=_at(9, 30))

        candidate = evaluate_conflict(task, _context(settings, [task, other]))

        assert candidate is not None
        assert candidate.suggested_start >= _at(10, 30)

    def test_no_conflict(self, settings, make_task):
        task = make_task(start=_at(9))
        event = _event(_at(10), _at(11))
        assert evaluate_conflict(task, _context(settings, [task], [event])) is None

    def test_unscheduled_task(self, settings, make_task):
        task = make_task()
        assert evaluate_conflict(task, _context(settings, [task])) is None

    def test_no_free_slot_in_horizon(self, settings, make_task):
        task = make_task(start=_at(9))
        event = _event(_at(0), _at(0, day=8))
        assert evaluate_conflict(task, _context(settings, [task], [event])) is None


class TestDeadlineProximity:
    """Test evaluate_deadline_proximity()."""

    def test_due_soon_and_unscheduled(self, settings, make_task, now):
        task = make_task(due_date=now + timedelta(hours=5), duration=30)

        candidate = evaluate_deadline_proximity(task, _context(settings, [task], now=now))

        assert candidate is not None
        assert candidate.suggestion_type == SuggestionType.DEADLINE_PROXIMITY
        assert candidate.confidence == 0.9
        assert "due in 5 hours" in candidate.reason
        assert candidate.suggested_start == _at(9)
        assert candidate.suggested_end == _at(9, 30)
        assert candidate.suggested_start < now + timedelta(days=3)

    def test_exactly_24_hours(self, settings, make_task, now):
        task = make_task(due_date=now + timedelta(hours=24))
        assert evaluate_deadline_proximity(task, _context(settings, [task], now=now)) is not None

    def test_due_later(self, settings, make_task, now):
        task = make_task(due_date=now + timedelta(hours=30))
        assert evaluate_deadline_proximity(task, _context(settings, [task], now=now)) is None

    def test_overdue(self, settings, make_task, now):
        task = make_task(due_date=now - timedelta(hours=1))
        assert evaluate_deadline_proximity(task, _context(settings, [task], now=now)) is None

    def test_already_scheduled(self, settings, make_task, now):
        task = make_task(start=_at(10), due_date=now + timedelta(hours=5))
        assert evaluate_deadline_proximity(task, _context(settings, [task], now=now)) is None

    def test_no_due_date(self, settings, make_task, now):
        task = make_task()
        assert evaluate_deadline_proximity(task, _context(settings, [task], now=now)) is None


class TestEnergyMismatch:
    """Test evaluate_energy_mismatch()."""

    def test_high_energy_task_in_medium_window(self, settings, make_task):
        task = make_task(start=_at(14), energy_level=EnergyLevel.HIGH)

        candidate = evaluate_energy_mismatch(task, _context(settings, [task]))

        assert candidate is not None
        assert candidate.confidence == 0.7
        assert candidate.reason.startswith("This high-energy task is scheduled during medium-energy time.")
        assert candidate.suggested_start == _at(9)
        assert 9 <= candidate.suggested_start.hour < 12

    def test_matching_window(self, settings, make_task):
        task = make_task(start=_at(10), energy_level=EnergyLevel.HIGH)
        assert evaluate_energy_mismatch(task, _context(settings, [task])) is None

    def test_outside_every_window(self, settings, make_task):
        task = make_task(start=_at(20), energy_level=EnergyLevel.LOW)
        assert evaluate_energy_mismatch(task, _context(settings, [task])) is None

    def test_task_without_energy_level(self, settings, make_task):
        task = make_task(start=_at(14))
        assert evaluate_energy_mismatch(task, _context(settings, [task])) is None

    def test_no_matching_slot(self, test_user_id, make_task):
        """A low-energy task can't be moved if the low window lies outside work hours."""
        settings = AutoScheduleSettings(user_id=test_user_id, low_energy_start=20, low_energy_end=22)
        task = make_task(start=_at(10), energy_level=EnergyLevel.LOW)
        assert evaluate_energy_mismatch(task, _context(settings, [task])) is None


class TestOverload:
    """Test evaluate_overload()."""

    def test_more_than_six_hours_on_one_day(self, settings, make_task):
        tasks = [make_task(start=_at(8 + 2 * i), duration=80) for i in range(5)]

        candidate = evaluate_overload(tasks[0], _context(settings, tasks))

        assert candidate is not None
        assert candidate.suggestion_type == SuggestionType.OVERLOAD
        assert candidate.confidence == 0.8
        assert candidate.suggested_start is None
        assert candidate.suggested_end is None
        assert candidate.reason == (
            "You have 7 hours scheduled on Monday, March 2. "
            "Consider spreading tasks across multiple days."
        )

    def test_exactly_six_hours(self, settings, make_task):
        tasks = [make_task(start=_at(8 + 2 * i), duration=90) for i in range(4)]
        assert evaluate_overload(tasks[0], _context(settings, tasks)) is None

    def test_other_days_not_counted(self, settings, make_task):
        tasks = [make_task(start=_at(9, day=i), duration=240) for i in range(3)]
        assert evaluate_overload(tasks[0], _context(settings, tasks)) is None

    def test_unset_duration_counts_as_an_hour(self, settings, make_task):
        tasks = [make_task(start=_at(8 + i), duration=None) for i in range(7)]
        assert evaluate_overload(tasks[0], _context(settings, tasks)) is not None


class TestBreakViolation:
    """Test continuous_work_minutes() and evaluate_break_violation()."""

    def test_back_to_back_run(self, settings, make_task):
        tasks = [make_task(start=_at(9 + i)) for i in range(4)]

        candidate = evaluate_break_violation(tasks[1], _context(settings, tasks))

        assert candidate is not None
        assert candidate.suggestion_type == SuggestionType.BREAK_VIOLATION
        assert candidate.confidence == 0.85
        assert candidate.suggested_start is None

    def test_run_is_chained_in_both_directions(self, make_task):
        tasks = [make_task(start=_at(9 + i)) for i in range(4)]
        assert continuous_work_minutes(tasks[1], tasks, 15) == 240
        assert continuous_work_minutes(tasks[3], tasks, 15) == 240

    def test_gap_breaks_the_run(self, settings, make_task):
        tasks = [
            make_task(start=_at(9)),
            make_task(start=_at(10)),
            make_task(start=_at(11, 30)),
            make_task(start=_at(12, 30)),
        ]
        assert continuous_work_minutes(tasks[0], tasks, 15) == 120
        assert evaluate_break_violation(tasks[0], _context(settings, tasks)) is None

    def test_short_gap_still_chains(self, make_task):
        tasks = [make_task(start=_at(9)), make_task(start=_at(10, 10))]
        assert continuous_work_minutes(tasks[0], tasks, 15) == 120

    def test_long_block_ending_at_task_start_is_counted(self, settings, make_task):
        """A block that starts before a shorter task but ends at the run's edge still chains."""
        long_block = make_task(start=_at(8), duration=240)
        short = make_task(start=_at(9), duration=30)
        task = make_task(start=_at(12))
        tasks = [long_block, short, task]

        assert continuous_work_minutes(task, tasks, 15) == 330
        assert evaluate_break_violation(task, _context(settings, tasks)) is not None

    def test_contained_task_joins_the_run(self, make_task):
        outer = make_task(start=_at(9), duration=180)
        inner = make_task(start=_at(10), duration=30)
        after = make_task(start=_at(12, 10))

        assert continuous_work_minutes(after, [outer, inner, after], 15) == 270
        assert continuous_work_minutes(inner, [outer, inner, after], 15) == 270

    def test_exactly_max_hours(self, settings, make_task):
        tasks = [make_task(start=_at(9 + i)) for i in range(3)]
        assert evaluate_break_violation(tasks[0], _context(settings, tasks)) is None

    def test_disabled(self, test_user_id, make_task):
        settings = AutoScheduleSettings(user_id=test_user_id, enforce_breaks=False)
        tasks = [make_task(start=_at(9 + i)) for i in range(5)]
        assert evaluate_break_violation(tasks[0], _context(settings, tasks)) is None

    def test_unscheduled(self, settings, make_task):
        task = make_task()
        assert evaluate_break_violation(task, _context(settings, [task])) is None
