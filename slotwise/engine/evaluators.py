"""Heuristic evaluators for reschedule suggestions.

Each evaluator looks at one task against the current state and returns at most
one SuggestionCandidate. They are independent of each other; the orchestrator
runs them in the order of EVALUATORS.
"""

from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence, Tuple

from slotwise.models.calendar_event import CalendarEvent
from slotwise.models.settings import AutoScheduleSettings
from slotwise.models.suggestion import SuggestionCandidate, SuggestionType
from slotwise.models.task import Task
from slotwise.models.constants import (
    CONFLICT_HORIZON_DAYS,
    DEADLINE_HORIZON_DAYS,
    ENERGY_HORIZON_DAYS,
    DEADLINE_PROXIMITY_HOURS,
    OVERLOAD_THRESHOLD_MINUTES,
    CONFLICT_CONFIDENCE,
    DEADLINE_PROXIMITY_CONFIDENCE,
    ENERGY_MISMATCH_CONFIDENCE,
    OVERLOAD_CONFIDENCE,
    BREAK_VIOLATION_CONFIDENCE,
)
from slotwise.engine.conflicts import has_conflict
from slotwise.engine.energy import expected_energy
from slotwise.engine.intervals import hour_of_day, minutes_between, start_of_day
from slotwise.engine.slots import Slot, generate_slots


class EvaluationContext:
    """Everything an evaluator may read for one user's run."""

    def __init__(
        self,
        settings: AutoScheduleSettings,
        tasks: Sequence[Task],
        calendar_events: Sequence[CalendarEvent],
        now: datetime,
    ):
        self.settings = settings
        self.tasks = list(tasks)
        self.calendar_events = list(calendar_events)
        self.now = now

    def other_tasks(self, task: Task) -> List[Task]:
        return [t for t in self.tasks if t.id != task.id]


def _first_free_slot(
    task: Task,
    context: EvaluationContext,
    days_ahead: int,
    accept: Callable[[Slot], bool] = lambda slot: True,
) -> Optional[Slot]:
    """First slot in the horizon that passes `accept` and conflicts with nothing else."""
    others = context.other_tasks(task)
    for slot in generate_slots(days_ahead, context.settings, task.effective_duration, now=context.now):
        if accept(slot) and not has_conflict(slot.start, slot.end, context.calendar_events, others):
            return slot
    return None


def evaluate_conflict(task: Task, context: EvaluationContext) -> Optional[SuggestionCandidate]:
    """Flag a scheduled task that overlaps an event or another task, with a free slot to move to."""
    if not task.is_scheduled:
        return None
    if not has_conflict(task.scheduled_start, task.scheduled_end, context.calendar_events, context.other_tasks(task)):
        return None

    slot = _first_free_slot(task, context, CONFLICT_HORIZON_DAYS)
    if slot is None:
        return None

    return SuggestionCandidate(
        task_id=task.id,
        suggestion_type=SuggestionType.CONFLICT,
        reason="This task conflicts with another event. Suggested alternative time available.",
        confidence=CONFLICT_CONFIDENCE,
        suggested_start=slot.start,
        suggested_end=slot.end,
    )


def evaluate_deadline_proximity(task: Task, context: EvaluationContext) -> Optional[SuggestionCandidate]:
    """Flag an unscheduled task due within the next 24 hours."""
    if task.due_date is None or task.scheduled_start is not None:
        return None

    hours_until_due = minutes_between(context.now, task.due_date) / 60
    if not (0 < hours_until_due <= DEADLINE_PROXIMITY_HOURS):
        return None

    slot = _first_free_slot(task, context, DEADLINE_HORIZON_DAYS)
    if slot is None:
        return None

    return SuggestionCandidate(
        task_id=task.id,
        suggestion_type=SuggestionType.DEADLINE_PROXIMITY,
        reason=f"This task is due in {round(hours_until_due)} hours and isn't scheduled. Schedule it soon!",
        confidence=DEADLINE_PROXIMITY_CONFIDENCE,
        suggested_start=slot.start,
        suggested_end=slot.end,
    )


def evaluate_energy_mismatch(task: Task, context: EvaluationContext) -> Optional[SuggestionCandidate]:
    """Flag a task scheduled in an energy window that differs from what it needs.

    Hours outside every configured window carry no expectation and never mismatch.
    """
    if task.scheduled_start is None or task.energy_level is None:
        return None

    current = expected_energy(hour_of_day(task.scheduled_start), context.settings)
    if current is None or current == task.energy_level:
        return None

    slot = _first_free_slot(
        task,
        context,
        ENERGY_HORIZON_DAYS,
        accept=lambda s: expected_energy(hour_of_day(s.start), context.settings) == task.energy_level,
    )
    if slot is None:
        return None

    return SuggestionCandidate(
        task_id=task.id,
        suggestion_type=SuggestionType.ENERGY_MISMATCH,
        reason=(
            f"This {task.energy_level}-energy task is scheduled during {current.value}-energy time. "
            "Consider rescheduling."
        ),
        confidence=ENERGY_MISMATCH_CONFIDENCE,
        suggested_start=slot.start,
        suggested_end=slot.end,
    )


def evaluate_overload(task: Task, context: EvaluationContext) -> Optional[SuggestionCandidate]:
    """Flag a task on a day with more than six hours of scheduled work. Reason only."""
    if task.scheduled_start is None:
        return None

    day_start = start_of_day(task.scheduled_start)
    day_end = day_start + timedelta(days=1)
    total_minutes = sum(
        t.effective_duration
        for t in context.tasks
        if t.scheduled_start is not None and day_start <= t.scheduled_start < day_end
    )
    if total_minutes <= OVERLOAD_THRESHOLD_MINUTES:
        return None

    return SuggestionCandidate(
        task_id=task.id,
        suggestion_type=SuggestionType.OVERLOAD,
        reason=(
            f"You have {round(total_minutes / 60)} hours scheduled on {day_start:%A, %B} {day_start.day}. "
            "Consider spreading tasks across multiple days."
        ),
        confidence=OVERLOAD_CONFIDENCE,
    )


def continuous_work_minutes(task: Task, tasks: Sequence[Task], min_break_minutes: int) -> int:
    """Minutes of work in the unbroken run of scheduled tasks that contains `task`.

    A task joins the run when it overlaps the run or sits less than
    `min_break_minutes` before or after it. The run grows until no remaining
    task joins, so a long block that starts early but ends at the run's edge is
    picked up regardless of what starts between. Durations are summed.
    """
    run_start, run_end = task.scheduled_start, task.scheduled_end
    total = task.effective_duration
    remaining = [t for t in tasks if t.id != task.id and t.is_scheduled]

    grew = True
    while grew:
        grew = False
        for other in list(remaining):
            if (
                minutes_between(run_end, other.scheduled_start) < min_break_minutes
                and minutes_between(other.scheduled_end, run_start) < min_break_minutes
            ):
                total += other.effective_duration
                run_start = min(run_start, other.scheduled_start)
                run_end = max(run_end, other.scheduled_end)
                remaining.remove(other)
                grew = True

    return total


def evaluate_break_violation(task: Task, context: EvaluationContext) -> Optional[SuggestionCandidate]:
    """Flag a task that sits in a run of back-to-back work longer than allowed. Reason only."""
    settings = context.settings
    if not settings.enforce_breaks or not task.is_scheduled:
        return None

    minutes = continuous_work_minutes(task, context.tasks, settings.min_break_duration)
    if minutes / 60 <= settings.max_consecutive_hours:
        return None

    return SuggestionCandidate(
        task_id=task.id,
        suggestion_type=SuggestionType.BREAK_VIOLATION,
        reason="This task is scheduled back-to-back with others for too long. Add breaks to prevent burnout.",
        confidence=BREAK_VIOLATION_CONFIDENCE,
    )


Evaluator = Callable[[Task, EvaluationContext], Optional[SuggestionCandidate]]

EVALUATORS: Tuple[Evaluator, ...] = (
    evaluate_conflict,
    evaluate_deadline_proximity,
    evaluate_energy_mismatch,
    evaluate_overload,
    evaluate_break_violation,
)
