"""Reschedule suggestion engine for slotwise."""

from slotwise.engine.intervals import overlaps
from slotwise.engine.energy import expected_energy
from slotwise.engine.slots import Slot, generate_slots
from slotwise.engine.conflicts import has_conflict
from slotwise.engine.evaluators import EVALUATORS, EvaluationContext

__all__ = [
    "overlaps",
    "expected_energy",
    "Slot",
    "generate_slots",
    "has_conflict",
    "EVALUATORS",
    "EvaluationContext",
]
