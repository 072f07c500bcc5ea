"""Errors raised by the suggestion engine.

API handlers map these to HTTP status codes; the batch jobs log them per user.
"""


class SuggestionError(Exception):
    """Base class for suggestion lifecycle errors."""


class SuggestionNotFoundError(SuggestionError, LookupError):
    """The suggestion does not exist or belongs to another user."""

    def __init__(self, suggestion_id: str):
        super().__init__(f"Suggestion {suggestion_id} not found or unauthorized")
        self.suggestion_id = suggestion_id


class SuggestionAlreadyRespondedError(SuggestionError):
    """The suggestion is no longer pending."""

    def __init__(self, suggestion_id: str, status: str):
        super().__init__(f"Suggestion {suggestion_id} has already been responded to ({status})")
        self.suggestion_id = suggestion_id
        self.status = status


class TaskNotFoundError(SuggestionError, LookupError):
    """The task a suggestion refers to no longer exists for the owning user."""

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id
