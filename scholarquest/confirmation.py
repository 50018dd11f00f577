"""Pending-action confirmation for destructive or irreversible actions.

A ``ConfirmationFlow`` walks one action at a time through
idle -> awaiting_confirmation -> committed | cancelled | failed.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from scholarquest.errors import ConfirmationStateError
from scholarquest.models import PaperRecord, PaperStatus


class ConfirmationState(str, Enum):
    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    COMMITTED = "committed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class ActionKind(str, Enum):
    DELETE = "delete"
    SUBMIT = "submit"
    REJECT = "reject"


DELETE_MESSAGE = "Delete this research record? This cannot be undone."
DELETE_ACCEPTED_MESSAGE = (
    "Delete this accepted paper? Its XP and level will be deducted as well. "
    "This cannot be undone!"
)
DELETE_REJECTED_MESSAGE = "Erase the memory of this heartbreaking rejection for good?"
SUBMIT_MESSAGE = "Send this paper off on its expedition (mark as submitted)?"
REJECT_MESSAGE = "Face the abyss (mark this submission as rejected)?"


class PendingAction(BaseModel):
    """An action waiting for the user's decision."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: ActionKind
    record: PaperRecord
    message: str
    callback: Callable[[], Any]


def confirmation_message(kind: ActionKind, record: PaperRecord) -> str:
    """Prompt text for an action on ``record``."""
    if kind == ActionKind.SUBMIT:
        return SUBMIT_MESSAGE
    if kind == ActionKind.REJECT:
        return REJECT_MESSAGE
    if record.status == PaperStatus.ACCEPTED:
        return DELETE_ACCEPTED_MESSAGE
    if record.status == PaperStatus.REJECTED:
        return DELETE_REJECTED_MESSAGE
    return DELETE_MESSAGE


# Target statuses whose transition must be confirmed, with the action kind
STATUS_ACTIONS: dict[PaperStatus, ActionKind] = {
    PaperStatus.SUBMITTED: ActionKind.SUBMIT,
    PaperStatus.REJECTED: ActionKind.REJECT,
}


def action_for_status(status: PaperStatus | str) -> ActionKind | None:
    """Confirmation kind required to move a record to ``status``, if any."""
    return STATUS_ACTIONS.get(PaperStatus(status))


class ConfirmationFlow:
    """State machine holding at most one pending action."""

    def __init__(self):
        self.state = ConfirmationState.IDLE
        self.pending: PendingAction | None = None
        self.last_result: Any = None

    def request(
        self,
        kind: ActionKind,
        record: PaperRecord,
        callback: Callable[[], Any],
    ) -> str:
        """Queue an action and return the prompt to show the user.
        
        Raises:
            ConfirmationStateError: If another action is still awaiting a decision
        """
        if self.state == ConfirmationState.AWAITING_CONFIRMATION:
            raise ConfirmationStateError("Another action is awaiting confirmation")

        message = confirmation_message(kind, record)
        self.pending = PendingAction(kind=kind, record=record, message=message, callback=callback)
        self.state = ConfirmationState.AWAITING_CONFIRMATION
        return message

    def confirm(self) -> Any:
        """Run the pending action and return its result.
        
        If the callback raises, the action is dropped, the flow moves to
        ``FAILED`` and the exception propagates; a new request may follow.
        """
        pending = self._require_pending()
        self.pending = None
        try:
            self.last_result = pending.callback()
        except Exception:
            self.state = ConfirmationState.FAILED
            raise
        self.state = ConfirmationState.COMMITTED
        return self.last_result

    def cancel(self) -> None:
        """Drop the pending action without running it."""
        self._require_pending()
        self.pending = None
        self.state = ConfirmationState.CANCELLED

    def reset(self) -> None:
        self.pending = None
        self.last_result = None
        self.state = ConfirmationState.IDLE

    def _require_pending(self) -> PendingAction:
        if self.state != ConfirmationState.AWAITING_CONFIRMATION or self.pending is None:
            raise ConfirmationStateError(f"No action awaiting confirmation (state: {self.state.value})")
        return self.pending
