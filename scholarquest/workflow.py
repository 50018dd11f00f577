"""Status workflow for paper records.

Valid transitions between paper statuses are defined here, together with
the result value each transition implies.
"""

from scholarquest.errors import InvalidTransitionError
from scholarquest.models import PaperRecord, PaperResult, PaperStatus

# from_status -> statuses reachable through a status action
_TRANSITIONS: dict[PaperStatus, set[PaperStatus]] = {
    PaperStatus.TARGET: {PaperStatus.ACCEPTED},
    PaperStatus.WRITING: {PaperStatus.SUBMITTED, PaperStatus.ACCEPTED},
    PaperStatus.SUBMITTED: {PaperStatus.REJECTED, PaperStatus.ACCEPTED},
    PaperStatus.ACCEPTED: set(),
    PaperStatus.REJECTED: set(),
}


def valid_transitions(from_status: PaperStatus | str) -> list[PaperStatus]:
    """Return the statuses reachable from ``from_status``, in pipeline order."""
    reachable = _TRANSITIONS[PaperStatus(from_status)]
    return [status for status in PaperStatus if status in reachable]


def can_transition(from_status: PaperStatus | str, to_status: PaperStatus | str) -> bool:
    """Check whether a record may move from ``from_status`` to ``to_status``."""
    return PaperStatus(to_status) in _TRANSITIONS[PaperStatus(from_status)]


def result_for_status(status: PaperStatus, current: PaperResult) -> PaperResult:
    """Result a record should carry after moving to ``status``."""
    if status == PaperStatus.ACCEPTED:
        return PaperResult.ACCEPTED
    if status == PaperStatus.REJECTED:
        return PaperResult.REJECTED
    return current


def apply_transition(
    record: PaperRecord,
    to_status: PaperStatus | str,
    force: bool = False,
) -> PaperRecord:
    """Return a copy of ``record`` moved to ``to_status``.
    
    Args:
        record: Record to transition (left unchanged)
        to_status: Target status
        force: Skip the transition table (same-status moves are still refused)
        
    Returns:
        Updated copy with status and result set
        
    Raises:
        InvalidTransitionError: If the move is not allowed
    """
    to_status = PaperStatus(to_status)
    if to_status == record.status:
        raise InvalidTransitionError(record.status.value, to_status.value)
    if not force and not can_transition(record.status, to_status):
        raise InvalidTransitionError(record.status.value, to_status.value)

    return record.model_copy(
        update={
            "status": to_status,
            "result": result_for_status(to_status, record.result),
        }
    )
