"""Exception types raised by the record store and workflows."""


class ScholarQuestError(Exception):
    """Base class for all ScholarQuest errors."""


class RecordNotFoundError(ScholarQuestError, KeyError):
    """No record with the given id exists in the store."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"No paper record with id {record_id!r}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidTransitionError(ScholarQuestError, ValueError):
    """A status change is not allowed from the record's current status."""

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(f"Invalid transition: {from_status} -> {to_status}")


class ConfirmationStateError(ScholarQuestError, RuntimeError):
    """A confirmation step was invoked in the wrong state."""
