"""Data models for paper records.

Field names are snake_case in Python; the stored JSON keeps the camelCase
keys written by earlier versions of the tracker (see ``PaperRecord``).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Tier(str, Enum):
    """Venue quality rank. Point values live in ``scholarquest.leveling.engine``."""
    A = "A"
    B = "B"
    C = "C"
    OTHER = "Other"


class PaperStatus(str, Enum):
    """Stage of a paper in the submission pipeline."""
    TARGET = "Target"
    WRITING = "Writing"
    SUBMITTED = "Submitted"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class PaperResult(str, Enum):
    """Outcome recorded for a paper."""
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    REVISION = "Revision"


class PaperDraft(BaseModel):
    """Editable fields of a paper record (everything but id, created_at, status)."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    conference: str = ""
    tier: Tier = Tier.OTHER
    submission_date: str = Field(default="", alias="submissionDate")
    score_release_date: str = Field(default="", alias="scoreReleaseDate")
    scores: str = ""
    rebuttal_date: str = Field(default="", alias="rebuttalDate")
    final_scores: str = Field(default="", alias="finalScores")
    result: PaperResult = PaperResult.PENDING
    content: str = ""


class PaperRecord(PaperDraft):
    """A tracked paper as persisted in storage."""
    id: str
    status: PaperStatus
    created_at: int = Field(alias="createdAt")  # epoch milliseconds

    def to_storage(self) -> dict:
        """Serialize with the camelCase keys used on disk."""
        return self.model_dump(mode="json", by_alias=True)

    @property
    def is_accepted(self) -> bool:
        return self.status == PaperStatus.ACCEPTED
