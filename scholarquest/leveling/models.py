"""Data models for the leveling system."""

from pydantic import BaseModel, ConfigDict


class LevelingResult(BaseModel):
    """Progression state derived from a total point value.

    Recomputed from scratch on every change to the accepted papers; never
    updated in place.
    """
    model_config = ConfigDict(frozen=True)

    total_points: int
    level: int
    current_xp: int   # points earned inside the current level
    required_xp: int  # cost of the next level-up
    progress_percent: float = 0.0

    @property
    def next_level(self) -> int:
        return self.level + 1

    @property
    def xp_to_next_level(self) -> int:
        return self.required_xp - self.current_xp
