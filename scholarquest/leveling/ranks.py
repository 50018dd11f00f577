"""Rank titles shown alongside the level."""

# (exclusive upper level bound, title); checked in order
RANK_BANDS: list[tuple[int, str]] = [
    (2, "Apprentice"),
    (5, "Seeker"),
    (10, "Ascetic"),
    (20, "Gatekeeper"),
    (40, "Grandmaster"),
]

TOP_RANK = "Divine"


def rank_name(level: int) -> str:
    """Return the rank title for a level."""
    for upper, title in RANK_BANDS:
        if level < upper:
            return title
    return TOP_RANK
