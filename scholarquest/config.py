"""Environment-driven settings for ScholarQuest."""

from __future__ import annotations

import os
from pathlib import Path

# JSON document standing in for browser local storage.
DATA_FILE = Path(
    os.environ.get(
        "SCHOLARQUEST_DATA_FILE",
        str(Path.home() / ".scholarquest" / "storage.json"),
    )
).expanduser()

# Key under which the record list is stored inside DATA_FILE.
STORAGE_KEY = os.environ.get("SCHOLARQUEST_STORAGE_KEY", "scholar_quest_records")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")
