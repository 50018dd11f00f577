"""Record store: the ordered paper collection and its persistence.

The collection is kept in a JSON document that works like browser local
storage: one top-level key (``config.STORAGE_KEY``) holds the serialized
record list, most recently created first. Other keys in the document are
left alone.
"""

import json
import os
import random
import shutil
import string
import tempfile
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from scholarquest import config
from scholarquest.errors import RecordNotFoundError
from scholarquest.events import EventHandler, NullEventHandler
from scholarquest.leveling import LevelingResult, compute_leveling
from scholarquest.logging import get_logger
from scholarquest.models import PaperDraft, PaperRecord, PaperStatus
from scholarquest.workflow import apply_transition

logger = get_logger(__name__)

_RECORD = TypeAdapter(PaperRecord)

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


def _now_ms() -> int:
    return int(time.time() * 1000)


def generate_record_id(rng: random.Random | None = None) -> str:
    """Generate a short base-36 identifier for a new record."""
    rng = rng or random
    return "".join(rng.choices(ID_ALPHABET, k=ID_LENGTH))


class JsonFileStorage:
    """Key/value storage backed by a single JSON document on disk.
    
    Writes go to a temporary file in the same directory which then replaces
    the document, so an interrupted write never leaves a truncated file.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    @property
    def backup_path(self) -> Path:
        """Where an unreadable document is copied before it is replaced."""
        return self.path.with_name(self.path.name + ".bak")

    def _read_document(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, encoding="utf-8") as f:
            document = json.load(f)
        if not isinstance(document, dict):
            raise ValueError(f"Storage document {self.path} is not a JSON object")
        return document

    def get_item(self, key: str) -> Any | None:
        """Return the value stored under ``key``, or None if absent."""
        return self._read_document().get(key)

    def set_item(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, keeping all other keys."""
        try:
            document = self._read_document()
        except (json.JSONDecodeError, ValueError):
            shutil.copyfile(self.path, self.backup_path)
            logger.warning(
                "Replacing unreadable storage document",
                path=str(self.path),
                backup=str(self.backup_path),
            )
            document = {}
        document[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            os.unlink(tmp_name)
            raise


class RecordStore:
    """Owns the paper collection and persists it after every mutation.
    
    The leveling state is never cached: ``leveling()`` recomputes it from the
    accepted records on every call.
    """

    def __init__(
        self,
        storage: JsonFileStorage | None = None,
        storage_key: str | None = None,
        event_handler: EventHandler | None = None,
        clock: Callable[[], int] = _now_ms,
        rng: random.Random | None = None,
    ):
        """Initialize the store and load any saved records.
        
        Args:
            storage: Storage backend (default: JSON file at ``config.DATA_FILE``)
            storage_key: Key of the record list (default: ``config.STORAGE_KEY``)
            event_handler: Receives change events (default: no-op)
            clock: Returns the current time in epoch milliseconds
            rng: Random source for record ids
        """
        self.storage = storage or JsonFileStorage(config.DATA_FILE)
        self.storage_key = storage_key or config.STORAGE_KEY
        self.events = event_handler or NullEventHandler()
        self._clock = clock
        self._rng = rng
        # Stored entries that failed validation; written back untouched on save.
        self._unreadable: list[Any] = []
        self._records: list[PaperRecord] = self.load()

    # -- persistence -------------------------------------------------------

    @property
    def unreadable_entries(self) -> list[Any]:
        """Raw stored entries that could not be parsed as records."""
        return list(self._unreadable)

    def load(self) -> list[PaperRecord]:
        """Read the saved collection.
        
        Each entry is validated on its own. Invalid entries are logged,
        left out of the collection and kept for ``save()`` so they are never
        lost from storage. An unreadable document loads as empty.
        """
        self._unreadable = []
        try:
            raw = self.storage.get_item(self.storage_key)
        except (OSError, json.JSONDecodeError, ValueError) as e:
            logger.warning("Failed to load records", error=str(e))
            return []
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Stored records are not a list, keeping them aside", type=type(raw).__name__)
            self._unreadable = [raw]
            return []

        records: list[PaperRecord] = []
        for position, entry in enumerate(raw):
            try:
                records.append(_RECORD.validate_python(entry))
            except ValidationError as e:
                logger.warning(
                    "Skipping invalid stored record",
                    position=position,
                    record_id=entry.get("id") if isinstance(entry, dict) else None,
                    error_count=e.error_count(),
                )
                self._unreadable.append(entry)
        return records

    def save(self, records: list[PaperRecord] | None = None) -> None:
        """Write the whole collection to storage.
        
        Args:
            records: Collection to write (default: the current one)
        """
        records = self._records if records is None else records
        self.storage.set_item(
            self.storage_key,
            [record.to_storage() for record in records] + self._unreadable,
        )
        logger.debug("Saved records", count=len(records), unreadable=len(self._unreadable))

    # -- queries -----------------------------------------------------------

    @property
    def records(self) -> list[PaperRecord]:
        """All records, most recently created first."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, record_id: str) -> PaperRecord:
        for record in self._records:
            if record.id == record_id:
                return record
        raise RecordNotFoundError(record_id)

    def by_status(self, status: PaperStatus | str) -> list[PaperRecord]:
        status = PaperStatus(status)
        return [r for r in self._records if r.status == status]

    def accepted(self) -> list[PaperRecord]:
        return self.by_status(PaperStatus.ACCEPTED)

    def status_counts(self) -> dict[PaperStatus, int]:
        """Number of records per status; every status is present."""
        counts = {status: 0 for status in PaperStatus}
        for record in self._records:
            counts[record.status] += 1
        return counts

    def leveling(self) -> LevelingResult:
        """Leveling state recomputed from the current accepted records."""
        return compute_leveling(record.tier for record in self.accepted())

    # -- mutations ---------------------------------------------------------

    def add(self, draft: PaperDraft, status: PaperStatus | str = PaperStatus.TARGET) -> PaperRecord:
        """Create a record from ``draft`` at the front of the collection.
        
        Args:
            draft: Editable fields of the new paper
            status: Initial status
            
        Returns:
            The stored record with its new id and creation time
        """
        existing_ids = {r.id for r in self._records}
        existing_ids.update(
            entry.get("id") for entry in self._unreadable if isinstance(entry, dict)
        )
        record_id = generate_record_id(self._rng)
        while record_id in existing_ids:
            record_id = generate_record_id(self._rng)

        record = PaperRecord(
            **draft.model_dump(),
            id=record_id,
            status=PaperStatus(status),
            created_at=self._clock(),
        )

        self._commit([record, *self._records], action="add", record_id=record.id)
        return record

    def update(self, record_id: str, draft: PaperDraft) -> PaperRecord:
        """Replace the editable fields of a record; id, status and created_at stay."""
        index = self._index_of(record_id)
        updated = self._records[index].model_copy(update=draft.model_dump())

        self._commit(self._replaced(index, updated), action="update", record_id=record_id)
        return updated

    def remove(self, record_id: str) -> PaperRecord:
        """Delete a record and return it."""
        index = self._index_of(record_id)
        removed = self._records[index]

        remaining = self._records[:index] + self._records[index + 1:]
        self._commit(remaining, action="remove", record_id=record_id)
        return removed

    def transition_status(
        self,
        record_id: str,
        new_status: PaperStatus | str,
        force: bool = False,
    ) -> PaperRecord:
        """Move a record to a new status through the status workflow.
        
        Raises:
            RecordNotFoundError: If no record has ``record_id``
            InvalidTransitionError: If the workflow refuses the move
        """
        index = self._index_of(record_id)
        current = self._records[index]
        updated = apply_transition(current, new_status, force=force)

        self._commit(self._replaced(index, updated), action="transition", record_id=record_id)
        self.events.on_status_changed(updated, current.status, updated.status)
        return updated

    def _index_of(self, record_id: str) -> int:
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return i
        raise RecordNotFoundError(record_id)

    def _replaced(self, index: int, record: PaperRecord) -> list[PaperRecord]:
        records = list(self._records)
        records[index] = record
        return records

    def _commit(self, records: list[PaperRecord], **context: Any) -> None:
        """Persist ``records`` and only then make them the current collection.
        
        If the write fails the in-memory collection is left as it was and the
        storage error propagates.
        """
        before = self.leveling()
        self.save(records)
        self._records = records
        after = self.leveling()

        logger.debug("Records changed", total_points=after.total_points, **context)
        self.events.on_records_changed(self.records, after, **context)
        if after.level != before.level:
            logger.info("Level changed", old_level=before.level, new_level=after.level)
            self.events.on_level_change(before.level, after.level, **context)
