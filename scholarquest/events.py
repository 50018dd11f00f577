"""Event system for decoupling the record store from presentation.

The store emits events after each mutation without knowing how (or whether)
they are rendered. Presentation layers implement the handlers they care
about.
"""

from typing import TYPE_CHECKING, Any, Protocol

from scholarquest.models import PaperRecord, PaperStatus

if TYPE_CHECKING:
    from scholarquest.leveling.models import LevelingResult


class EventHandler(Protocol):
    """Protocol for handlers that observe record store changes."""

    def on_records_changed(
        self,
        records: list[PaperRecord],
        leveling: "LevelingResult",
        **kwargs: Any
    ) -> None:
        """Called after every mutation of the record collection.
        
        Args:
            records: Full collection, most recent first
            leveling: Leveling state recomputed from the accepted records
            **kwargs: Additional context (e.g. ``action``)
        """
        ...

    def on_status_changed(
        self,
        record: PaperRecord,
        old_status: PaperStatus,
        new_status: PaperStatus,
        **kwargs: Any
    ) -> None:
        """Called when a record moves to a new status.
        
        Args:
            record: The record after the transition
            old_status: Status before the transition
            new_status: Status after the transition
            **kwargs: Additional context
        """
        ...

    def on_level_change(
        self,
        old_level: int,
        new_level: int,
        **kwargs: Any
    ) -> None:
        """Called when a mutation moves the level up or down.
        
        Args:
            old_level: Level before the mutation
            new_level: Level after the mutation
            **kwargs: Additional context
        """
        ...


class NullEventHandler:
    """Null event handler that does nothing.
    
    Useful as a default when no event handling is needed.
    """

    def on_records_changed(self, *args: Any, **kwargs: Any) -> None:
        pass

    def on_status_changed(self, *args: Any, **kwargs: Any) -> None:
        pass

    def on_level_change(self, *args: Any, **kwargs: Any) -> None:
        pass
