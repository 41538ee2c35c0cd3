"""Local snapshot of the store, kept in a versioned JSON document."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from backend.app.config import Settings
from backend.app.models.defaults import STORAGE_KEY
from backend.app.models.itinerary import ItineraryState

if TYPE_CHECKING:
    from backend.app.store.store import ItineraryStore

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 0


class LocalStateStorage:
    """Reads and writes ``<directory>/<storage_key>.json``.

    The document is ``{"state": {...}, "version": 0}``. A file that cannot be
    parsed or validated is removed and treated as absent; write failures are
    logged and otherwise ignored so editing is never blocked on disk issues.
    """

    def __init__(self, directory: Path | str, storage_key: str = STORAGE_KEY) -> None:
        self.directory = Path(directory)
        self.storage_key = storage_key

    @classmethod
    def from_settings(cls, settings: Settings) -> LocalStateStorage:
        return cls(settings.local_state_dir, settings.storage_key)

    @property
    def path(self) -> Path:
        return self.directory / f"{self.storage_key}.json"

    def load(self) -> ItineraryState | None:
        """Load the stored snapshot.

        Returns:
            The snapshot, or None when missing or unreadable
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Could not read local state {self.path}: {e}")
            return None

        try:
            document = json.loads(raw)
            state = ItineraryState.model_validate(document["state"])
        except ValidationError as e:
            logger.warning(
                f"Discarding invalid local state {self.path}: {e.error_count()} errors"
            )
            self.clear()
            return None
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding corrupted local state {self.path}: {e}")
            self.clear()
            return None

        logger.debug(f"Loaded local state with {len(state.trips)} trips")
        return state

    def save(self, state: ItineraryState) -> None:
        """Write the snapshot atomically (temp file + rename)."""
        document: dict[str, Any] = {"state": state.to_wire(), "version": SNAPSHOT_VERSION}
        tmp_path = self.path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write local state {self.path}: {e}")

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to remove local state {self.path}: {e}")

    def attach(self, store: ItineraryStore) -> Callable[[], None]:
        """Write every new store snapshot; returns the unsubscribe callable."""
        return store.subscribe(lambda new, _previous: self.save(new))
