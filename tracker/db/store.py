"""
Snapshot stores.

A store loads and saves the whole RepositoryState in one piece. Two
implementations share the interface: JSONFileStore keeps the snapshot in a
JSON file on disk, InMemoryStore keeps a private copy in memory for tests.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from tracker.errors import TrackerError
from tracker.lib.validate import ValidationError, validate, validate_before_write
from tracker.models import RepositoryState

logger = logging.getLogger(__name__)

SNAPSHOT_SCHEMA = "snapshot"


class PersistenceFailure(TrackerError):
    """The snapshot could not be loaded or saved."""

    def __init__(self, location: str, message: str):
        self.location = location
        super().__init__(f"{location}: {message}")


class Store:
    """Interface for whole-snapshot persistence."""

    def load(self) -> RepositoryState:
        """Return a fresh copy of the stored snapshot.

        Raises:
            PersistenceFailure: If the snapshot cannot be read or is malformed
        """
        raise NotImplementedError

    def save(self, state: RepositoryState) -> None:
        """Replace the stored snapshot with state.

        Raises:
            PersistenceFailure: If the snapshot cannot be written
        """
        raise NotImplementedError


class JSONFileStore(Store):
    """Snapshot kept as a single JSON document.

    A missing file reads as the empty snapshot. Writes go to a sibling temp
    file which is then renamed over the target.
    """

    def __init__(self, file_path: Path | str):
        self.file_path = Path(file_path)

    def exists(self) -> bool:
        return self.file_path.exists()

    def load(self) -> RepositoryState:
        if not self.file_path.exists():
            logger.debug(f"[STORE] {self.file_path} not found, starting empty")
            return RepositoryState.empty()

        try:
            data = json.loads(self.file_path.read_text())
        except OSError as e:
            raise PersistenceFailure(str(self.file_path), f"cannot read snapshot: {e}") from e
        except json.JSONDecodeError as e:
            raise PersistenceFailure(str(self.file_path), f"invalid JSON: {e}") from e

        try:
            validate(data, SNAPSHOT_SCHEMA)
            state = RepositoryState.from_dict(data)
            state.check_integrity()
        except (ValidationError, ValueError, KeyError) as e:
            raise PersistenceFailure(str(self.file_path), f"malformed snapshot: {e}") from e
        return state

    def save(self, state: RepositoryState) -> None:
        data = state.to_dict()
        try:
            validate_before_write(data, SNAPSHOT_SCHEMA, self.file_path)
        except ValidationError as e:
            raise PersistenceFailure(str(self.file_path), str(e)) from e

        temp_file = self.file_path.with_suffix(self.file_path.suffix + ".tmp")
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            temp_file.write_text(json.dumps(data, indent=2) + "\n")
            temp_file.replace(self.file_path)
        except OSError as e:
            temp_file.unlink(missing_ok=True)
            raise PersistenceFailure(str(self.file_path), f"cannot write snapshot: {e}") from e

        logger.debug(f"[STORE] wrote {self.file_path} (last_item_id={state.last_item_id})")


class InMemoryStore(Store):
    """Snapshot held in memory. Loads and saves copy, so callers never alias it."""

    def __init__(self, initial: Optional[RepositoryState] = None):
        self._state = (initial or RepositoryState.empty()).copy()
        self.save_count = 0

    def load(self) -> RepositoryState:
        return self._state.copy()

    def save(self, state: RepositoryState) -> None:
        self._state = state.copy()
        self.save_count += 1
