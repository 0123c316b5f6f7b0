"""
File-backed record store.

One JSON file per entity type holds the whole collection as a JSON array.
Every mutation reads the full file, edits the list in memory and rewrites the
full file. Nothing is cached between calls.

Concurrency: operations take no lock. Two writers racing on the same file
(threads or processes) can lose updates, because each one rewrites the
collection it read. Callers in one process can serialize their
read-modify-write sequences with ``store.exclusive()``.
"""

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence, TypeVar

from ..core.logging import get_logger
from ..exceptions import (
    EmptyBatchError,
    MissingIdentifierError,
    PreconditionError,
    SerializationError,
)
from ..filesystem import FileSystem
from ..models.entity import Entity, bind_entity
from ..serializer import JsonSerializer
from .base import Repository


T = TypeVar("T", bound=Entity)
ID = TypeVar("ID")

EMPTY_COLLECTION = "[]"

# One lock per resolved store file path, shared by every store in the process
_path_locks: dict[Path, threading.RLock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    key = path.resolve()
    with _path_locks_guard:
        lock = _path_locks.get(key)
        if lock is None:
            lock = _path_locks[key] = threading.RLock()
        return lock


class RecordStore(Repository[T, ID]):
    """
    Generic CRUD store for one entity type.

    Error policy differs per operation:
    - save() logs and ignores a None entity, an entity of another type
      or an empty identifier
    - save_all(), find_by_id(), delete_by_id() raise on invalid arguments
    - read, write, encode and decode failures are logged and never raised;
      find_all() then returns an empty list and mutations are not persisted
    """

    def __init__(
        self,
        entity_type: type[T],
        base_dir: Path,
        *,
        filesystem: Optional[FileSystem] = None,
        serializer: Optional[JsonSerializer[T]] = None,
        logger=None,
    ):
        """
        Bind a store to an entity type and make sure its file exists.

        Args:
            entity_type: Entity subclass declaring store_name and id_field
            base_dir: Directory holding the store files
            filesystem: Filesystem adapter (default: local filesystem)
            serializer: Collection serializer (default: compact JSON)
            logger: structlog logger (default: module logger bound to the store name)

        Raises:
            EntityBindingError: If entity_type cannot back a store
        """
        self.entity_type = bind_entity(entity_type)
        self.base_dir = Path(base_dir).expanduser()
        self.filesystem = filesystem or FileSystem()
        self.serializer = serializer or JsonSerializer(entity_type)
        self.path = self.filesystem.path_for(self.base_dir, entity_type.store_name)
        self._logger = (logger or get_logger(__name__)).bind(store=entity_type.store_name)

        self.bootstrap()

    @property
    def store_name(self) -> str:
        return self.entity_type.store_name

    def bootstrap(self) -> None:
        """Create the base directory and an empty store file if missing."""
        try:
            self.filesystem.ensure_directory(self.base_dir)
        except OSError as e:
            self._logger.warning("Could not create store directory", path=str(self.base_dir), error=str(e))

        try:
            if not self.filesystem.exists(self.path):
                self.filesystem.write_text(self.path, EMPTY_COLLECTION)
                self._logger.info("Created store file", path=str(self.path))
        except OSError as e:
            self._logger.warning("Could not create store file", path=str(self.path), error=str(e))

    @contextmanager
    def exclusive(self) -> Iterator["RecordStore[T, ID]"]:
        """
        Hold this store file's in-process lock for the duration of the block.

        Re-entrant. Only coordinates callers that also use exclusive();
        other processes are not excluded.
        """
        with _lock_for(self.path):
            yield self

    # CRUD Operations

    def save(self, entity: T) -> None:
        """Insert the entity, or replace the first stored entity equal to it."""
        if entity is not None and type(entity) is not self.entity_type:
            self._logger.error(
                "Entity of another type, not saved",
                entity_type=type(entity).__name__,
                expected=self.entity_type.__name__,
            )
            return
        if entity is None or not self._has_identifier(entity.identifier()):
            self._logger.error("Null entity or empty identifier, not saved", entity=repr(entity))
            return

        all_entities = self.find_all()
        try:
            index = all_entities.index(entity)
        except ValueError:
            all_entities.append(entity)
        else:
            all_entities[index] = entity

        self._write(all_entities)

    def save_all(self, entities: Sequence[T]) -> None:
        """Append every entity to the collection. Duplicates are kept."""
        if not entities:
            raise EmptyBatchError(
                "save_all requires at least one entity",
                context={"store": self.store_name},
            )
        foreign = [type(entity).__name__ for entity in entities if type(entity) is not self.entity_type]
        if foreign:
            raise PreconditionError(
                f"save_all accepts only {self.entity_type.__name__} entities",
                context={"store": self.store_name, "foreign_types": sorted(set(foreign))},
            )

        all_entities = self.find_all()
        all_entities.extend(entities)
        self._write(all_entities)

    def find_all(self) -> list[T]:
        """Read the whole collection; empty on any read or decode failure."""
        try:
            return self.serializer.decode(self.filesystem.read_text(self.path))
        except (OSError, UnicodeDecodeError) as e:
            self._logger.error("Could not read store file", path=str(self.path), error=str(e))
        except SerializationError as e:
            self._logger.error("Could not decode store file", path=str(self.path), error=str(e))
        return []

    def find_by_id(self, id: ID) -> Optional[T]:
        """Return the first entity with this identifier, or None."""
        self._require_id(id)
        for entity in self.find_all():
            if entity.identifier() == id:
                return entity
        return None

    def delete_by_id(self, id: ID) -> None:
        """Remove the first entity with this identifier; always rewrites the file."""
        self._require_id(id)

        all_entities = self.find_all()
        for index, entity in enumerate(all_entities):
            if entity.identifier() == id:
                del all_entities[index]
                break

        self._write(all_entities)

    # Helpers

    def _write(self, entities: list[T]) -> None:
        try:
            self.filesystem.write_text(self.path, self.serializer.encode(entities))
        except OSError as e:
            self._logger.error("Could not update store file", path=str(self.path), error=str(e))
            return
        except SerializationError as e:
            self._logger.error("Could not encode store file", path=str(self.path), error=str(e))
            return
        self._logger.debug("Wrote store file", path=str(self.path), count=len(entities))

    def _require_id(self, id: ID) -> None:
        if id is None:
            raise MissingIdentifierError(
                "Identifier must not be None",
                context={"store": self.store_name},
            )

    @staticmethod
    def _has_identifier(value) -> bool:
        return value is not None and value != ""
