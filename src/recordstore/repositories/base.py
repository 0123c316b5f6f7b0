"""
Base repository interface defining CRUD operations.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, Sequence, TypeVar

from ..models.entity import Entity


T = TypeVar("T", bound=Entity)
ID = TypeVar("ID")


class Repository(ABC, Generic[T, ID]):
    """
    Abstract base repository defining standard CRUD operations.

    Implementations handle persistence to a specific storage backend.
    All operations are synchronous.
    """

    @abstractmethod
    def save(self, entity: T) -> None:
        """
        Insert or replace an entity.

        Args:
            entity: The entity to store
        """
        pass

    @abstractmethod
    def save_all(self, entities: Sequence[T]) -> None:
        """
        Append several entities.

        Args:
            entities: Non-empty sequence of entities

        Raises:
            EmptyBatchError: If the sequence is None or empty
        """
        pass

    @abstractmethod
    def find_all(self) -> list[T]:
        """
        List every stored entity in storage order.

        Returns:
            List of entities
        """
        pass

    @abstractmethod
    def find_by_id(self, id: ID) -> Optional[T]:
        """
        Get an entity by ID.

        Args:
            id: The entity identifier

        Returns:
            The entity if found, None otherwise

        Raises:
            MissingIdentifierError: If id is None
        """
        pass

    @abstractmethod
    def delete_by_id(self, id: ID) -> None:
        """
        Delete the first entity with this ID, if any.

        Args:
            id: The entity identifier

        Raises:
            MissingIdentifierError: If id is None
        """
        pass

    def count(self) -> int:
        """
        Count total entities.

        Returns:
            Total number of entities
        """
        return len(self.find_all())

    def exists(self, id: ID) -> bool:
        """
        Check if an entity exists.

        Args:
            id: The entity identifier

        Returns:
            True if exists, False otherwise
        """
        return self.find_by_id(id) is not None
