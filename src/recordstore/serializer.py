"""
JSON serializer for entity collections.

Encodes a list of entities to a JSON array and decodes it back, validating
every element against the entity type.
"""

from typing import Generic, Optional, Sequence, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .exceptions import SerializationError
from .models.entity import Entity


T = TypeVar("T", bound=Entity)


class JsonSerializer(Generic[T]):
    """Encode/decode a sequence of one entity type as a JSON array."""

    def __init__(self, entity_type: type[T], indent: Optional[int] = None):
        """
        Initialize the serializer.

        Args:
            entity_type: Entity class of every element
            indent: JSON indentation (None for compact output)
        """
        self.entity_type = entity_type
        self.indent = indent
        self._adapter = TypeAdapter(list[entity_type])

    def encode(self, entities: Sequence[T]) -> str:
        """
        Serialize entities to a JSON array, all fields included.

        Raises:
            SerializationError: If a field value has no JSON form
        """
        try:
            return self._adapter.dump_json(list(entities), indent=self.indent).decode("utf-8")
        except PydanticSerializationError as e:
            raise SerializationError(
                f"Could not encode {self.entity_type.__name__} collection",
                context={"detail": str(e)},
            ) from e

    def decode(self, text: str) -> list[T]:
        """
        Parse a JSON array into entities, preserving order.

        Raises:
            SerializationError: If the text is not a JSON array of valid entities
        """
        try:
            return self._adapter.validate_json(text)
        except ValidationError as e:
            raise SerializationError(
                f"Invalid {self.entity_type.__name__} collection",
                context={"errors": e.error_count(), "detail": str(e)},
            ) from e
