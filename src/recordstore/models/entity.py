"""
Entity base model with an explicit identifier capability.

Every type persisted by a RecordStore subclasses Entity and declares, at the
class level, the name of its store file and the field holding its identifier.
Nothing is discovered by inspecting instances.
"""

import re
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, create_model

from ..exceptions import EntityBindingError


class Entity(BaseModel):
    """
    Base class for persisted records.

    Subclasses set two class variables:

    - ``store_name``: stable name used as the store file stem
      (``<base_dir>/<store_name>.json``)
    - ``id_field``: name of the model field holding the identifier

    Example:
        class Book(Entity):
            store_name = "books"
            id_field = "isbn"

            isbn: str
            title: str
    """

    # NaN/Infinity and bytes must come back from the store file unchanged
    model_config = ConfigDict(
        ser_json_inf_nan="constants",
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    store_name: ClassVar[str] = ""
    id_field: ClassVar[str] = "id"

    def identifier(self) -> Any:
        """Return the value of this entity's identifier field."""
        return getattr(self, type(self).id_field)


class Record(Entity):
    """Schemaless entity: one identifier field, any other fields kept as-is."""

    model_config = ConfigDict(extra="allow")


_SEPARATORS = re.compile(r"[\\/]")


def bind_entity(entity_type: Any) -> type[Entity]:
    """
    Validate that a type can back a store.

    Args:
        entity_type: The class a store is about to be bound to

    Returns:
        The same class

    Raises:
        EntityBindingError: If the class is not an Entity, has no usable
            store_name, or its id_field is not a declared field
    """
    if not (isinstance(entity_type, type) and issubclass(entity_type, Entity)):
        raise EntityBindingError(
            f"{entity_type!r} is not an Entity subclass",
            context={"entity_type": repr(entity_type)},
        )

    name = entity_type.__name__
    store_name = entity_type.store_name
    if not store_name or not store_name.strip():
        raise EntityBindingError(
            f"{name} does not declare a store_name",
            context={"entity_type": name},
        )
    if _SEPARATORS.search(store_name) or store_name in (".", ".."):
        raise EntityBindingError(
            f"{name}.store_name must be a plain file stem, got {store_name!r}",
            context={"entity_type": name, "store_name": store_name},
        )

    if entity_type.id_field not in entity_type.model_fields:
        raise EntityBindingError(
            f"{name}.id_field {entity_type.id_field!r} is not a field of {name}",
            context={"entity_type": name, "id_field": entity_type.id_field},
        )

    return entity_type


def record_type(
    store_name: str,
    id_field: str = "id",
    description: Optional[str] = None,
) -> type[Record]:
    """
    Build a schemaless entity type at runtime.

    The returned class has a single required string identifier field and
    accepts any other fields, so it can open store files written by types
    that are not importable (the command line uses it this way).

    Args:
        store_name: Store file stem
        id_field: Name of the identifier field
        description: Optional description for the identifier field

    Returns:
        A Record subclass bound to ``store_name``
    """
    class_name = "".join(part.capitalize() for part in re.split(r"[^0-9a-zA-Z]+", store_name) if part)
    model = create_model(
        f"{class_name or 'Anonymous'}Record",
        __base__=Record,
        **{id_field: (str, Field(..., description=description or "Record identifier"))},
    )
    model.store_name = store_name
    model.id_field = id_field
    return model
