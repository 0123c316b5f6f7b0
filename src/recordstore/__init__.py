"""
recordstore - File-backed record persistence

A small persistence layer for local applications:
- One JSON file per entity type, no database server
- Generic CRUD store keyed by an explicit identifier field
- Whole-collection read/rewrite on every mutation
"""

__version__ = "1.0.0"

from .exceptions import (
    RecordStoreError,
    EntityBindingError,
    PreconditionError,
    MissingIdentifierError,
    EmptyBatchError,
    SerializationError,
)
from .filesystem import FileSystem
from .models import Entity, Record, bind_entity, record_type
from .repositories import Repository, RecordStore
from .serializer import JsonSerializer

__all__ = [
    "Entity",
    "Record",
    "bind_entity",
    "record_type",
    "Repository",
    "RecordStore",
    "JsonSerializer",
    "FileSystem",
    "RecordStoreError",
    "EntityBindingError",
    "PreconditionError",
    "MissingIdentifierError",
    "EmptyBatchError",
    "SerializationError",
]
