"""
recordstore Domain Models

Entity base class and type binding helpers.
"""

from .entity import (
    Entity,
    Record,
    bind_entity,
    record_type,
)

__all__ = [
    "Entity",
    "Record",
    "bind_entity",
    "record_type",
]
