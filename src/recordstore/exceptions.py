"""Custom exceptions for recordstore"""

from typing import Optional, Any, Dict


class RecordStoreError(Exception):
    """Base exception for all store errors"""
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class EntityBindingError(RecordStoreError, TypeError):
    """Entity type cannot be bound to a store (bad store_name or id_field)"""
    pass


class PreconditionError(RecordStoreError, ValueError):
    """Caller passed an argument the operation refuses"""
    pass


class MissingIdentifierError(PreconditionError):
    """Lookup or delete called without an identifier"""
    pass


class EmptyBatchError(PreconditionError):
    """save_all called with no entities"""
    pass


class SerializationError(RecordStoreError):
    """Store file content could not be encoded or decoded"""
    pass
