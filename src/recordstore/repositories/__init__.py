"""
recordstore Repositories

Data access layer implementing the repository pattern.
"""

from .base import Repository
from .file_repository import RecordStore

__all__ = [
    "Repository",
    "RecordStore",
]
