"""
Persistence for the tracker: snapshot stores and the repository over them.
"""

from tracker.db.repository import NotFound, Repository
from tracker.db.store import InMemoryStore, JSONFileStore, PersistenceFailure, Store

__all__ = [
    "NotFound",
    "Repository",
    "Store",
    "JSONFileStore",
    "InMemoryStore",
    "PersistenceFailure",
]
