from docannotate.storage.base import AnnotationStore
from docannotate.storage.memory import MemoryStore
from docannotate.storage.sql import SqlStore

__all__ = [
    "AnnotationStore",
    "MemoryStore",
    "SqlStore",
]
