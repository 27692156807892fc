from .base import DestinationRepository
from .memory import InMemoryDestinationRepository
from .sql import SqlDestinationRepository

__all__ = [
    "DestinationRepository",
    "InMemoryDestinationRepository",
    "SqlDestinationRepository",
]
