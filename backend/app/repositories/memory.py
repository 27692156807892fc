import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional

from app.models.destination import Destination


class InMemoryDestinationRepository:
    """Thread-safe, dict-backed destination store."""

    def __init__(self):
        self._lock = threading.Lock()
        self._records: Dict[int, Destination] = {}
        self._next_id = 1

    def list_for_owner(self, owner_id: int) -> List[Destination]:
        with self._lock:
            return [
                record for _, record in sorted(self._records.items())
                if record.user_id == owner_id
            ]

    def create(self, name: str, latitude: float, longitude: float, owner_id: int) -> Destination:
        with self._lock:
            destination = Destination(
                id=self._next_id,
                name=name,
                latitude=latitude,
                longitude=longitude,
                user_id=owner_id,
                created_at=datetime.now(timezone.utc),
            )
            self._records[destination.id] = destination
            self._next_id += 1
            return destination

    def find_by_id_and_owner(self, destination_id: int, owner_id: int) -> Optional[Destination]:
        with self._lock:
            record = self._records.get(destination_id)
            if record is None or record.user_id != owner_id:
                return None
            return record

    def delete(self, destination_id: int, owner_id: int) -> bool:
        with self._lock:
            record = self._records.get(destination_id)
            if record is None or record.user_id != owner_id:
                return False
            del self._records[destination_id]
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
