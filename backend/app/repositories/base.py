from typing import List, Optional, Protocol

from app.models.destination import Destination


class DestinationRepository(Protocol):
    """Storage contract for destinations; every lookup is scoped to an owner."""

    def list_for_owner(self, owner_id: int) -> List[Destination]: ...

    def create(self, name: str, latitude: float, longitude: float, owner_id: int) -> Destination: ...

    def find_by_id_and_owner(self, destination_id: int, owner_id: int) -> Optional[Destination]: ...

    def delete(self, destination_id: int, owner_id: int) -> bool: ...
