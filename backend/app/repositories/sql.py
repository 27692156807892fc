from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.destination import Destination


class SqlDestinationRepository:
    """SQLAlchemy-backed destination store. Each write commits on its own."""

    def __init__(self, db: Session):
        self.db = db

    def list_for_owner(self, owner_id: int) -> List[Destination]:
        return (
            self.db.query(Destination)
            .filter(Destination.user_id == owner_id)
            .order_by(Destination.id)
            .all()
        )

    def create(self, name: str, latitude: float, longitude: float, owner_id: int) -> Destination:
        destination = Destination(
            name=name,
            latitude=latitude,
            longitude=longitude,
            user_id=owner_id,
        )
        self.db.add(destination)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(destination)
        return destination

    def find_by_id_and_owner(self, destination_id: int, owner_id: int) -> Optional[Destination]:
        return self.db.query(Destination).filter(
            Destination.id == destination_id,
            Destination.user_id == owner_id,
        ).first()

    def delete(self, destination_id: int, owner_id: int) -> bool:
        """Delete in a single statement filtered by id and owner."""
        try:
            deleted = self.db.query(Destination).filter(
                Destination.id == destination_id,
                Destination.user_id == owner_id,
            ).delete(synchronize_session=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return deleted > 0
