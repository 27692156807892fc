from sqlalchemy import Column, String, Float, BigInteger
from .base import BaseModel


class Destination(BaseModel):
    __tablename__ = "destination"

    name = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    # Owner, taken from the authenticated caller
    user_id = Column(BigInteger, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Destination id={self.id} name={self.name!r} user_id={self.user_id}>"
