from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime


class DestinationCreate(BaseModel):
    # Unknown keys (user_id, id, timestamps) are dropped, never persisted
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=255, description="Destination name")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in degrees")

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def coordinate_not_boolean(cls, value):
        # Lax float parsing would turn true/false into 1.0/0.0
        if isinstance(value, bool):
            raise ValueError("must be a number")
        return value

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class DestinationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    latitude: float
    longitude: float
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DeleteResult(BaseModel):
    success: bool
