from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from typing import List

from app.core.database import get_db
from app.core.errors import ValidationError
from app.auth.middleware import check_api_rate_limit, CurrentUser
from app.repositories.sql import SqlDestinationRepository
from app.schemas.destination import DestinationCreate, DestinationResponse, DeleteResult
from app.services.destination_service import DestinationService

router = APIRouter(prefix="/destinations", tags=["destinations"])


def get_destination_service(db: Session = Depends(get_db)) -> DestinationService:
    """Build a service bound to the request's database session."""
    return DestinationService(SqlDestinationRepository(db))


@router.get("", response_model=List[DestinationResponse])
def list_destinations(
    service: DestinationService = Depends(get_destination_service),
    current_user: CurrentUser = Depends(check_api_rate_limit)
):
    """Get all destinations owned by the current user."""
    return service.list_destinations(current_user.user_id)


@router.post(
    "",
    response_model=DestinationResponse,
    status_code=status.HTTP_201_CREATED,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": DestinationCreate.model_json_schema()}},
        }
    },
)
async def create_destination(
    request: Request,
    service: DestinationService = Depends(get_destination_service),
    current_user: CurrentUser = Depends(check_api_rate_limit)
):
    """Create a new destination owned by the current user.

    The body is read here rather than declared as a parameter so that
    authentication is settled before any of it is decoded.
    """
    try:
        destination_data = await request.json()
    except ValueError:
        raise ValidationError({"body": ["body: JSON decode error"]})

    # The service does blocking database work
    return await run_in_threadpool(
        service.create_destination, current_user.user_id, destination_data
    )


@router.delete(
    "/{destination_id}",
    response_model=DeleteResult,
    responses={404: {"model": DeleteResult, "description": "Not found or not owned"}},
)
def delete_destination(
    destination_id: int,
    service: DestinationService = Depends(get_destination_service),
    current_user: CurrentUser = Depends(check_api_rate_limit)
):
    """Delete a destination owned by the current user."""
    service.delete_destination(current_user.user_id, destination_id)
    return DeleteResult(success=True)
