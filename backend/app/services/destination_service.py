import logging
from typing import Any, List, Mapping, Union

from pydantic import ValidationError as PydanticValidationError

from app.core.errors import NotFoundError, ValidationError
from app.models.destination import Destination
from app.repositories.base import DestinationRepository
from app.schemas.destination import DestinationCreate

logger = logging.getLogger(__name__)


class DestinationService:
    """Owner-scoped destination operations on top of a repository.

    The caller id is always passed in explicitly; it comes from the
    verified bearer token, never from the request body.
    """

    def __init__(self, repository: DestinationRepository):
        self.repository = repository

    def list_destinations(self, caller_id: int) -> List[Destination]:
        """Return every destination owned by the caller."""
        return self.repository.list_for_owner(caller_id)

    def create_destination(
        self,
        caller_id: int,
        data: Union[DestinationCreate, Mapping[str, Any]],
    ) -> Destination:
        """Validate input and persist a destination owned by the caller."""
        payload = self._validate(data)

        destination = self.repository.create(
            name=payload.name,
            latitude=payload.latitude,
            longitude=payload.longitude,
            owner_id=caller_id,
        )
        logger.info(
            "Destination created",
            extra={"destination_id": destination.id, "user_id": caller_id},
        )
        return destination

    def delete_destination(self, caller_id: int, destination_id: int) -> bool:
        """Delete a destination the caller owns.

        Raises NotFoundError both when the record does not exist and when it
        belongs to someone else.
        """
        destination = self.repository.find_by_id_and_owner(destination_id, caller_id)
        if destination is None:
            logger.info(
                "Destination not found for delete",
                extra={"destination_id": destination_id, "user_id": caller_id},
            )
            raise NotFoundError()

        # A concurrent delete may have won the race since the lookup
        if not self.repository.delete(destination_id, caller_id):
            raise NotFoundError()

        logger.info(
            "Destination deleted",
            extra={"destination_id": destination_id, "user_id": caller_id},
        )
        return True

    @staticmethod
    def _validate(data: Union[DestinationCreate, Mapping[str, Any]]) -> DestinationCreate:
        if isinstance(data, DestinationCreate):
            return data
        if not isinstance(data, Mapping):
            raise ValidationError({"body": ["body: must be a JSON object"]})
        try:
            return DestinationCreate.model_validate(dict(data))
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic_errors(exc.errors()) from exc
