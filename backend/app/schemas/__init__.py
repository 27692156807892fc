from .destination import DestinationCreate, DestinationResponse, DeleteResult

__all__ = [
    "DestinationCreate",
    "DestinationResponse",
    "DeleteResult",
]
