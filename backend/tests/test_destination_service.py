"""Destination service — validation and ownership over the in-memory store.

Invariants:
    - Owner is always the caller, whatever the input says
    - Invalid input never reaches the store
    - Ownership mismatch on delete is indistinguishable from nonexistence
"""

import pytest

from app.core.errors import NotFoundError, ValidationError
from app.repositories.memory import InMemoryDestinationRepository
from app.schemas.destination import DestinationCreate
from app.services.destination_service import DestinationService


@pytest.fixture
def repository():
    return InMemoryDestinationRepository()


@pytest.fixture
def service(repository):
    return DestinationService(repository)


def test_create_assigns_id_and_caller_as_owner(service):
    destination = service.create_destination(
        42, {"name": "Home", "latitude": 37.7, "longitude": -122.4},
    )

    assert destination.id == 1
    assert destination.name == "Home"
    assert destination.latitude == 37.7
    assert destination.longitude == -122.4
    assert destination.user_id == 42


def test_create_ignores_client_supplied_owner(service):
    destination = service.create_destination(
        42, {"name": "Home", "latitude": 0, "longitude": 0, "user_id": 7, "id": 99},
    )

    assert destination.user_id == 42
    assert destination.id == 1


def test_create_accepts_parsed_schema(service):
    payload = DestinationCreate(name="Office", latitude=51.5, longitude=-0.12)

    destination = service.create_destination(3, payload)

    assert destination.name == "Office"
    assert destination.user_id == 3


def test_create_accepts_numeric_strings(service):
    destination = service.create_destination(
        1, {"name": "Lima", "latitude": "-12.05", "longitude": "-77.04"},
    )

    assert destination.latitude == -12.05
    assert destination.longitude == -77.04


@pytest.mark.parametrize("latitude,longitude", [
    (90, 180),
    (-90, -180),
    (0, 0),
])
def test_create_accepts_boundary_coordinates(service, latitude, longitude):
    destination = service.create_destination(
        1, {"name": "Edge", "latitude": latitude, "longitude": longitude},
    )

    assert destination.latitude == latitude
    assert destination.longitude == longitude


def test_create_accepts_name_of_255_chars(service):
    destination = service.create_destination(
        1, {"name": "x" * 255, "latitude": 0, "longitude": 0},
    )

    assert len(destination.name) == 255


@pytest.mark.parametrize("data,field", [
    ({"name": "Bad", "latitude": 91, "longitude": 0}, "latitude"),
    ({"name": "Bad", "latitude": 95, "longitude": 0}, "latitude"),
    ({"name": "Bad", "latitude": -90.5, "longitude": 0}, "latitude"),
    ({"name": "Bad", "latitude": 0, "longitude": 181}, "longitude"),
    ({"name": "Bad", "latitude": 0, "longitude": -180.01}, "longitude"),
    ({"name": "", "latitude": 0, "longitude": 0}, "name"),
    ({"name": "   ", "latitude": 0, "longitude": 0}, "name"),
    ({"name": "x" * 256, "latitude": 0, "longitude": 0}, "name"),
    ({"name": 12, "latitude": 0, "longitude": 0}, "name"),
    ({"name": "Bad", "latitude": "north", "longitude": 0}, "latitude"),
    ({"name": "Bad", "latitude": True, "longitude": 0}, "latitude"),
    ({"name": "Bad", "latitude": 0, "longitude": False}, "longitude"),
    ({"latitude": 0, "longitude": 0}, "name"),
    ({"name": "Bad", "longitude": 0}, "latitude"),
    ({"name": "Bad", "latitude": 0}, "longitude"),
])
def test_create_rejects_invalid_field(service, repository, data, field):
    with pytest.raises(ValidationError) as exc_info:
        service.create_destination(42, data)

    assert field in exc_info.value.errors
    assert field in exc_info.value.message
    assert len(repository) == 0


def test_create_reports_every_failing_field(service):
    with pytest.raises(ValidationError) as exc_info:
        service.create_destination(42, {"name": "", "latitude": 91, "longitude": 181})

    assert set(exc_info.value.errors) == {"name", "latitude", "longitude"}


def test_create_rejects_non_mapping_input(service, repository):
    with pytest.raises(ValidationError) as exc_info:
        service.create_destination(42, ["Home", 1, 2])

    assert "body" in exc_info.value.errors
    assert len(repository) == 0


def test_list_is_scoped_to_caller(service):
    a = service.create_destination(1, {"name": "A", "latitude": 1, "longitude": 1})
    b = service.create_destination(2, {"name": "B", "latitude": 2, "longitude": 2})

    assert [d.id for d in service.list_destinations(1)] == [a.id]
    assert [d.id for d in service.list_destinations(2)] == [b.id]


def test_list_empty_for_unknown_caller(service):
    assert service.list_destinations(404) == []


def test_delete_own_destination(service):
    destination = service.create_destination(1, {"name": "A", "latitude": 1, "longitude": 1})

    assert service.delete_destination(1, destination.id) is True
    assert service.list_destinations(1) == []


def test_delete_twice_raises_not_found(service):
    destination = service.create_destination(1, {"name": "A", "latitude": 1, "longitude": 1})
    service.delete_destination(1, destination.id)

    with pytest.raises(NotFoundError):
        service.delete_destination(1, destination.id)


def test_delete_other_users_destination_raises_not_found(service):
    destination = service.create_destination(2, {"name": "B", "latitude": 2, "longitude": 2})

    with pytest.raises(NotFoundError):
        service.delete_destination(1, destination.id)

    assert [d.id for d in service.list_destinations(2)] == [destination.id]


def test_delete_missing_raises_not_found(service):
    with pytest.raises(NotFoundError):
        service.delete_destination(1, 12345)


def test_delete_lost_race_raises_not_found(service, repository, monkeypatch):
    destination = service.create_destination(1, {"name": "A", "latitude": 1, "longitude": 1})
    monkeypatch.setattr(repository, "delete", lambda destination_id, owner_id: False)

    with pytest.raises(NotFoundError):
        service.delete_destination(1, destination.id)
