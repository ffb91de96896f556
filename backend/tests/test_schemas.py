import pytest
from pydantic import ValidationError

from findride.schemas.distance import Coordinates, DistanceQuery, LocationInput
from findride.utils.errors import InputError


def test_distance_query_trims():
    query = DistanceQuery.from_form("  Cape Town ", "Durban\n")
    assert query.origin == "Cape Town"
    assert query.destination == "Durban"


@pytest.mark.parametrize("origin,destination", [(None, "B"), ("A", "  "), ("", "")])
def test_distance_query_requires_both(origin, destination):
    with pytest.raises(InputError) as exc:
        DistanceQuery.from_form(origin, destination)
    assert exc.value.user_message == "Please fill in both locations."


def test_coordinates_parse():
    coords = Coordinates.parse("-33.9249, 18.4241")
    assert coords == Coordinates(lat=-33.9249, lng=18.4241)
    assert coords.display() == ("-33.924900", "18.424100")
    assert Coordinates.parse("Cape Town") is None
    assert Coordinates.parse("Cape Town, South Africa") is None
    assert Coordinates.parse("95,10") is None


def test_location_input_exactly_one_source():
    assert LocationInput(text=" Durban ").as_query() == "Durban"
    assert LocationInput(coordinates=Coordinates(lat=1.5, lng=2.25)).as_query() == "1.5,2.25"
    with pytest.raises(ValidationError):
        LocationInput()
    with pytest.raises(ValidationError):
        LocationInput(text="Durban", coordinates=Coordinates(lat=0, lng=0))


@pytest.mark.parametrize("origin,destination", [("  ", "Durban"), ("Cape Town", "\n")])
def test_distance_query_constructor_rejects_blank(origin, destination):
    with pytest.raises(InputError):
        DistanceQuery(origin=origin, destination=destination)
