from ygl_proxy.integrations.ygl.field_mapper import map_agents, map_landlords, map_lead, map_rentals
from ygl_proxy.schemas.requests import (
    AgentsSearchRequest,
    LandlordsSearchRequest,
    LeadCreateRequest,
    RentalsSearchRequest,
)


def test_agents_example_mapping():
    form = map_agents(AgentsSearchRequest(name="Jane"), "KEY")
    assert form == {"api_key": "KEY", "name": "Jane", "active_only": 1, "page": 1, "page_count": 50}


def test_agents_inactive_flag_and_id():
    form = map_agents(AgentsSearchRequest(id=12, active_only=False, page_size=10), "KEY")
    assert form["id"] == 12
    assert form["active_only"] == 0
    assert form["page_count"] == 10
    assert "name" not in form and "email" not in form


def test_rentals_mapping_omits_absent_fields():
    form = map_rentals(RentalsSearchRequest(), "KEY")
    assert form == {"api_key": "KEY", "include_photos": 1, "page": 1, "page_count": 50}


def test_rentals_mapping_full():
    body = RentalsSearchRequest(
        beds_min=1,
        rent_max=3500,
        neighborhoods=["Back Bay", "Fenway"],
        availability_start="2024-06-01",
        availability_end="2024-09-01",
        fee="no_fee",
        keyword="parking",
        order_by="rent_desc",
        include_photos=False,
        page=3,
    )
    form = map_rentals(body, "KEY")
    assert form == {
        "api_key": "KEY",
        "beds_min": 1,
        "rent_max": 3500,
        "keyword": "parking",
        "order_by": "rent_desc",
        "include_photos": 0,
        "page": 3,
        "page_count": 50,
        "fee": "no_fee",
        "availability_start": "2024-06-01",
        "availability_end": "2024-09-01",
        "neighborhoods": "Back Bay,Fenway",
    }


def test_rentals_any_fee_and_empty_neighborhoods_are_omitted():
    form = map_rentals(RentalsSearchRequest(fee="any", neighborhoods=[]), "KEY")
    assert "fee" not in form
    assert "neighborhoods" not in form


def test_landlords_ids_are_comma_joined():
    form = map_landlords(LandlordsSearchRequest(landlord_ids=[4, 8, 15], city="Boston"), "KEY")
    assert form == {"api_key": "KEY", "landlord_ids": "4,8,15", "city": "Boston", "page": 1, "page_count": 50}


def test_lead_mapping():
    lead = LeadCreateRequest(first_name="Jane", last_name="Doe", email="jane.doe@yahoo.com", phone="555-0100")
    form = map_lead(lead, "KEY")
    assert form == {
        "api_key": "KEY",
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane.doe@yahoo.com",
        "phone": "555-0100",
        "source": "Website",
    }


def test_api_key_is_always_present():
    assert map_agents(AgentsSearchRequest(), "")["api_key"] == ""
