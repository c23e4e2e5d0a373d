from records import (
    CandidateRecord,
    ReferenceRecord,
    candidate_from_dict,
    candidate_to_dict,
    clean_value,
    reference_from_dict,
)


def test_clean_value_maps_empty_markers_to_none():
    assert clean_value("") is None
    assert clean_value("  ") is None
    assert clean_value("\\N") is None
    assert clean_value(" LAX ") == "LAX"
    assert clean_value(12) == 12


def test_candidate_from_pipeline_dict_keeps_extra_fields():
    record = candidate_from_dict({
        "airport_code": "LAX",
        "airport_name": "Los Angeles International Airport",
        "city": "Los Angeles",
        "country": "United States",
        "icao_code": "",
        "size": "Large",
        "icao_source": "not_found",
    })
    assert record.iata_code == "LAX"
    assert record.name == "Los Angeles International Airport"
    assert record.icao_code is None
    assert record.attributes == {"size": "Large", "icao_source": "not_found"}


def test_candidate_to_dict_writes_identity_over_attributes():
    record = CandidateRecord(name="Gatwick", iata_code="LGW", attributes={"airport_code": "OLD", "size": "Large"})
    data = candidate_to_dict(record)
    assert data["airport_code"] == "LGW"
    assert data["size"] == "Large"
    assert data["icao_code"] is None


def test_attributes_do_not_affect_equality():
    assert CandidateRecord(name="A", attributes={"x": 1}) == CandidateRecord(name="A")


def test_reference_from_dict_ignores_unknown_keys():
    record = reference_from_dict({"id": 1, "name": "Goroka Airport", "iata_code": "GKA", "icao_code": "\\N", "extra": 5})
    assert record == ReferenceRecord(id=1, name="Goroka Airport", iata_code="GKA")
