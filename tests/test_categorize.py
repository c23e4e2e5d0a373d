import pytest

from categorize_airports import categorize_airport, categorize_by_length, group_by_category, parse_runway_response


def test_parse_runway_response():
    text = '{"runwayLengthMeters": 3685, "confidence": "high"}'
    assert parse_runway_response(text) == {"length_meters": 3685, "confidence": "high"}


def test_parse_runway_accepts_numeric_strings():
    assert parse_runway_response('{"runwayLengthMeters": "2500.7"}') == {"length_meters": 2500, "confidence": "unknown"}


@pytest.mark.parametrize("length", [50, 9000])
def test_implausible_length_gets_low_confidence(length):
    text = f'{{"runwayLengthMeters": {length}, "confidence": "high"}}'
    assert parse_runway_response(text) == {"length_meters": length, "confidence": "low"}


@pytest.mark.parametrize("text", [
    '{"runwayLengthMeters": null}',
    '{"runwayLengthMeters": "long"}',
    '{"runwayLengthMeters": true}',
    '{"confidence": "high"}',
    "no idea",
])
def test_parse_runway_rejects_missing_lengths(text):
    assert parse_runway_response(text) is None


@pytest.mark.parametrize("length, size", [
    (500, "Small"),
    (799, "Small"),
    (800, "Medium"),
    (1799, "Medium"),
    (1800, "Large"),
    (4000, "Large"),
])
def test_categorize_by_length(length, size):
    assert categorize_by_length(length)["size"] == size


def test_categorize_airport_adds_runway_fields():
    airport = {"airport_code": "LAX", "airport_name": "Los Angeles International Airport"}
    result = categorize_airport(airport, {"length_meters": 3685, "confidence": "high"})
    assert result["airport_code"] == "LAX"
    assert result["size"] == "Large"
    assert result["category"] == "large"
    assert result["runway_length_feet"] == 12090
    assert result["confidence"] == "high"


def test_categorize_airport_without_runway_is_unknown():
    result = categorize_airport({"airport_code": "XXX"}, None)
    assert result == {"airport_code": "XXX", "size": "Unknown", "runway_length_meters": None, "confidence": "none"}


def test_group_by_category():
    airports = [
        categorize_airport({"airport_code": "A"}, {"length_meters": 600, "confidence": "high"}),
        categorize_airport({"airport_code": "B"}, {"length_meters": 3000, "confidence": "high"}),
        categorize_airport({"airport_code": "C"}, None),
    ]
    groups = group_by_category(airports)
    assert [a["airport_code"] for a in groups["small"]] == ["A"]
    assert groups["medium"] == []
    assert [a["airport_code"] for a in groups["large"]] == ["B"]
    assert [a["airport_code"] for a in groups["unknown"]] == ["C"]
