import json

import pytest

import find_airports
from find_airports import airports_by_country, parse_airport_response
from reshape_airports import flatten_summary, load_airports, sort_airports


def test_parse_airport_response_uppercases_code():
    text = '{"hasAirport": true, "airportCode": "cdg", "airportName": "Charles de Gaulle Airport", "city": "Paris", "country": "France"}'
    assert parse_airport_response(text) == {
        "country": "France",
        "city": "Paris",
        "airport_code": "CDG",
        "airport_name": "Charles de Gaulle Airport",
    }


@pytest.mark.parametrize("text", [
    '{"hasAirport": false}',
    '{"hasAirport": "true", "airportCode": "CDG", "airportName": "X"}',
    '{"hasAirport": true, "airportCode": "CDG"}',
    '{"hasAirport": true, "airportName": "Somewhere Airport"}',
    "I am not sure.",
    None,
])
def test_parse_airport_response_rejects_incomplete(text):
    assert parse_airport_response(text) is None


def test_airports_by_country_groups_in_order():
    airports = [
        {"country": "France", "city": "Paris", "airport_code": "CDG", "airport_name": "Charles de Gaulle"},
        {"country": "Japan", "city": "Tokyo", "airport_code": "HND", "airport_name": "Haneda"},
        {"country": "France", "city": "Nice", "airport_code": "NCE", "airport_name": "Nice Côte d'Azur"},
    ]
    grouped = airports_by_country(airports)
    assert list(grouped) == ["France", "Japan"]
    assert [a["airport_code"] for a in grouped["France"]] == ["CDG", "NCE"]
    assert "country" not in grouped["France"][0]


def test_run_resumes_from_checkpoint_and_fills_location(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cities = tmp_path / "cities.json"
    cities.write_text(json.dumps([{"country": "France", "cities": ["Paris", "Nice"]}]), encoding="utf-8")
    (tmp_path / "pipeline_checkpoint.json").write_text(json.dumps({
        "find_airports": {
            "results": {"France|Paris": {"country": "France", "city": "Paris", "airport_code": "CDG", "airport_name": "Charles de Gaulle"}},
            "model": "m",
        }
    }), encoding="utf-8")

    prompts = []

    def fake_call(client, prompt, model, provider):
        prompts.append(prompt)
        return '{"hasAirport": true, "airportCode": "nce", "airportName": "Nice Côte d\'Azur Airport"}', model

    monkeypatch.setattr(find_airports, "get_client", lambda provider: object())
    monkeypatch.setattr(find_airports, "call_llm", fake_call)

    airports = find_airports.run(
        "openai", "gpt-x", cities, tmp_path / "found.json", tmp_path / "summary.json", delay=0
    )

    assert len(prompts) == 1
    assert '"Nice"' in prompts[0]
    assert [a["airport_code"] for a in airports] == ["CDG", "NCE"]
    assert airports[1]["city"] == "Nice"
    assert airports[1]["country"] == "France"
    summary = json.loads((tmp_path / "summary.json").read_text(encoding="utf-8"))
    assert summary["total_cities_processed"] == 2
    assert summary["total_airports_found"] == 2


def test_flatten_summary():
    summary = {"airports_by_country": {"France": [{"city": "Paris", "airport_code": "CDG", "airport_name": "CDG Airport"}]}}
    assert flatten_summary(summary) == [
        {"city": "Paris", "airport_code": "CDG", "airport_name": "CDG Airport", "country": "France"}
    ]
    assert flatten_summary({}) == []


def test_sort_airports_by_country_then_city():
    data = [
        {"country": "japan", "city": "Tokyo"},
        {"country": "France", "city": "paris"},
        {"country": "France", "city": "Lyon"},
        {"country": None, "city": None},
    ]
    assert [(a["country"], a["city"]) for a in sort_airports(data)] == [
        (None, None), ("France", "Lyon"), ("France", "paris"), ("japan", "Tokyo"),
    ]


def test_load_airports_falls_back_to_summary(tmp_path):
    found = tmp_path / "found.json"
    summary = tmp_path / "summary.json"
    found.write_text("[]", encoding="utf-8")
    summary.write_text(json.dumps({"airports_by_country": {"Japan": [{"city": "Tokyo", "airport_code": "HND", "airport_name": "Haneda"}]}}), encoding="utf-8")
    assert load_airports(found, summary)[0]["country"] == "Japan"
    assert load_airports(tmp_path / "a.json", tmp_path / "b.json") == []
