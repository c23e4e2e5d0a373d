import pytest

from validate_icao_codes import compute_stats, country_fits, expected_regions, validate


def test_expected_regions_prefers_two_letter_prefix():
    assert expected_regions("LUKK") == ["Moldova"]
    assert expected_regions("klax") == ["United States"]
    assert expected_regions("QQQQ") is None


@pytest.mark.parametrize("country, regions, fits", [
    ("Moldova", ["Moldova"], True),
    ("united states", ["United States"], True),
    ("UAE", ["United Arab Emirates", "UAE"], True),
    ("Brazil", ["South America", "Brazil"], True),
    ("France", ["Germany"], False),
    (None, ["Germany"], False),
])
def test_country_fits(country, regions, fits):
    assert country_fits(country, regions) is fits


def test_validate_applies_fixes_and_flags_llm_codes():
    airports = [
        {"airport_code": "KIV", "airport_name": "Chișinău", "country": "Moldova", "icao_code": "KKIV", "icao_source": "llm"},
        {"airport_code": "CDG", "airport_name": "Charles de Gaulle", "country": "France", "icao_code": "EDCG", "icao_source": "llm", "confidence": "low"},
        {"airport_code": "FRA", "airport_name": "Frankfurt", "country": "Germany", "icao_code": "EDDF", "icao_source": "llm"},
        {"airport_code": "XYZ", "airport_name": "Somewhere", "country": "France", "icao_code": "EDXY", "icao_source": "openflights"},
        {"airport_code": "AAA", "airport_name": "Unknown", "country": "France", "icao_code": None, "icao_source": "not_found"},
    ]
    validated, suspicious, corrections = validate(airports)

    assert corrections == 1
    assert validated[0]["icao_code"] == "LUKK"
    assert validated[0]["icao_source"] == "manual_correction"
    assert airports[0]["icao_code"] == "KKIV"
    assert suspicious == [{
        "airport": "CDG (Charles de Gaulle)",
        "country": "France",
        "icao": "EDCG",
        "expected_region": "Germany",
        "confidence": "low",
    }]

    stats = compute_stats(validated, suspicious, corrections)
    assert stats["total"] == 5
    assert stats["with_icao"] == 4
    assert stats["by_source"]["manual_correction"] == 1
    assert stats["by_source"]["llm"] == 2
    assert stats["suspicious_count"] == 1


def test_already_correct_code_is_not_counted():
    airports = [{"airport_code": "KVP", "icao_code": "LUTR", "icao_source": "manual_correction", "country": "Moldova"}]
    validated, suspicious, corrections = validate(airports)
    assert corrections == 0
    assert validated == airports
    assert suspicious == []
