from corrections_report import _render_html, compute_stats

RECORDS = [
    {
        "airport_code": "LAX",
        "airport_name": "Los Angeles International Airport",
        "correction_status": "corrected",
        "match_type": "exact_name",
        "corrections": ["ICAO: XXXX → KLAX"],
        "original_data": {"airport_code": "LAX", "airport_name": "Los Angeles <Intl>"},
    },
    {
        "airport_code": "KIV",
        "airport_name": "Chișinău International Airport",
        "correction_status": "corrected",
        "match_type": "iata",
        "corrections": ["ICAO: None → LUKK", "City: Chisinau → Chișinău", "Name: Chisinau Airport → Chișinău International Airport"],
        "original_data": {"airport_code": "KIV", "airport_name": "Chisinau Airport"},
    },
    {"airport_code": "CDG", "correction_status": "no_correction_needed", "match_type": "exact_name_country"},
    {"airport_code": "QQQ", "correction_status": "no_match", "match_type": "none", "unverified": True},
]


def test_compute_stats():
    stats = compute_stats(RECORDS)
    assert stats["total"] == 4
    assert stats["per_status"]["corrected"] == {"count": 2, "pct": 50.0}
    assert stats["per_status"]["no_match"]["count"] == 1
    by_strategy = {s["strategy"]: s for s in stats["strategies"]}
    assert by_strategy["exact_name"]["corrected"] == 1
    assert by_strategy["exact_name_country"]["unchanged"] == 1
    assert by_strategy["partial_name"]["count"] == 0
    assert by_strategy["none"]["count"] == 1
    assert stats["fields"] == [("ICAO", 2), ("City", 1), ("Name", 1)]
    assert [r["airport_code"] for r in stats["samples"]] == ["LAX", "KIV"]


def test_sample_size_limits_samples():
    assert len(compute_stats(RECORDS, sample_size=1)["samples"]) == 1


def test_render_html_escapes_values():
    page = _render_html(compute_stats(RECORDS))
    assert page.startswith("<!DOCTYPE html>")
    assert "Los Angeles &lt;Intl&gt;" in page
    assert "Exact Name Country" in page
    assert "ICAO: XXXX → KLAX" in page
