import pytest

from matching import NO_MATCH, MatchSettings, MatchStrategy, build_indexes, match
from records import CandidateRecord, ReferenceRecord


def ref(id, name, iata=None, icao=None, city=None, country=None):
    return ReferenceRecord(id=id, name=name, iata_code=iata, icao_code=icao, city=city, country=country)


def find(candidate, references, settings=None):
    by_name, by_iata = build_indexes(references)
    return match(candidate, by_name, by_iata, settings)


def test_exact_name_prefers_same_country():
    usa = ref(1, "Springfield Airport", "SPI", "KSPI", "Springfield", "United States")
    aus = ref(2, "Springfield Airport", "SPX", "YSPX", "Springfield", "Australia")
    result = find(CandidateRecord(name="Springfield Airport", country="Australia"), [usa, aus])
    assert result.strategy is MatchStrategy.EXACT_NAME_COUNTRY
    assert result.record is aus


def test_exact_name_falls_back_to_first_in_bucket():
    first = ref(1, "Springfield Airport", country="United States")
    second = ref(2, "Springfield Airport", country="Australia")
    result = find(CandidateRecord(name="Springfield Airport", country="Canada"), [first, second])
    assert result.strategy is MatchStrategy.EXACT_NAME
    assert result.record is first


def test_exact_name_beats_iata():
    by_code = ref(1, "Something Else", "LAX")
    by_name = ref(2, "Los Angeles International Airport", "XXX", country="United States")
    result = find(CandidateRecord(name="Los Angeles International Airport", iata_code="LAX", country="USA"), [by_code, by_name])
    assert result.strategy is MatchStrategy.EXACT_NAME
    assert result.record is by_name


def test_same_country_exact_name_beats_iata():
    by_code = ref(1, "Some Other Field", "LAX", "KXXX", "Elsewhere", "United States")
    by_name = ref(2, "Los Angeles International Airport", "XXX", "KLAX", "Los Angeles", "United States")
    candidate = CandidateRecord(name="Los Angeles International Airport", iata_code="LAX", country="United States")
    result = find(candidate, [by_code, by_name])
    assert result.strategy is MatchStrategy.EXACT_NAME_COUNTRY
    assert result.record is by_name


def test_partial_name_requires_same_country():
    reference = ref(1, "Heathrow London Airport", "LHR", "EGLL", "London", "United Kingdom")
    candidate = CandidateRecord(name="London Heathrow", country="United Kingdom")
    result = find(candidate, [reference])
    assert result.strategy is MatchStrategy.PARTIAL_NAME
    assert result.record is reference

    elsewhere = CandidateRecord(name="London Heathrow", country="Canada")
    assert find(elsewhere, [reference]) == NO_MATCH


def test_partial_name_needs_enough_overlapping_tokens():
    reference = ref(1, "London Gatwick Airport", country="United Kingdom")
    # three qualifying tokens need two hits; only "london" overlaps
    assert find(CandidateRecord(name="London Heathrow Terminal", country="United Kingdom"), [reference]) == NO_MATCH
    # a single token needs only one hit
    result = find(CandidateRecord(name="Gatwick", country="United Kingdom"), [reference])
    assert result.strategy is MatchStrategy.PARTIAL_NAME


def test_partial_name_matches_by_substring():
    reference = ref(1, "Ben Gurion International Airport", country="Israel")
    result = find(CandidateRecord(name="Gurion", country="Israel"), [reference])
    assert result.strategy is MatchStrategy.PARTIAL_NAME


def test_short_names_skip_partial_matching():
    reference = ref(1, "Nice Cote d'Azur Airport", "NCE", country="France")
    assert find(CandidateRecord(name="Nic", country="France"), [reference]) == NO_MATCH


def test_partial_settings_are_configurable():
    reference = ref(1, "London Gatwick Airport", country="United Kingdom")
    candidate = CandidateRecord(name="London Heathrow Terminal", country="United Kingdom")
    lenient = MatchSettings(max_required_overlap=1)
    assert find(candidate, [reference], lenient).strategy is MatchStrategy.PARTIAL_NAME


def test_iata_is_last_resort():
    reference = ref(1, "Chișinău International Airport", "KIV", "LUKK", "Chișinău", "Moldova")
    result = find(CandidateRecord(name="Chisinau Airport", iata_code="kiv", country="Moldova"), [reference])
    assert result.strategy is MatchStrategy.IATA
    assert result.record is reference


def test_iata_index_last_write_wins():
    old = ref(1, "Old Field", "ABC")
    new = ref(2, "New Field", "ABC")
    by_name, by_iata = build_indexes([old, new])
    assert by_iata["ABC"] is new


def test_empty_name_and_no_iata_is_no_match():
    reference = ref(1, "Airport", "AAA")
    result = find(CandidateRecord(name="", iata_code=None), [reference])
    assert result == NO_MATCH
    assert not result


def test_empty_name_key_does_not_hit_empty_bucket():
    # "International Airport" normalizes to "", as does the candidate name
    reference = ref(1, "International Airport", "INT")
    assert find(CandidateRecord(name="Airport"), [reference]) == NO_MATCH


def test_indexes_are_read_only():
    by_name, by_iata = build_indexes([ref(1, "Gatwick Airport", "LGW")])
    with pytest.raises(TypeError):
        by_name["x"] = ()
    with pytest.raises(TypeError):
        by_iata["LGW"] = None
    assert by_name["gatwick"] == (by_iata["LGW"],)


def test_required_overlap():
    settings = MatchSettings()
    assert settings.required_overlap(1) == 1
    assert settings.required_overlap(2) == 1
    assert settings.required_overlap(3) == 2
    assert settings.required_overlap(10) == 2


def test_non_string_fields_do_not_break_indexing():
    broken = ReferenceRecord(id=1, name=4711, iata_code=99)
    gatwick = ref(2, "Gatwick Airport", "LGW", country="United Kingdom")
    by_name, by_iata = build_indexes([broken, gatwick])
    assert list(by_name) == ["gatwick"]
    assert list(by_iata) == ["LGW"]


def test_non_string_candidate_fields_fall_through():
    gatwick = ref(1, "Gatwick Airport", "LGW", country="United Kingdom")
    assert find(CandidateRecord(name=123, iata_code=456), [gatwick]) == NO_MATCH
    result = find(CandidateRecord(name=123, iata_code="lgw"), [gatwick])
    assert result.strategy is MatchStrategy.IATA
