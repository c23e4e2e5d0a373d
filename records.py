"""Airport record shapes and their flat-JSON representation."""

from dataclasses import asdict, dataclass, field, fields
from typing import Any

# Keys owned by CandidateRecord when reading/writing pipeline dicts
CANDIDATE_KEYS = ("airport_name", "airport_code", "icao_code", "city", "country")


@dataclass(frozen=True)
class CandidateRecord:
    """An airport as known before reconciliation."""

    name: str | None = None
    iata_code: str | None = None
    icao_code: str | None = None
    city: str | None = None
    country: str | None = None
    # Pass-through fields from earlier stages (runway data, icao_source, ...)
    attributes: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class ReferenceRecord:
    """One OpenFlights airport. Geographic fields are carried through untouched."""

    id: int | None = None
    name: str | None = None
    city: str | None = None
    country: str | None = None
    iata_code: str | None = None
    icao_code: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    altitude: int | None = None
    timezone: float | None = None
    dst: str | None = None
    tz_database: str | None = None
    type: str | None = None
    source: str | None = None


def clean_value(value: Any) -> Any:
    """Map the empty markers used by the source data ("" and \\N) to None."""
    if isinstance(value, str):
        value = value.strip()
        if value == "" or value == "\\N":
            return None
    return value


def candidate_from_dict(data: dict) -> CandidateRecord:
    attributes = {k: v for k, v in data.items() if k not in CANDIDATE_KEYS}
    return CandidateRecord(
        name=clean_value(data.get("airport_name")),
        iata_code=clean_value(data.get("airport_code")),
        icao_code=clean_value(data.get("icao_code")),
        city=clean_value(data.get("city")),
        country=clean_value(data.get("country")),
        attributes=attributes,
    )


def candidate_identity(record: CandidateRecord) -> dict:
    """The five identity fields in pipeline-dict form."""
    return {
        "airport_code": record.iata_code,
        "icao_code": record.icao_code,
        "airport_name": record.name,
        "city": record.city,
        "country": record.country,
    }


def candidate_to_dict(record: CandidateRecord) -> dict:
    return {**record.attributes, **candidate_identity(record)}


_REFERENCE_FIELDS = tuple(f.name for f in fields(ReferenceRecord))


def reference_from_dict(data: dict) -> ReferenceRecord:
    return ReferenceRecord(**{k: clean_value(data.get(k)) for k in _REFERENCE_FIELDS})


def reference_to_dict(record: ReferenceRecord) -> dict:
    return asdict(record)
