"""
Find the OpenFlights record that corresponds to a candidate airport.

Strategies run in a fixed order: exact name (same country preferred),
partial name (same country required), then IATA code.
"""

import enum
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple

from config import (
    PARTIAL_MATCH_MAX_REQUIRED_OVERLAP,
    PARTIAL_MATCH_MIN_LENGTH,
    PARTIAL_MATCH_MIN_TOKEN_LENGTH,
)
from normalize import normalize_country, normalize_name
from records import CandidateRecord, ReferenceRecord

NameIndex = Mapping[str, tuple[ReferenceRecord, ...]]
IataIndex = Mapping[str, ReferenceRecord]


class MatchStrategy(enum.Enum):
    EXACT_NAME_COUNTRY = "exact_name_country"
    EXACT_NAME = "exact_name"
    PARTIAL_NAME = "partial_name"
    IATA = "iata"


@dataclass(frozen=True)
class MatchResult:
    record: ReferenceRecord | None = None
    strategy: MatchStrategy | None = None

    def __bool__(self) -> bool:
        return self.record is not None


NO_MATCH = MatchResult()


@dataclass(frozen=True)
class MatchSettings:
    min_partial_length: int = PARTIAL_MATCH_MIN_LENGTH
    min_token_length: int = PARTIAL_MATCH_MIN_TOKEN_LENGTH
    max_required_overlap: int = PARTIAL_MATCH_MAX_REQUIRED_OVERLAP

    def required_overlap(self, token_count: int) -> int:
        return min(self.max_required_overlap, math.ceil(token_count / 2))


DEFAULT_SETTINGS = MatchSettings()


class ReferenceIndexes(NamedTuple):
    by_name: NameIndex
    by_iata: IataIndex


def _iata_key(code) -> str:
    """Uppercased code, or "" for anything that is not a non-empty string."""
    return code.strip().upper() if isinstance(code, str) else ""


def build_indexes(references: Iterable[ReferenceRecord]) -> ReferenceIndexes:
    """Index references by normalized name (buckets keep input order) and by IATA code."""
    by_name: dict[str, list[ReferenceRecord]] = {}
    by_iata: dict[str, ReferenceRecord] = {}
    for record in references:
        key = normalize_name(record.name)
        if key:
            by_name.setdefault(key, []).append(record)
        code = _iata_key(record.iata_code)
        if code:
            # Last write wins
            by_iata[code] = record
    return ReferenceIndexes(
        by_name=MappingProxyType({k: tuple(v) for k, v in by_name.items()}),
        by_iata=MappingProxyType(by_iata),
    )


def _tokens(key: str, min_length: int) -> list[str]:
    return [t for t in key.split(" ") if len(t) >= min_length]


def _same_country(records: Iterable[ReferenceRecord], country_key: str) -> ReferenceRecord | None:
    for record in records:
        if normalize_country(record.country) == country_key:
            return record
    return None


def _partial_name_match(
    name_key: str,
    country_key: str,
    by_name: NameIndex,
    settings: MatchSettings,
) -> ReferenceRecord | None:
    if len(name_key) < settings.min_partial_length:
        return None
    words = _tokens(name_key, settings.min_token_length)
    if not words:
        return None
    needed = settings.required_overlap(len(words))

    for ref_key, records in by_name.items():
        ref_words = _tokens(ref_key, settings.min_token_length)
        common = sum(1 for w in words if any(r in w or w in r for r in ref_words))
        if common < needed:
            continue
        # Partial hits must agree on country
        record = _same_country(records, country_key)
        if record is not None:
            return record
    return None


def match(
    candidate: CandidateRecord,
    by_name: NameIndex,
    by_iata: IataIndex,
    settings: MatchSettings | None = None,
) -> MatchResult:
    """Exact name, then partial name, then IATA code; first hit wins."""
    settings = settings or DEFAULT_SETTINGS
    name_key = normalize_name(candidate.name)
    country_key = normalize_country(candidate.country)

    if name_key:
        bucket = by_name.get(name_key)
        if bucket:
            record = _same_country(bucket, country_key)
            if record is not None:
                return MatchResult(record, MatchStrategy.EXACT_NAME_COUNTRY)
            return MatchResult(bucket[0], MatchStrategy.EXACT_NAME)

        record = _partial_name_match(name_key, country_key, by_name, settings)
        if record is not None:
            return MatchResult(record, MatchStrategy.PARTIAL_NAME)

    code = _iata_key(candidate.iata_code)
    if code:
        record = by_iata.get(code)
        if record is not None:
            return MatchResult(record, MatchStrategy.IATA)

    return NO_MATCH
