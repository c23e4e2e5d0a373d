"""Compare a candidate with its matched reference and decide what to correct."""

from dataclasses import dataclass, replace
from typing import Iterable, Union

from matching import MatchResult, MatchSettings, MatchStrategy, build_indexes, match
from normalize import normalize_name
from records import CandidateRecord, ReferenceRecord


@dataclass(frozen=True)
class FieldChange:
    field: str
    old: str | None
    new: str | None

    def __str__(self) -> str:
        return f"{self.field}: {self.old} → {self.new}"


@dataclass(frozen=True)
class NoCorrectionNeeded:
    record: CandidateRecord
    strategy: MatchStrategy
    reference: ReferenceRecord


@dataclass(frozen=True)
class Corrected:
    original: CandidateRecord
    updated: CandidateRecord
    changes: tuple[FieldChange, ...]
    strategy: MatchStrategy
    reference: ReferenceRecord


@dataclass(frozen=True)
class Unverified:
    record: CandidateRecord


Outcome = Union[NoCorrectionNeeded, Corrected, Unverified]


def diff_fields(candidate: CandidateRecord, reference: ReferenceRecord) -> list[FieldChange]:
    """Codes and city by exact value, name by normalized key."""
    changes = []
    if candidate.iata_code != reference.iata_code:
        changes.append(FieldChange("IATA", candidate.iata_code, reference.iata_code))
    if candidate.icao_code != reference.icao_code:
        changes.append(FieldChange("ICAO", candidate.icao_code, reference.icao_code))
    if candidate.city != reference.city:
        changes.append(FieldChange("City", candidate.city, reference.city))
    if normalize_name(candidate.name) != normalize_name(reference.name):
        changes.append(FieldChange("Name", candidate.name, reference.name))
    return changes


def reconcile(candidate: CandidateRecord, result: MatchResult) -> Outcome:
    if not result:
        return Unverified(candidate)

    reference = result.record
    changes = diff_fields(candidate, reference)
    if not changes:
        return NoCorrectionNeeded(candidate, result.strategy, reference)

    # Any mismatch replaces the whole identity, never a mix of both sources
    updated = replace(
        candidate,
        iata_code=reference.iata_code,
        icao_code=reference.icao_code,
        name=reference.name,
        city=reference.city,
        country=reference.country,
    )
    return Corrected(candidate, updated, tuple(changes), result.strategy, reference)


def reconcile_all(
    candidates: Iterable[CandidateRecord],
    references: Iterable[ReferenceRecord],
    settings: MatchSettings | None = None,
) -> list[Outcome]:
    """One outcome per candidate, in input order."""
    by_name, by_iata = build_indexes(references)
    return [reconcile(c, match(c, by_name, by_iata, settings)) for c in candidates]
