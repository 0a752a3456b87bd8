"""Derived views over the full set of family members."""

from bisect import bisect_right
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Sequence

from heritage_health.catalog import MEDICATIONS_BY_CONDITION
from heritage_health.errors import ValidationError
from heritage_health.models import PersonRecord


@dataclass(frozen=True)
class AgeBucket:
    label: str
    low: int  # inclusive lower bound; the bucket runs up to the next bucket's bound


DEFAULT_AGE_BUCKETS: tuple[AgeBucket, ...] = (
    AgeBucket("0-12", 0),
    AgeBucket("13-19", 13),
    AgeBucket("20-39", 20),
    AgeBucket("40-59", 40),
    AgeBucket("60-79", 60),
    AgeBucket("80+", 80),
)


@dataclass(frozen=True)
class FamilyInsights:
    family_size: int
    most_common_condition: str | None
    average_age: float


def siblings_of(
    record: PersonRecord, records: Iterable[PersonRecord], include_self: bool = False
) -> list[PersonRecord]:
    """Records sharing `record`'s parent (all roots when it has none), in creation order."""
    group = [r for r in records if r.parent_id == record.parent_id]
    if not include_self:
        group = [r for r in group if r.id != record.id]
    return sorted(group, key=lambda r: r.id)


def depth_of(record: PersonRecord, records: Iterable[PersonRecord]) -> int:
    """Number of parent hops from `record` up to a root."""
    by_id = {r.id: r for r in records}
    depth = 0
    seen = {record.id}
    current = record
    while current.parent_id is not None and current.parent_id in by_id:
        if current.parent_id in seen:
            raise ValidationError("cycle", f"Parent chain of {record.name} loops back on itself")
        seen.add(current.parent_id)
        current = by_id[current.parent_id]
        depth += 1
    return depth


def max_depth(records: Sequence[PersonRecord]) -> int:
    return max((depth_of(r, records) for r in records), default=0)


def age_histogram(
    records: Iterable[PersonRecord], buckets: Sequence[AgeBucket] = DEFAULT_AGE_BUCKETS
) -> list[tuple[str, int]]:
    """Count members per age bucket.

    Every record lands in exactly one bucket: ages below the first bound count
    in the first bucket, so the counts always add up to the number of records.
    """
    if not buckets:
        raise ValueError("At least one age bucket is required")
    ordered = sorted(buckets, key=lambda b: b.low)
    bounds = [b.low for b in ordered]
    counts = [0] * len(ordered)
    for record in records:
        index = max(bisect_right(bounds, record.age) - 1, 0)
        counts[index] += 1
    return [(bucket.label, count) for bucket, count in zip(ordered, counts)]


def condition_frequency(records: Iterable[PersonRecord]) -> list[tuple[str, int]]:
    """Occurrences of each health condition, most frequent first (ties by name)."""
    counts = Counter(condition for r in records for condition in r.conditions)
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def family_insights(records: Sequence[PersonRecord]) -> FamilyInsights:
    frequency = condition_frequency(records)
    average = sum(r.age for r in records) / max(1, len(records))
    return FamilyInsights(
        family_size=len(records),
        most_common_condition=frequency[0][0] if frequency else None,
        average_age=round(average, 1),
    )


def search_by_name(records: Iterable[PersonRecord], text: str) -> list[PersonRecord]:
    needle = (text or "").strip().casefold()
    if not needle:
        return list(records)
    return [r for r in records if needle in r.name.casefold()]


def suggested_medications(conditions: Iterable[str]) -> list[str]:
    """Medications commonly prescribed for any of the given conditions."""
    meds = {med for condition in conditions for med in MEDICATIONS_BY_CONDITION.get(condition, [])}
    return sorted(meds)
