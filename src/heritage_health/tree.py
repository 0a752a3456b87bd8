"""Create, edit and delete family members while keeping parent/child links consistent."""

import dataclasses
from datetime import MINYEAR, date
import logging
from typing import Any, Iterable

import networkx as nx

from heritage_health.database import FamilyStore
from heritage_health.dates import parse_date_string, reconcile_age
from heritage_health.errors import NotFoundError, ValidationError
from heritage_health.graph import build_graph, children_ids, sync_person, would_create_cycle
from heritage_health.models import HealthStatus, PersonRecord, normalize_labels
from heritage_health.relationships import Relationship, position_for

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "health_status",
        "generation",
        "level",
        "parent_id",
        "age",
        "birth_date",
        "deceased",
        "last_checkup",
        "notes",
        "conditions",
        "medications",
        "allergies",
    }
)

PersonRef = PersonRecord | int


def _person_id(ref: PersonRef) -> int | None:
    return ref.id if isinstance(ref, PersonRecord) else ref


def _clean_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("empty_name", "Name must not be empty")
    return name


def _coerce_status(value: "HealthStatus | str") -> HealthStatus:
    try:
        return HealthStatus(value)
    except ValueError:
        raise ValidationError("invalid_field", f"Unknown health status {value!r}") from None


def _coerce_int(field_name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("invalid_field", f"{field_name} must be a whole number, got {value!r}") from None


def _coerce_age(value: Any, today: date | None) -> int | None:
    if value is None:
        return None
    age = _coerce_int("age", value)
    # The derived birth date (January 1st) must still be a valid calendar date
    if (today or date.today()).year - age < MINYEAR:
        raise ValidationError("invalid_field", f"Age {age} is out of range")
    return age


def _coerce_date(field_name: str, value: "date | str | None") -> date | None:
    if value is None or isinstance(value, date):
        return value
    parsed = parse_date_string(value)
    if parsed is None:
        raise ValidationError("invalid_field", f"Cannot parse {field_name} {value!r}")
    return parsed


class FamilyTree:
    """Tree mutation service over a `FamilyStore`.

    Only parent references are persisted. `self.graph` is an index with an edge
    parent -> child for each of them, kept in step with every write the store
    reports, including writes made through other views of the same store.
    Generation and level are fixed when a member is created and are not
    recomputed when an ancestor's values change later.
    """

    def __init__(self, store: FamilyStore, today: date | None = None):
        self.store = store
        self.today = today
        self.graph: nx.DiGraph = build_graph(store.query_all())
        self.unsubscribe = store.subscribe(self._on_store_change)

    def _on_store_change(self, kind: str, person_id: int):
        if kind == "delete":
            if person_id in self.graph:
                self.graph.remove_node(person_id)
            return
        sync_person(self.graph, self.store.get(person_id))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, ref: PersonRef) -> PersonRecord:
        person_id = _person_id(ref)
        if person_id is None:
            raise NotFoundError(person_id)
        return self.store.get(person_id)

    def records(self) -> list[PersonRecord]:
        return self.store.query_all()

    def children_of(self, ref: PersonRef) -> list[PersonRecord]:
        person = self.get(ref)
        if person.id not in self.graph:
            return []
        return [self.store.get(child_id) for child_id in children_ids(self.graph, person.id)]

    def parent_of(self, ref: PersonRef) -> PersonRecord | None:
        person = self.get(ref)
        if person.parent_id is None:
            return None
        return self.store.get(person.parent_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(
        self,
        name: str,
        anchor: PersonRef | None = None,
        relationship: "Relationship | str" = Relationship.CHILD,
        *,
        age: int | None = None,
        birth_date: "date | str | None" = None,
        deceased: bool = False,
        last_checkup: "date | str | None" = None,
        notes: str = "",
        conditions: Iterable[str] = (),
        medications: Iterable[str] = (),
        allergies: Iterable[str] = (),
        health_status: "HealthStatus | str" = HealthStatus.HEALTHY,
    ) -> PersonRecord:
        """Add a family member placed relative to `anchor`.

        The anchor (if any) becomes the new member's parent whatever the
        relationship is; the relationship only decides generation and level.
        """
        name = _clean_name(name)
        relationship = Relationship.parse(relationship)
        anchor_record = self.get(anchor) if anchor is not None else None
        generation, level = position_for(relationship, anchor_record)
        age, birth_date = reconcile_age(
            _coerce_age(age, self.today), _coerce_date("birth_date", birth_date), self.today
        )

        record = PersonRecord(
            name=name,
            age=age,
            birth_date=birth_date,
            deceased=bool(deceased),
            last_checkup=_coerce_date("last_checkup", last_checkup),
            notes=notes or "",
            conditions=normalize_labels(conditions),
            medications=normalize_labels(medications),
            allergies=normalize_labels(allergies),
            health_status=_coerce_status(health_status),
            generation=generation,
            level=level,
            parent_id=anchor_record.id if anchor_record else None,
        )
        self.store.insert(record)

        logger.info(
            "Created %s (id=%s) as %s of %s at generation %d, level %d",
            record.name,
            record.id,
            relationship.value,
            anchor_record.name if anchor_record else "nobody",
            generation,
            level,
        )
        return record

    def update(self, ref: PersonRef, **patch: Any) -> PersonRecord:
        """Apply field changes to a member.

        Changing `parent_id` moves the member from the old parent's children to
        the new parent's; it never renumbers generation or level. The whole
        patch is checked before anything is written.
        """
        unknown = set(patch) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                "invalid_field", f"Cannot update field(s): {', '.join(sorted(unknown))}"
            )

        current = self.get(ref)
        changes: dict[str, Any] = {}

        if "name" in patch:
            changes["name"] = _clean_name(patch["name"])
        if "health_status" in patch:
            changes["health_status"] = _coerce_status(patch["health_status"])
        for key in ("generation", "level"):
            if key in patch:
                changes[key] = _coerce_int(key, patch[key])
        if "deceased" in patch:
            changes["deceased"] = bool(patch["deceased"])
        if "notes" in patch:
            changes["notes"] = patch["notes"] or ""
        if "last_checkup" in patch:
            changes["last_checkup"] = _coerce_date("last_checkup", patch["last_checkup"])
        for key in ("conditions", "medications", "allergies"):
            if key in patch:
                changes[key] = normalize_labels(patch[key])
        if "age" in patch or "birth_date" in patch:
            changes["age"], changes["birth_date"] = reconcile_age(
                _coerce_age(patch.get("age"), self.today),
                _coerce_date("birth_date", patch.get("birth_date")),
                self.today,
            )

        if "parent_id" in patch:
            new_parent_id = patch["parent_id"]
            if new_parent_id is not None:
                new_parent_id = _person_id(new_parent_id)
                self._check_new_parent(current, new_parent_id)
            changes["parent_id"] = new_parent_id

        updated = dataclasses.replace(current, **changes)
        self.store.update(updated)

        if updated.parent_id != current.parent_id:
            logger.info(
                "Moved %s (id=%s) from parent %s to parent %s",
                updated.name,
                updated.id,
                current.parent_id,
                updated.parent_id,
            )
        logger.info("Updated %s (id=%s): %s", updated.name, updated.id, ", ".join(sorted(changes)))
        return updated

    def _check_new_parent(self, person: PersonRecord, new_parent_id: int):
        if new_parent_id == person.id:
            logger.warning("Rejected making %s (id=%s) its own parent", person.name, person.id)
            raise ValidationError("self_reference", f"{person.name} cannot be their own parent")
        if not self.store.exists(new_parent_id):
            raise NotFoundError(new_parent_id)
        if would_create_cycle(self.graph, person.id, new_parent_id):
            logger.warning(
                "Rejected parent %s for %s (id=%s): it is a descendant",
                new_parent_id,
                person.name,
                person.id,
            )
            raise ValidationError(
                "cycle",
                f"Person ID {new_parent_id} is a descendant of {person.name} "
                "and cannot become their parent",
            )

    def delete(self, ref: PersonRef) -> list[int]:
        """Remove a member; its children become roots.

        Returns the IDs of the children that were detached.
        """
        person = self.get(ref)
        orphan_ids = self.store.delete(person.id)
        logger.info(
            "Deleted %s (id=%s); %d children are now roots", person.name, person.id, len(orphan_ids)
        )
        return orphan_ids
