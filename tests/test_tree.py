from datetime import date

import pytest

from heritage_health.errors import NotFoundError, ValidationError
from heritage_health.models import HealthStatus
from heritage_health.queries import siblings_of
from heritage_health.relationships import RELATIONSHIP_DELTAS, Relationship
from heritage_health.tree import FamilyTree

TODAY = date(2025, 6, 1)


def names(records):
    return [r.name for r in records]


def test_root_member_starts_at_origin(tree):
    alice = tree.create("Alice")
    assert (alice.generation, alice.level) == (0, 0)
    assert alice.parent_id is None
    assert alice.id is not None


@pytest.mark.parametrize("relationship", list(Relationship))
def test_create_applies_relationship_offset(tree, relationship):
    anchor = tree.create("Anchor")
    tree.update(anchor, generation=2, level=-1)
    member = tree.create("New", anchor=anchor.id, relationship=relationship)
    dgen, dlvl = RELATIONSHIP_DELTAS[relationship]
    assert (member.generation, member.level) == (2 + dgen, -1 + dlvl)
    assert member.parent_id == anchor.id


def test_alice_bob_carol_scenario(tree, store):
    alice = tree.create("Alice")
    bob = tree.create("Bob", anchor=alice, relationship="child")
    assert (bob.generation, bob.level) == (1, 1)
    assert names(tree.children_of(alice)) == ["Bob"]

    carol = tree.create("Carol", anchor=alice, relationship="child")
    assert (carol.generation, carol.level) == (1, 1)
    assert names(tree.children_of(alice)) == ["Bob", "Carol"]
    assert names(siblings_of(bob, tree.records())) == ["Carol"]

    tree.delete(alice)
    assert tree.get(bob.id).parent_id is None
    assert tree.get(carol.id).parent_id is None
    assert names(store.query_all()) == ["Bob", "Carol"]


@pytest.mark.parametrize("name", ["", "   ", None])
def test_create_rejects_empty_name(tree, store, name):
    with pytest.raises(ValidationError) as excinfo:
        tree.create(name)
    assert excinfo.value.reason == "empty_name"
    assert store.query_all() == []


def test_create_with_missing_anchor_is_not_found(tree, store):
    with pytest.raises(NotFoundError):
        tree.create("Orphan", anchor=99)
    assert store.query_all() == []


def test_create_rejects_unknown_relationship(tree):
    anchor = tree.create("Anchor")
    with pytest.raises(ValidationError):
        tree.create("X", anchor=anchor, relationship="roommate")


def test_create_keeps_age_and_birth_date_consistent(tree):
    by_age = tree.create("ByAge", age=30)
    assert by_age.birth_date == date(1995, 1, 1)

    by_birth = tree.create("ByBirth", birth_date="12 MAR 1960")
    assert by_birth.age == 65
    assert by_birth.birth_date == date(1960, 3, 12)

    both = tree.create("Both", age=5, birth_date=date(2000, 1, 1))
    assert both.age == 25


def test_create_stores_health_metadata(tree):
    member = tree.create(
        "Eve",
        conditions=["Asthma", "Diabetes", "Asthma"],
        medications=["Albuterol"],
        allergies=["Peanuts"],
        health_status="at_risk",
        notes="Family history of asthma",
        deceased=True,
        last_checkup="2024-02-01",
    )
    stored = tree.get(member.id)
    assert stored.conditions == ["Asthma", "Diabetes"]
    assert stored.medications == ["Albuterol"]
    assert stored.allergies == ["Peanuts"]
    assert stored.health_status is HealthStatus.AT_RISK
    assert stored.deceased is True
    assert stored.last_checkup == date(2024, 2, 1)
    assert stored.notes == "Family history of asthma"


def test_create_rejects_unknown_health_status(tree):
    with pytest.raises(ValidationError) as excinfo:
        tree.create("Eve", health_status="fine")
    assert excinfo.value.reason == "invalid_field"


def test_update_simple_fields(tree, family):
    updated = tree.update(
        family["bob"], name="Robert", health_status=HealthStatus.CRITICAL, generation=4, level=7
    )
    assert updated.name == "Robert"
    stored = tree.get(family["bob"].id)
    assert (stored.name, stored.health_status, stored.generation, stored.level) == (
        "Robert",
        HealthStatus.CRITICAL,
        4,
        7,
    )


def test_update_rejects_unknown_field(tree, family):
    with pytest.raises(ValidationError) as excinfo:
        tree.update(family["bob"], shoe_size=44)
    assert excinfo.value.reason == "invalid_field"


def test_update_rejects_empty_name_and_leaves_store_unchanged(tree, family):
    with pytest.raises(ValidationError):
        tree.update(family["bob"], name=" ", generation=9)
    assert tree.get(family["bob"].id).generation == 1


def test_reparent_moves_between_child_sets(tree, family):
    alice, bob, carol, dana = family["alice"], family["bob"], family["carol"], family["dana"]
    tree.update(dana, parent_id=carol.id)

    assert names(tree.children_of(bob)) == []
    assert names(tree.children_of(carol)) == ["Dana"]
    assert tree.get(dana.id).parent_id == carol.id
    # re-linking keeps the original position
    assert (tree.get(dana.id).generation, tree.get(dana.id).level) == (2, 2)

    tree.update(dana, parent_id=None)
    assert names(tree.children_of(carol)) == []
    assert tree.get(dana.id).parent_id is None
    assert names(tree.children_of(alice)) == ["Bob", "Carol"]


def test_reparent_accepts_record_as_new_parent(tree, family):
    tree.update(family["dana"], parent_id=family["carol"])
    assert tree.get(family["dana"].id).parent_id == family["carol"].id


def test_reparent_rejects_self(tree, family):
    bob = family["bob"]
    with pytest.raises(ValidationError) as excinfo:
        tree.update(bob, parent_id=bob.id)
    assert excinfo.value.reason == "self_reference"
    assert tree.get(bob.id).parent_id == family["alice"].id


def test_reparent_rejects_descendant(tree, family):
    alice, dana = family["alice"], family["dana"]
    with pytest.raises(ValidationError) as excinfo:
        tree.update(alice, parent_id=dana.id)
    assert excinfo.value.reason == "cycle"
    assert tree.get(alice.id).parent_id is None
    assert names(tree.children_of(dana)) == []


def test_reparent_to_missing_parent(tree, family):
    with pytest.raises(NotFoundError):
        tree.update(family["dana"], parent_id=1234)
    assert tree.get(family["dana"].id).parent_id == family["bob"].id


def test_update_age_recomputes_birth_date(tree, family):
    updated = tree.update(family["carol"], age=41)
    assert updated.birth_date == date(1984, 1, 1)
    updated = tree.update(family["carol"], birth_date="1990-07-04")
    assert updated.age == 35


def test_update_stale_record_is_not_found(tree, family):
    carol = family["carol"]
    tree.delete(carol)
    with pytest.raises(NotFoundError):
        tree.update(carol, name="Caroline")


def test_delete_detaches_children_and_parent(tree, family, store):
    alice, bob, carol, dana = family["alice"], family["bob"], family["carol"], family["dana"]
    orphans = tree.delete(bob)

    assert orphans == [dana.id]
    assert names(tree.children_of(alice)) == ["Carol"]
    assert tree.get(dana.id).parent_id is None
    assert tree.parent_of(dana) is None
    assert [r.id for r in store.query_all()] == [alice.id, carol.id, dana.id]


def test_delete_missing_is_not_found(tree):
    with pytest.raises(NotFoundError):
        tree.delete(42)


def test_ids_are_not_reused_after_delete(tree):
    first = tree.create("First")
    second = tree.create("Second")
    tree.delete(second)
    third = tree.create("Third")
    assert third.id not in (first.id, second.id)


def test_index_is_rebuilt_from_store(store, family):
    reopened = FamilyTree(store)
    assert names(reopened.children_of(family["alice"])) == ["Bob", "Carol"]
    assert names(reopened.children_of(family["bob"])) == ["Dana"]


def test_subscribers_hear_every_mutation(tree, store):
    events = []
    unsubscribe = store.subscribe(lambda kind, person_id: events.append((kind, person_id)))

    alice = tree.create("Alice")
    tree.update(alice, name="Alicia")
    tree.delete(alice)
    unsubscribe()
    tree.create("Bob")

    assert events == [("insert", alice.id), ("update", alice.id), ("delete", alice.id)]


def test_rejected_mutation_does_not_notify(tree, store, family):
    events = []
    store.subscribe(lambda kind, person_id: events.append(kind))
    with pytest.raises(ValidationError):
        tree.update(family["alice"], parent_id=family["bob"].id)
    assert events == []


def test_views_sharing_a_store_see_each_others_links(tree, store):
    other = FamilyTree(store, today=TODAY)
    a = tree.create("A")
    b = other.create("B")

    tree.update(b, parent_id=a.id)
    assert names(other.children_of(a)) == ["B"]
    with pytest.raises(ValidationError) as excinfo:
        other.update(a, parent_id=b.id)
    assert excinfo.value.reason == "cycle"
    assert store.get(a.id).parent_id is None

    other.delete(a)
    assert tree.parent_of(b) is None
    assert a.id not in tree.graph


@pytest.mark.parametrize("age", [3000, TODAY.year])
def test_age_beyond_the_calendar_is_rejected(tree, store, age):
    with pytest.raises(ValidationError) as excinfo:
        tree.create("Old", age=age)
    assert excinfo.value.reason == "invalid_field"
    assert store.query_all() == []


def test_update_rejects_out_of_range_age(tree, family):
    with pytest.raises(ValidationError):
        tree.update(family["alice"], age=3000)
    assert tree.get(family["alice"].id).age == 70


@pytest.mark.parametrize("field", ["generation", "level"])
def test_update_rejects_non_numeric_position(tree, family, field):
    with pytest.raises(ValidationError) as excinfo:
        tree.update(family["bob"], **{field: "up"})
    assert excinfo.value.reason == "invalid_field"
    assert getattr(tree.get(family["bob"].id), field) == 1
