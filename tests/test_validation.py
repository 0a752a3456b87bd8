from datetime import date

from heritage_health.models import PersonRecord
from heritage_health.validation import validate_tree

TODAY = date(2025, 6, 1)


def test_clean_tree_has_no_warnings(tree, family):
    assert validate_tree(tree.records(), today=TODAY) == []


def test_child_born_before_parent():
    records = [
        PersonRecord(name="Parent", id=1, age=45, birth_date=date(1980, 1, 1)),
        PersonRecord(name="Child", id=2, age=55, birth_date=date(1970, 1, 1), parent_id=1),
    ]
    assert validate_tree(records, today=TODAY) == ["Impossible: Child born before parent Parent"]


def test_parent_too_young():
    records = [
        PersonRecord(name="Parent", id=1, age=35, birth_date=date(1990, 1, 1)),
        PersonRecord(name="Child", id=2, age=30, birth_date=date(1995, 1, 1), parent_id=1),
    ]
    assert validate_tree(records, today=TODAY) == [
        "Suspicious: Parent was less than 12 years old when Child was born"
    ]


def test_cycle_is_reported():
    records = [
        PersonRecord(name="A", id=1, parent_id=2),
        PersonRecord(name="B", id=2, parent_id=1),
    ]
    warnings = validate_tree(records, today=TODAY)
    assert len(warnings) == 1
    assert warnings[0].startswith("Cycle detected in parent-child links")


def test_age_mismatch_and_early_checkup():
    records = [
        PersonRecord(
            name="Eve",
            id=1,
            age=10,
            birth_date=date(2000, 1, 1),
            last_checkup=date(1999, 5, 5),
        )
    ]
    assert validate_tree(records, today=TODAY) == [
        "Inconsistent: Eve is recorded as 10 but was born in 2000",
        "Impossible: Eve had a checkup before being born",
    ]
