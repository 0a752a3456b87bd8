import pytest

from heritage_health.errors import ValidationError
from heritage_health.models import PersonRecord
from heritage_health.relationships import Relationship, delta, position_for


@pytest.mark.parametrize(
    "relationship, expected",
    [
        ("parent", (-1, -1)),
        ("child", (1, 1)),
        ("sibling", (0, 0)),
        ("spouse", (0, 0)),
        ("grandparent", (-2, -2)),
        ("grandchild", (2, 2)),
        ("aunt", (0, -1)),
        ("uncle", (0, -1)),
        ("cousin", (1, 0)),
    ],
)
def test_delta_table(relationship, expected):
    assert delta(relationship) == expected


def test_delta_without_anchor_is_zero():
    assert delta(Relationship.GRANDPARENT, anchor=False) == (0, 0)


def test_parse_is_case_insensitive():
    assert Relationship.parse("Child") is Relationship.CHILD
    assert Relationship.parse(" AUNT ") is Relationship.AUNT
    assert Relationship.parse(Relationship.COUSIN) is Relationship.COUSIN


def test_parse_rejects_unknown_label():
    with pytest.raises(ValidationError) as excinfo:
        Relationship.parse("neighbour")
    assert excinfo.value.reason == "invalid_relationship"


def test_position_for_offsets_from_anchor():
    anchor = PersonRecord(name="Anchor", id=1, generation=-3, level=2)
    assert position_for("grandchild", anchor) == (-1, 4)
    assert position_for("aunt", anchor) == (-3, 1)


def test_position_for_without_anchor_is_origin():
    assert position_for("parent", None) == (0, 0)
