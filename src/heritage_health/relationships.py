"""Maps the relationship chosen for a new family member to a position offset."""

from enum import Enum

from heritage_health.errors import ValidationError
from heritage_health.models import PersonRecord


class Relationship(str, Enum):
    PARENT = "parent"
    CHILD = "child"
    SIBLING = "sibling"
    SPOUSE = "spouse"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"
    AUNT = "aunt"
    UNCLE = "uncle"
    COUSIN = "cousin"

    @classmethod
    def parse(cls, label: "str | Relationship") -> "Relationship":
        """Accept an enum member or its label in any case ("Child", "aunt")."""
        if isinstance(label, cls):
            return label
        try:
            return cls(str(label).strip().lower())
        except ValueError:
            choices = ", ".join(r.value for r in cls)
            raise ValidationError(
                "invalid_relationship", f"Unknown relationship {label!r} (expected one of: {choices})"
            ) from None


# (generation delta, level delta) relative to the anchor
RELATIONSHIP_DELTAS: dict[Relationship, tuple[int, int]] = {
    Relationship.PARENT: (-1, -1),
    Relationship.CHILD: (1, 1),
    Relationship.SIBLING: (0, 0),
    Relationship.SPOUSE: (0, 0),
    Relationship.GRANDPARENT: (-2, -2),
    Relationship.GRANDCHILD: (2, 2),
    Relationship.AUNT: (0, -1),
    Relationship.UNCLE: (0, -1),
    Relationship.COUSIN: (1, 0),
}


def delta(relationship: "str | Relationship", anchor: bool = True) -> tuple[int, int]:
    """Return the (generation, level) offset for a relationship.

    Without an anchor there is nothing to be relative to, so the offset is (0, 0).
    """
    if not anchor:
        return (0, 0)
    return RELATIONSHIP_DELTAS[Relationship.parse(relationship)]


def position_for(
    relationship: "str | Relationship", anchor: PersonRecord | None
) -> tuple[int, int]:
    """Compute the (generation, level) of a new record placed relative to `anchor`."""
    if anchor is None:
        return (0, 0)
    dgen, dlvl = delta(relationship)
    return (anchor.generation + dgen, anchor.level + dlvl)
