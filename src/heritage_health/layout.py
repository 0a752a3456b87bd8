"""Assign 2-D coordinates to family members for drawing."""

from dataclasses import dataclass, field
import logging
from typing import Sequence

from heritage_health.models import PersonRecord
from heritage_health.queries import depth_of, siblings_of

logger = logging.getLogger(__name__)

DEFAULT_UNIT_WIDTH = 200.0
DEFAULT_UNIT_HEIGHT = 100.0


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Edge:
    parent_id: int
    child_id: int
    start: Point  # parent position
    end: Point  # child position


@dataclass
class TreeLayout:
    nodes: dict[int, Point] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.nodes)


def _connect(nodes: dict[int, Point], records: Sequence[PersonRecord]) -> list[Edge]:
    return [
        Edge(r.parent_id, r.id, nodes[r.parent_id], nodes[r.id])
        for r in records
        if r.parent_id is not None and r.parent_id in nodes
    ]


def hierarchical_layout(
    records: Sequence[PersonRecord], width: float, height: float
) -> TreeLayout:
    """
    Place members on a canvas of the given size.

    - x spreads each sibling group evenly: width * (index + 1) / (group size + 1)
    - y is the depth below the member's root: height * (depth + 1) / (max depth + 2)

    Sibling groups are all members sharing a parent (roots form one group),
    ordered by creation.
    """
    records = list(records)
    if not records:
        return TreeLayout()

    depths = {r.id: depth_of(r, records) for r in records}
    deepest = max(depths.values())

    nodes: dict[int, Point] = {}
    for record in records:
        group = siblings_of(record, records, include_self=True)
        index = next(i for i, r in enumerate(group) if r.id == record.id)
        x = width * (index + 1) / (len(group) + 1)
        y = height * (depths[record.id] + 1) / (deepest + 2)
        nodes[record.id] = Point(x, y)

    layout = TreeLayout(nodes, _connect(nodes, records))
    logger.debug("Hierarchical layout for %d persons, max depth %d", len(nodes), deepest)
    return layout


def grid_layout(
    records: Sequence[PersonRecord],
    unit_width: float = DEFAULT_UNIT_WIDTH,
    unit_height: float = DEFAULT_UNIT_HEIGHT,
) -> TreeLayout:
    """Place members at (generation * unit_width, level * unit_height); may be negative."""
    records = list(records)
    nodes = {r.id: Point(r.generation * unit_width, r.level * unit_height) for r in records}
    return TreeLayout(nodes, _connect(nodes, records))
