"""NetworkX child index built from stored parent references."""

from typing import Iterable

import networkx as nx

from heritage_health.errors import NotFoundError
from heritage_health.models import PersonRecord


def _add_person_node(G: nx.DiGraph, record: PersonRecord):
    G.add_node(
        record.id,
        person_name=record.name,
        health_status=record.health_status.value,
        generation=record.generation,
        level=record.level,
    )


def build_graph(records: Iterable[PersonRecord]) -> nx.DiGraph:
    """Build a directed graph with an edge parent -> child for every parent reference.

    Parent references pointing at IDs that are not among `records` are ignored.
    """
    G = nx.DiGraph()

    records = list(records)
    for record in records:
        _add_person_node(G, record)

    # Add edges (parent -> child)
    for record in records:
        if record.parent_id is not None and record.parent_id in G:
            G.add_edge(record.parent_id, record.id)

    return G


def sync_person(G: nx.DiGraph, record: PersonRecord):
    """Bring one person's node and parent edge in line with a stored record."""
    _add_person_node(G, record)
    G.remove_edges_from(list(G.in_edges(record.id)))
    if record.parent_id is not None:
        G.add_edge(record.parent_id, record.id)


def children_ids(G: nx.DiGraph, person_id: int) -> list[int]:
    """Direct children of a person, in creation (ID) order."""
    return sorted(G.successors(person_id))


def would_create_cycle(G: nx.DiGraph, person_id: int, new_parent_id: int) -> bool:
    """True if making `new_parent_id` the parent of `person_id` closes a loop.

    That happens when the new parent is the person itself or one of its descendants.
    """
    if person_id == new_parent_id:
        return True
    if person_id not in G:
        return False
    return new_parent_id in nx.descendants(G, person_id)


def get_family_subgraph(G: nx.DiGraph, center_id: int, radius: int = 2) -> nx.DiGraph:
    """
    Extract a subgraph containing people within a given number of parent/child hops.

    Args:
        G: The full graph
        center_id: The person ID to center the subgraph on
        radius: Maximum distance from center (default 2)

    Returns:
        A subgraph containing only nodes within `radius` edges of `center_id`
    """
    if center_id not in G:
        raise NotFoundError(center_id)

    # Use undirected view so both parents and children count as one hop
    undirected = G.to_undirected()
    ego = nx.ego_graph(undirected, center_id, radius=radius)

    # Return the directed subgraph induced by these nodes
    return G.subgraph(ego.nodes()).copy()
