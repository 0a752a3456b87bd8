"""Data-quality checks for family tree records."""

from datetime import date
from typing import Sequence

import networkx as nx

from heritage_health.dates import age_from_birth_date
from heritage_health.graph import build_graph
from heritage_health.models import PersonRecord


def validate_tree(records: Sequence[PersonRecord], today: date | None = None) -> list[str]:
    """
    Validate the family tree for:
    - Cycles in parent-child links
    - Impossible ages (child born before parent)
    - Stored age disagreeing with the birth date
    - Checkups dated before birth

    Returns a list of warning messages. Nothing here blocks an edit.
    """
    warnings: list[str] = []
    by_id = {r.id: r for r in records}

    G = build_graph(records)

    # Check for cycles
    try:
        cycle = nx.find_cycle(G, orientation="original")
        cycle_names = [by_id[edge[0]].name for edge in cycle]
        warnings.append(f"Cycle detected in parent-child links: {cycle_names}")
    except nx.NetworkXNoCycle:
        pass

    # Check for impossible ages (child born before parent)
    for parent_id, child_id in G.edges():
        parent = by_id[parent_id]
        child = by_id[child_id]

        if parent.birth_date and child.birth_date:
            if child.birth_date < parent.birth_date:
                warnings.append(f"Impossible: {child.name} born before parent {parent.name}")
            # Check if parent was too young (< 12 years old)
            elif child.birth_date.year - parent.birth_date.year < 12:
                warnings.append(
                    f"Suspicious: {parent.name} was less than 12 years old "
                    f"when {child.name} was born"
                )

    for record in records:
        if record.birth_date and record.age != age_from_birth_date(record.birth_date, today):
            warnings.append(
                f"Inconsistent: {record.name} is recorded as {record.age} "
                f"but was born in {record.birth_date.year}"
            )
        if record.birth_date and record.last_checkup and record.last_checkup < record.birth_date:
            warnings.append(f"Impossible: {record.name} had a checkup before being born")

    return warnings
