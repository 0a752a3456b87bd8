"""Visualization functions for family trees and family health statistics."""

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import pydot

from heritage_health.graph import build_graph
from heritage_health.layout import TreeLayout
from heritage_health.models import PersonRecord
from heritage_health.queries import age_histogram, condition_frequency


def _image_format(output_path: Path) -> str:
    ext = output_path.suffix.lower().lstrip(".")
    return ext if ext in ("png", "svg", "pdf") else "png"


def build_dot(records: Sequence[PersonRecord]) -> pydot.Dot:
    """Build a Graphviz top-to-bottom chart: one box per member, colored by health status."""
    G = build_graph(records)
    by_id = {r.id: r for r in records}

    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", "TB")  # Top-to-bottom (ancestors at top)
    P.set("nodesep", "0.4")  # Horizontal spacing between nodes
    P.set("ranksep", "0.6")  # Vertical spacing between ranks

    for node in G.nodes():
        record = by_id[node]
        label = f"{record.name}\nGen {record.generation} / Lvl {record.level}\n{record.health_status.label}"
        P.add_node(
            pydot.Node(
                str(node),
                label=label,
                shape="box",
                style="rounded,filled",
                fillcolor=record.health_color,
                fontsize="10",
            )
        )

    for parent, child in G.edges():
        P.add_edge(pydot.Edge(str(parent), str(child), color="darkgray"))

    return P


def plot_tree(records: Sequence[PersonRecord], output_path: Path):
    """Render the tree with Graphviz; the format follows the file extension (png, svg, pdf)."""
    P = build_dot(records)
    P.write(str(output_path), format=_image_format(output_path))
    print(f"Tree saved to {output_path}")


def plot_layout(
    layout: TreeLayout, records: Sequence[PersonRecord], output_path: Path | None = None
):
    """Draw precomputed node positions and parent-child edges with matplotlib.

    Canvas coordinates grow downwards, so the y axis is inverted.
    """
    by_id = {r.id: r for r in records}
    fig, ax = plt.subplots(figsize=(12, 9))

    for edge in layout.edges:
        ax.plot(
            [edge.start.x, edge.end.x],
            [edge.start.y, edge.end.y],
            color="gray",
            linewidth=1,
            zorder=1,
        )

    for person_id, point in layout.nodes.items():
        record = by_id[person_id]
        ax.scatter(point.x, point.y, s=900, color=record.health_color, zorder=2)
        ax.annotate(record.initial, (point.x, point.y), ha="center", va="center", color="white", zorder=3)
        ax.annotate(
            record.name,
            (point.x, point.y),
            xytext=(0, -24),
            textcoords="offset points",
            ha="center",
            fontsize=8,
        )

    ax.invert_yaxis()
    ax.set_axis_off()
    ax.set_title(f"Family Tree ({len(layout.nodes)} members)")
    fig.tight_layout()
    _finish(fig, output_path)


def plot_health_overview(records: Sequence[PersonRecord], output_path: Path | None = None):
    """Age distribution and the five most common conditions, side by side."""
    ages = age_histogram(records)
    conditions = condition_frequency(records)[:5]

    fig, (age_ax, cond_ax) = plt.subplots(1, 2, figsize=(14, 5))

    age_ax.bar([label for label, _ in ages], [count for _, count in ages], color="steelblue")
    age_ax.set_title("Age Distribution")
    age_ax.set_xlabel("Age Group")
    age_ax.set_ylabel("Count")

    # Most frequent condition on top
    labels = [label for label, _ in reversed(conditions)]
    counts = [count for _, count in reversed(conditions)]
    cond_ax.barh(labels, counts, color="seagreen")
    cond_ax.set_title("Common Health Conditions")
    cond_ax.set_xlabel("Count")

    fig.suptitle(f"Family Health Overview ({len(records)} members)")
    fig.tight_layout()
    _finish(fig, output_path)


def _finish(fig, output_path: Path | None):
    if output_path:
        fig.savefig(output_path, dpi=150, bbox_inches="tight")
        plt.close(fig)
        print(f"Chart saved to {output_path}")
    else:
        plt.show()
