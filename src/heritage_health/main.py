"""
Command-line front end for the family health tree.

1) Add, edit and delete family members (stored in SQLite).
2) List and inspect members, with their parent and children.
3) Show family health statistics: age distribution and common conditions.
4) Compute node coordinates for drawing, in hierarchical or grid mode.
5) Check the tree for data-quality problems.
6) Plot the tree and the health overview.
7) Browse the cultural practice and health resource catalogs.
"""

import argparse
import logging
from pathlib import Path
import sys

from heritage_health.catalog import (
    COMMON_ALLERGIES,
    COMMON_CONDITIONS,
    PRACTICE_CATEGORIES,
    filter_practices,
    filter_resources,
)
from heritage_health.config import Settings, load_settings
from heritage_health.database import FamilyStore
from heritage_health.errors import HeritageError
from heritage_health.graph import get_family_subgraph
from heritage_health.layout import grid_layout, hierarchical_layout
from heritage_health.models import HealthCategory, HealthStatus, PersonRecord
from heritage_health.plotting import plot_health_overview, plot_layout, plot_tree
from heritage_health.preferences import LANGUAGES, load_preferences, save_preferences
from heritage_health.queries import (
    age_histogram,
    condition_frequency,
    family_insights,
    search_by_name,
    suggested_medications,
)
from heritage_health.relationships import Relationship
from heritage_health.tree import FamilyTree
from heritage_health.validation import validate_tree


# ============================================================================
# Output helpers
# ============================================================================


def format_member(record: PersonRecord) -> str:
    line = f"[{record.id}] {record.name} - {record.health_status.label}, Generation: {record.generation}, Level: {record.level}"
    if record.deceased:
        line += " (deceased)"
    return line


def print_member_details(tree: FamilyTree, record: PersonRecord):
    print(format_member(record))
    print(f"  Status: {record.health_status.label} ({record.health_icon})")
    print(f"  Age: {record.age}" + (f" (born {record.birth_date.isoformat()})" if record.birth_date else ""))
    if record.last_checkup:
        print(f"  Last checkup: {record.last_checkup.isoformat()}")
    parent = tree.parent_of(record)
    if parent:
        print(f"  Child of: {parent.name}")
    children = tree.children_of(record)
    if children:
        print(f"  Children: {', '.join(c.name for c in children)}")
    for title, labels in (
        ("Conditions", record.conditions),
        ("Medications", record.medications),
        ("Allergies", record.allergies),
    ):
        if labels:
            print(f"  {title}: {', '.join(labels)}")
    if record.notes:
        print(f"  Notes: {record.notes}")


# ============================================================================
# Commands
# ============================================================================


def cmd_add(args, tree: FamilyTree, settings: Settings) -> int:
    record = tree.create(
        args.name,
        anchor=args.anchor,
        relationship=args.relationship,
        age=args.age,
        birth_date=args.birth_date,
        deceased=args.deceased,
        last_checkup=args.last_checkup,
        notes=args.notes,
        conditions=args.condition,
        medications=args.medication,
        allergies=args.allergy,
        health_status=args.status or HealthStatus.HEALTHY,
    )
    print(f"Added {format_member(record)}")
    return 0


def cmd_edit(args, tree: FamilyTree, settings: Settings) -> int:
    patch = {}
    for key in ("name", "generation", "level", "age", "birth_date", "last_checkup", "notes"):
        value = getattr(args, key)
        if value is not None:
            patch[key] = value
    if args.status is not None:
        patch["health_status"] = args.status
    if args.deceased is not None:
        patch["deceased"] = args.deceased
    if args.no_parent:
        patch["parent_id"] = None
    elif args.parent is not None:
        patch["parent_id"] = args.parent
    for key in ("conditions", "medications", "allergies"):
        value = getattr(args, key)
        if value is not None:
            patch[key] = value

    if not patch:
        print("Nothing to change")
        return 0
    record = tree.update(args.id, **patch)
    print(f"Updated {format_member(record)}")
    return 0


def cmd_delete(args, tree: FamilyTree, settings: Settings) -> int:
    person = tree.get(args.id)
    orphans = tree.delete(person)
    print(f"Deleted {person.name}")
    if orphans:
        print(f"  {len(orphans)} children are now at the top of their own branch")
    return 0


def cmd_list(args, tree: FamilyTree, settings: Settings) -> int:
    records = search_by_name(tree.records(), args.search or "")
    if not records:
        print("No family members found")
    by_id = {r.id: r for r in tree.records()}
    for record in records:
        print(format_member(record))
        parent = by_id.get(record.parent_id)
        if parent:
            print(f"    Child of: {parent.name}")
    return 0


def cmd_show(args, tree: FamilyTree, settings: Settings) -> int:
    print_member_details(tree, tree.get(args.id))
    return 0


def cmd_stats(args, tree: FamilyTree, settings: Settings) -> int:
    records = tree.records()
    insights = family_insights(records)

    print("Age Distribution")
    for label, count in age_histogram(records):
        print(f"  {label:>6}: {count}")

    print("Common Health Conditions")
    frequency = condition_frequency(records)
    if not frequency:
        print("  None recorded")
    for label, count in frequency[:5]:
        print(f"  {label}: {count}")

    print("Key Insights")
    print(f"  Family Size: {insights.family_size} members")
    print(f"  Most Common Condition: {insights.most_common_condition or 'None'}")
    print(f"  Average Age: {insights.average_age:.1f} years")
    return 0


def cmd_layout(args, tree: FamilyTree, settings: Settings) -> int:
    records = tree.records()
    if args.mode == "grid":
        layout = grid_layout(records, settings.grid_unit_width, settings.grid_unit_height)
    else:
        width = args.width or settings.canvas_width
        height = args.height or settings.canvas_height
        layout = hierarchical_layout(records, width, height)

    by_id = {r.id: r for r in records}
    for person_id, point in layout.nodes.items():
        print(f"{by_id[person_id].name}: ({point.x:.1f}, {point.y:.1f})")
    for edge in layout.edges:
        print(f"{by_id[edge.parent_id].name} -> {by_id[edge.child_id].name}")

    if args.output:
        plot_layout(layout, records, args.output)
    return 0


def cmd_validate(args, tree: FamilyTree, settings: Settings) -> int:
    print("Validating tree...")
    warnings = validate_tree(tree.records())
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:10]:  # Show first 10 warnings
            print(f"    - {w}")
        if len(warnings) > 10:
            print(f"    ... and {len(warnings) - 10} more")
    else:
        print("  No validation issues found")
    return 0


def cmd_plot(args, tree: FamilyTree, settings: Settings) -> int:
    records = tree.records()
    if args.health:
        plot_health_overview(records, args.output)
        return 0

    if args.center is not None:
        subgraph = get_family_subgraph(tree.graph, args.center, args.radius)
        records = [r for r in records if r.id in subgraph]
    plot_tree(records, args.output)
    return 0


def cmd_practices(args, tree: FamilyTree, settings: Settings) -> int:
    for practice in filter_practices(args.search or "", args.category):
        print(f"{practice.name} ({practice.region}, {practice.category})")
        print(f"  {practice.description}")
        print(f"  Benefits: {practice.benefits}")
        print(f"  Considerations: {practice.considerations}")
    return 0


def cmd_resources(args, tree: FamilyTree, settings: Settings) -> int:
    for resource in filter_resources(args.search or "", args.category):
        print(f"{resource.title} [{resource.category.value}]")
        print(f"  {resource.description}")
        print(f"  {resource.url}")
    return 0


def cmd_suggest(args, tree: FamilyTree, settings: Settings) -> int:
    if not args.conditions:
        print(f"Common conditions: {', '.join(COMMON_CONDITIONS)}")
        print(f"Common allergies: {', '.join(COMMON_ALLERGIES)}")
        return 0
    meds = suggested_medications(args.conditions)
    print(f"Medications: {', '.join(meds) if meds else 'None'}")
    return 0


def cmd_settings(args, tree: FamilyTree, settings: Settings) -> int:
    prefs = load_preferences(tree.store)
    changed = False
    for key in (
        "language",
        "notifications_enabled",
        "dark_mode_enabled",
        "health_data_sharing",
    ):
        value = getattr(args, key)
        if value is not None:
            setattr(prefs, key, value)
            changed = True
    if changed:
        save_preferences(tree.store, prefs)
    for key, value in vars(prefs).items():
        print(f"{key}: {value}")
    return 0


# ============================================================================
# Argument parsing
# ============================================================================


def _on_off(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("on", "yes", "true", "1"):
        return True
    if lowered in ("off", "no", "false", "0"):
        return False
    raise argparse.ArgumentTypeError(f"expected on/off, got {value!r}")


def _add_health_options(parser: argparse.ArgumentParser, replace: bool):
    parser.add_argument("--age", type=int)
    parser.add_argument("--birth-date", help="e.g. 1954-11-25, 25 NOV 1954, 1954")
    parser.add_argument("--last-checkup")
    parser.add_argument("--notes")
    parser.add_argument("--status", choices=[s.value for s in HealthStatus])
    if replace:
        # Passing any of these replaces the whole list
        parser.add_argument("--conditions", nargs="*")
        parser.add_argument("--medications", nargs="*")
        parser.add_argument("--allergies", nargs="*")
    else:
        parser.add_argument("--condition", action="append", default=[])
        parser.add_argument("--medication", action="append", default=[])
        parser.add_argument("--allergy", action="append", default=[])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Track family members and their health.")
    parser.add_argument("--db", type=Path, help="SQLite database path (default: $HERITAGE_DB_PATH)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Add a family member")
    add.add_argument("name")
    add.add_argument("--anchor", type=int, help="ID of the member this one is related to")
    add.add_argument(
        "--relationship",
        default=Relationship.CHILD.value,
        choices=[r.value for r in Relationship],
    )
    add.add_argument("--deceased", action="store_true")
    _add_health_options(add, replace=False)
    add.set_defaults(func=cmd_add)

    edit = subparsers.add_parser("edit", help="Edit a family member")
    edit.add_argument("id", type=int)
    edit.add_argument("--name")
    edit.add_argument("--generation", type=int)
    edit.add_argument("--level", type=int)
    parent_group = edit.add_mutually_exclusive_group()
    parent_group.add_argument("--parent", type=int)
    parent_group.add_argument("--no-parent", action="store_true")
    deceased_group = edit.add_mutually_exclusive_group()
    deceased_group.add_argument("--deceased", dest="deceased", action="store_const", const=True)
    deceased_group.add_argument("--alive", dest="deceased", action="store_const", const=False)
    _add_health_options(edit, replace=True)
    edit.set_defaults(func=cmd_edit)

    delete = subparsers.add_parser("delete", help="Delete a family member")
    delete.add_argument("id", type=int)
    delete.set_defaults(func=cmd_delete)

    list_ = subparsers.add_parser("list", help="List family members")
    list_.add_argument("--search", help="Filter by name")
    list_.set_defaults(func=cmd_list)

    show = subparsers.add_parser("show", help="Show one family member")
    show.add_argument("id", type=int)
    show.set_defaults(func=cmd_show)

    stats = subparsers.add_parser("stats", help="Family health overview")
    stats.set_defaults(func=cmd_stats)

    layout = subparsers.add_parser("layout", help="Compute drawing coordinates")
    layout.add_argument("--mode", choices=["hierarchical", "grid"], default="hierarchical")
    layout.add_argument("--width", type=float)
    layout.add_argument("--height", type=float)
    layout.add_argument("--output", type=Path, help="Also draw the layout to this image")
    layout.set_defaults(func=cmd_layout)

    validate = subparsers.add_parser("validate", help="Check the tree for data problems")
    validate.set_defaults(func=cmd_validate)

    plot = subparsers.add_parser("plot", help="Render the tree or the health overview")
    plot.add_argument("--output", type=Path, default=Path("family_tree.png"))
    plot.add_argument("--health", action="store_true", help="Plot health statistics instead")
    plot.add_argument("--center", type=int, help="Only plot members near this ID")
    plot.add_argument("--radius", type=int, default=2)
    plot.set_defaults(func=cmd_plot)

    practices = subparsers.add_parser("practices", help="Browse cultural health practices")
    practices.add_argument("--search")
    practices.add_argument("--category", default="All", choices=PRACTICE_CATEGORIES)
    practices.set_defaults(func=cmd_practices)

    resources = subparsers.add_parser("resources", help="Browse health resources")
    resources.add_argument("--search")
    resources.add_argument("--category", action="append", choices=[c.value for c in HealthCategory])
    resources.set_defaults(func=cmd_resources)

    suggest = subparsers.add_parser("suggest", help="Medications for the given conditions")
    suggest.add_argument("conditions", nargs="*")
    suggest.set_defaults(func=cmd_suggest)

    prefs = subparsers.add_parser("settings", help="Show or change preferences")
    prefs.add_argument("--language", choices=LANGUAGES)
    prefs.add_argument("--notifications", dest="notifications_enabled", type=_on_off)
    prefs.add_argument("--dark-mode", dest="dark_mode_enabled", type=_on_off)
    prefs.add_argument("--share-health-data", dest="health_data_sharing", type=_on_off)
    prefs.set_defaults(func=cmd_settings)

    return parser


# ============================================================================
# Main
# ============================================================================


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    args = build_parser().parse_args(argv)
    store = FamilyStore(args.db or settings.db_path)
    try:
        tree = FamilyTree(store)
        return args.func(args, tree, settings)
    except HeritageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        store.close()


if __name__ == "__main__":
    raise SystemExit(main())
