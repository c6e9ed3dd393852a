"""Packing list sections and priority ordering."""
from typing import Dict, List, Sequence, TypeVar, Union

from gearpack.models.packing_plan import Priority, normalize_priority

# Canonical section order for the packing list
PACKING_SECTIONS = (
    "Essentials",
    "Camera Bodies",
    "Lenses",
    "Lighting",
    "Audio",
    "Support",
    "Power",
    "Media",
    "Cables",
    "Misc",
)

FALLBACK_SECTION = "Misc"

_PRIORITY_RANKS = {
    Priority.MUST_HAVE: 0,
    Priority.NICE_TO_HAVE: 1,
}

_PRIORITY_LABELS = {
    Priority.MUST_HAVE: "Must-have",
    Priority.NICE_TO_HAVE: "Nice-to-have",
    Priority.OPTIONAL: "Optional",
}

T = TypeVar("T")


def priority_rank(priority: Union[Priority, str]) -> int:
    """0 for must-have, 1 for nice-to-have, 2 for anything else."""
    return _PRIORITY_RANKS.get(normalize_priority(priority), 2)


def priority_label(priority: Union[Priority, str]) -> str:
    """Display label for a priority; unknown values read as Optional."""
    return _PRIORITY_LABELS[normalize_priority(priority)]


def section_for(section: str) -> str:
    """Known section name, or Misc."""
    return section if section in PACKING_SECTIONS else FALLBACK_SECTION


def group_by_section(items: Sequence[T]) -> Dict[str, List[T]]:
    """Group checklist items by section in canonical order.

    Items with unknown sections fall into Misc. Each group is sorted by
    priority rank (stable, so equal priorities keep input order). Only
    sections that have items are returned.

    Args:
        items: Objects exposing ``section`` and ``priority``

    Returns:
        Ordered mapping of section name to items
    """
    grouped: Dict[str, List[T]] = {}
    for item in items:
        grouped.setdefault(section_for(item.section), []).append(item)

    for section_items in grouped.values():
        section_items.sort(key=lambda i: priority_rank(i.priority))

    return {
        section: grouped[section]
        for section in PACKING_SECTIONS
        if grouped.get(section)
    }
