"""Data classes for family members and the static health reference content."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable


class HealthStatus(str, Enum):
    """Display category for a family member; never derived from conditions."""

    HEALTHY = "healthy"
    AT_RISK = "at_risk"
    NEEDS_ATTENTION = "needs_attention"
    CRITICAL = "critical"

    @property
    def color(self) -> str:
        return _STATUS_COLORS[self]

    @property
    def icon(self) -> str:
        return _STATUS_ICONS[self]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


_STATUS_COLORS = {
    HealthStatus.HEALTHY: "green",
    HealthStatus.AT_RISK: "yellow",
    HealthStatus.NEEDS_ATTENTION: "orange",
    HealthStatus.CRITICAL: "red",
}

_STATUS_ICONS = {
    HealthStatus.HEALTHY: "heart",
    HealthStatus.AT_RISK: "warning",
    HealthStatus.NEEDS_ATTENTION: "alert",
    HealthStatus.CRITICAL: "cross",
}


def normalize_labels(labels: Iterable[str] | None) -> list[str]:
    """Strip, de-duplicate and sort a collection of free-text labels."""
    if not labels:
        return []
    return sorted({label.strip() for label in labels if label and label.strip()})


@dataclass
class PersonRecord:
    name: str
    id: int | None = None  # assigned by the store on insert
    age: int = 0
    birth_date: date | None = None
    deceased: bool = False
    last_checkup: date | None = None
    notes: str = ""
    conditions: list[str] = field(default_factory=list)
    medications: list[str] = field(default_factory=list)
    allergies: list[str] = field(default_factory=list)
    health_status: HealthStatus = HealthStatus.HEALTHY
    generation: int = 0
    level: int = 0
    # Only the upward link is stored; child sets are derived from it.
    parent_id: int | None = None

    @property
    def initial(self) -> str:
        return self.name[:1].upper()

    @property
    def health_color(self) -> str:
        return self.health_status.color

    @property
    def health_icon(self) -> str:
        return self.health_status.icon


@dataclass(frozen=True)
class CulturalPractice:
    name: str
    description: str
    region: str
    category: str
    benefits: str
    considerations: str


class HealthCategory(str, Enum):
    HEART = "Heart Health"
    DIABETES = "Diabetes"
    CANCER = "Cancer"
    ASTHMA = "Asthma"
    MENTAL = "Mental Health"
    NUTRITION = "Nutrition"
    EXERCISE = "Exercise"
    GENERAL = "General Health"


@dataclass(frozen=True)
class HealthResource:
    title: str
    description: str
    url: str
    category: HealthCategory
