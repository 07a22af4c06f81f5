"""Display helpers: location/type badges, size labels and location suggestions."""

from dataclasses import dataclass

from insole_tracker.domain.entities import Insole, InsoleType, TrackerSettings

from .insole_view import unique_locations

# Suggested even when no insole uses them yet.
_SUGGESTED_STATUSES = ("Stock", "Lost", "Damaged", "Returned")


@dataclass(frozen=True)
class Badge:
    color: str
    label: str


def location_badge(location: str, settings: TrackerSettings) -> Badge:
    """Colour a location by what it denotes.

    Status keywords get fixed colours, team members blue, and everything
    else (known client or not) is treated as external.
    """
    if not location:
        return Badge("stone", "Unassigned")
    lowered = location.lower().strip()

    if lowered == "lost":
        return Badge("red", location)
    if lowered == "damaged":
        return Badge("orange", location)
    if lowered in ("returned", "stock", "available"):
        return Badge("gray", location)

    for member in settings.team_members:
        if member.lower() in lowered:
            return Badge("blue", location)

    return Badge("emerald", location)


def type_badge(insole_type: str) -> Badge:
    if insole_type == InsoleType.ADVANCED.value:
        return Badge("amber", InsoleType.ADVANCED.value)
    return Badge("stone", InsoleType.CORE.value)


def size_label(size: str, settings: TrackerSettings) -> str:
    """``"C (40-41)"`` for a configured code, the raw code otherwise, ``"—"`` if empty."""
    for entry in settings.sizes:
        if entry.code == size:
            return f"{entry.code} ({entry.range})"
    return size or "—"


def known_locations(insoles: list[Insole], settings: TrackerSettings) -> list[str]:
    locations = set(settings.team_members) | set(settings.clients) | set(_SUGGESTED_STATUSES)
    locations.update(unique_locations(insoles))
    return sorted(locations)


def suggest_locations(text: str, insoles: list[Insole], settings: TrackerSettings) -> list[str]:
    """Known locations containing ``text`` (case-insensitive); all of them when empty."""
    candidates = known_locations(insoles, settings)
    query = (text or "").lower()
    if not query:
        return candidates
    return [loc for loc in candidates if query in loc.lower()]
