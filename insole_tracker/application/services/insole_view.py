"""Pure derivations over the insole collection: filtered view, stats, locations.

Nothing here mutates its inputs; every function returns a new list or value.
"""

from insole_tracker.domain.entities import (
    LOCATION_KEYWORDS,
    Insole,
    InsoleFilters,
    InsoleStats,
    InsoleType,
    SortDirection,
    SortSpec,
    TrackerSettings,
)

# Attributes the view can be sorted by.
SORTABLE_FIELDS = frozenset({
    "serial_number",
    "type",
    "size",
    "location",
    "enclosure",
    "pair_status",
    "date_added",
    "date_sent",
    "notes",
    "last_modified",
})

# Attributes searched by the free-text filter.
SEARCH_FIELDS = ("serial_number", "type", "size", "location", "notes")

_STATUS_LOCATIONS = frozenset(k.lower() for k in LOCATION_KEYWORDS)


def _matches_search(insole: Insole, query: str) -> bool:
    return any(query in (getattr(insole, attr) or "").lower() for attr in SEARCH_FIELDS)


def filter_insoles(insoles: list[Insole], filters: InsoleFilters) -> list[Insole]:
    """Free-text search first, then exact type/size/location matches (AND-combined)."""
    result = list(insoles)

    if filters.search:
        query = filters.search.lower()
        result = [i for i in result if _matches_search(i, query)]
    if filters.type:
        result = [i for i in result if i.type == filters.type]
    if filters.size:
        result = [i for i in result if i.size == filters.size]
    if filters.location:
        result = [i for i in result if i.location == filters.location]

    return result


def sort_insoles(insoles: list[Insole], sort: SortSpec) -> list[Insole]:
    """Stable sort by one attribute, case-insensitively.

    Equal keys keep their input order in both directions. An unknown
    field leaves the order untouched.
    """
    if sort.field not in SORTABLE_FIELDS:
        return list(insoles)
    return sorted(
        insoles,
        key=lambda i: (getattr(i, sort.field) or "").lower(),
        reverse=sort.direction == SortDirection.DESC,
    )


def derive_view(
    insoles: list[Insole],
    filters: InsoleFilters,
    sort: SortSpec,
) -> list[Insole]:
    return sort_insoles(filter_insoles(insoles, filters), sort)


def is_with_client(location: str, settings: TrackerSettings) -> bool:
    """True when a location names someone outside the team and is not a status."""
    lowered = (location or "").lower()
    if not lowered or lowered in _STATUS_LOCATIONS:
        return False
    return not any(member.lower() in lowered for member in settings.team_members)


def compute_stats(insoles: list[Insole], settings: TrackerSettings) -> InsoleStats:
    return InsoleStats(
        core=sum(1 for i in insoles if i.type == InsoleType.CORE.value),
        advanced=sum(1 for i in insoles if i.type == InsoleType.ADVANCED.value),
        with_clients=sum(1 for i in insoles if is_with_client(i.location, settings)),
        lost_damaged=sum(1 for i in insoles if (i.location or "").lower() in ("lost", "damaged")),
        sizes={code: sum(1 for i in insoles if i.size == code) for code in settings.size_codes()},
    )


def unique_locations(insoles: list[Insole]) -> list[str]:
    """Distinct trimmed, non-empty locations, sorted."""
    return sorted({i.location.strip() for i in insoles if i.location and i.location.strip()})
