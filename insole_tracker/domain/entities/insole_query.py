"""Domain entities for deriving the filtered, sorted insole view."""

from dataclasses import dataclass, field
from enum import Enum


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class InsoleFilters:
    """Active filter criteria. Empty strings pass everything through."""

    search: str = ""
    type: str = ""
    size: str = ""
    location: str = ""

    def is_active(self) -> bool:
        return bool(self.search or self.type or self.size or self.location)


@dataclass
class SortSpec:
    """Active sort key (an Insole attribute name) and direction."""

    field: str = "date_added"
    direction: SortDirection = SortDirection.DESC


@dataclass
class InsoleStats:
    """Summary counts over the filtered view."""

    core: int = 0
    advanced: int = 0
    with_clients: int = 0
    lost_damaged: int = 0
    sizes: dict[str, int] = field(default_factory=dict)
