"""Editable reference lists used for badges, stats and forms."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SizeCode:
    """A size code and the shoe-size range it covers (e.g. ``C`` → ``40-41``)."""

    code: str
    range: str


DEFAULT_TEAM_MEMBERS = ("Ahmed", "Luca")
DEFAULT_CLIENTS = ("Spire", "HAUHSU")
DEFAULT_SIZES = (
    SizeCode("B", "38-39"),
    SizeCode("C", "40-41"),
    SizeCode("D", "42-43"),
    SizeCode("E", "44-45"),
)


@dataclass
class TrackerSettings:
    """Explicit configuration object handed to the store and badge helpers."""

    team_members: list[str] = field(default_factory=lambda: list(DEFAULT_TEAM_MEMBERS))
    clients: list[str] = field(default_factory=lambda: list(DEFAULT_CLIENTS))
    sizes: list[SizeCode] = field(default_factory=lambda: list(DEFAULT_SIZES))

    def size_codes(self) -> list[str]:
        return [s.code for s in self.sizes]
