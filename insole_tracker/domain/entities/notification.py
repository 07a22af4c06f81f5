"""Domain entity for short-lived user-facing status messages."""

from dataclasses import dataclass
from enum import Enum


class Severity(str, Enum):
    """Visual weight of a notification."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Notification:
    """A live notification. ``expiring`` flips shortly before removal."""

    id: int
    message: str
    severity: Severity = Severity.INFO
    expiring: bool = False
