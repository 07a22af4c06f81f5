"""Pydantic DTOs for live notifications."""

from pydantic import BaseModel

from insole_tracker.domain.entities import Severity


class NotificationResponse(BaseModel):
    id: int
    message: str
    severity: Severity
    expiring: bool

    model_config = {"from_attributes": True}
