"""Pydantic DTOs for insole change history."""

from pydantic import BaseModel


class FieldChangeResponse(BaseModel):
    field: str
    old_value: str
    new_value: str

    model_config = {"from_attributes": True}


class HistoryEntryResponse(BaseModel):
    insole_id: str
    timestamp: str
    action: str
    changes: list[FieldChangeResponse]

    model_config = {"from_attributes": True}
