"""Pydantic DTOs for the configuration lists."""

from pydantic import BaseModel, Field


class SizeCodeSchema(BaseModel):
    code: str = Field(..., examples=["C"])
    range: str = Field(..., examples=["40-41"])

    model_config = {"from_attributes": True}


class TrackerSettingsSchema(BaseModel):
    """Team members, clients and size codes, used for both reads and writes."""

    team_members: list[str]
    clients: list[str]
    sizes: list[SizeCodeSchema]

    model_config = {"from_attributes": True}
