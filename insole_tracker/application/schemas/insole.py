"""Pydantic DTOs (Data Transfer Objects) for the insole feature."""

from pydantic import BaseModel, Field

from insole_tracker.domain.entities import InsoleType


class InsoleCreate(BaseModel):
    """Schema for the add-insole form. Serial format is checked by the store."""

    serial_number: str = Field("", max_length=32, examples=["A1B2"])
    type: InsoleType = InsoleType.CORE
    size: str = Field("C", max_length=16, examples=["C"])
    location: str = Field("", examples=["Ahmed"])
    enclosure: str = "New"
    pair_status: str = "Both"
    date_added: str = Field("", description="YYYY-MM-DD or ISO 8601; empty means now")
    date_sent: str = Field("", description="YYYY-MM-DD or ISO 8601; empty means not sent")
    notes: str = ""


class InsoleFieldUpdate(BaseModel):
    """Schema for an inline edit of one field."""

    field: str = Field(..., examples=["location"])
    value: str = Field(..., examples=["Spire"])


class InsoleResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    serial_number: str
    type: str
    size: str
    location: str
    enclosure: str
    pair_status: str
    date_added: str
    date_sent: str
    notes: str
    last_modified: str
    highlight: bool = False

    # Display hints derived from the current settings
    size_label: str = ""
    location_color: str = ""
    type_color: str = ""

    model_config = {"from_attributes": True}


class InsoleStatsResponse(BaseModel):
    """Summary of the filtered view plus container flags."""

    core: int
    advanced: int
    with_clients: int
    lost_damaged: int
    sizes: dict[str, int]
    unique_locations: list[str]
    has_active_filters: bool
    last_synced: str | None
    loading: bool
    syncing: bool
    saving: bool
    deleting: bool
    offline: bool
    api_configured: bool


class ConnectivityUpdate(BaseModel):
    online: bool
