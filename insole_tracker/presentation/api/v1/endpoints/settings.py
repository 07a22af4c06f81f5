"""Settings endpoints — team members, clients and size codes."""

from fastapi import APIRouter, Depends, HTTPException, status

from insole_tracker.application.schemas import TrackerSettingsSchema
from insole_tracker.application.services import SettingsService
from insole_tracker.domain.entities import SizeCode
from insole_tracker.infrastructure.dependencies import get_settings_service

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=TrackerSettingsSchema)
async def get_tracker_settings(
    service: SettingsService = Depends(get_settings_service),
) -> TrackerSettingsSchema:
    return TrackerSettingsSchema.model_validate(service.current(), from_attributes=True)


@router.put("", response_model=TrackerSettingsSchema)
async def put_tracker_settings(
    body: TrackerSettingsSchema,
    service: SettingsService = Depends(get_settings_service),
) -> TrackerSettingsSchema:
    """Replace all three lists. Blank entries are dropped; members and sizes must remain."""
    saved = service.save(
        team_members=body.team_members,
        clients=body.clients,
        sizes=[SizeCode(code=s.code, range=s.range) for s in body.sizes],
    )
    if saved is None:
        latest = service.last_error()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=latest or "Settings could not be saved",
        )
    return TrackerSettingsSchema.model_validate(saved, from_attributes=True)
