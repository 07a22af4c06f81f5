"""Connectivity signal endpoint — lets the front-end report online/offline."""

from fastapi import APIRouter, Depends

from insole_tracker.application.schemas import ConnectivityUpdate
from insole_tracker.application.services import InsoleStore
from insole_tracker.infrastructure.dependencies import get_insole_store

router = APIRouter(prefix="/connectivity", tags=["Connectivity"])


@router.put("")
async def set_connectivity(
    data: ConnectivityUpdate,
    store: InsoleStore = Depends(get_insole_store),
) -> dict:
    """Flip the offline flag; returning online triggers one synchronization."""
    await store.set_online(data.online)
    return {"offline": store.offline, "last_synced": store.last_synced}
