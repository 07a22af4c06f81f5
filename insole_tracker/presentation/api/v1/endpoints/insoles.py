"""Insole endpoints: the filtered list, CRUD, sync and per-insole history."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from insole_tracker.application.schemas import (
    HistoryEntryResponse,
    InsoleCreate,
    InsoleFieldUpdate,
    InsoleResponse,
    InsoleStatsResponse,
)
from insole_tracker.application.services import (
    HistoryViewer,
    InsoleStore,
    location_badge,
    size_label,
    suggest_locations,
    type_badge,
)
from insole_tracker.application.services.insole_store import normalize_field_value
from insole_tracker.domain.entities import Insole, SortDirection, TrackerSettings, generate_serial
from insole_tracker.infrastructure.dependencies import get_history_viewer, get_insole_store

router = APIRouter(prefix="/insoles", tags=["Insoles"])


def _to_response(insole: Insole, settings: TrackerSettings) -> InsoleResponse:
    response = InsoleResponse.model_validate(insole, from_attributes=True)
    return response.model_copy(update={
        "size_label": size_label(insole.size, settings),
        "location_color": location_badge(insole.location, settings).color,
        "type_color": type_badge(insole.type).color,
    })


def _require(store: InsoleStore, insole_id: str) -> Insole:
    insole = store.get(insole_id)
    if insole is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Insole with id '{insole_id}' not found",
        )
    return insole


def _failed(store: InsoleStore, default: str, busy: bool = False) -> HTTPException:
    # A call dropped because its operation class was busy pushes no notification.
    if busy:
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Another operation is already in progress",
        )
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=store.notifications.latest_error() or default,
    )


@router.get("", response_model=list[InsoleResponse])
async def list_insoles(
    search: str | None = Query(None, description="Case-insensitive text search"),
    type: str | None = Query(None, description="Exact type filter ('' clears)"),
    size: str | None = Query(None, description="Exact size-code filter ('' clears)"),
    location: str | None = Query(None, description="Exact location filter ('' clears)"),
    sort_field: str | None = Query(None, description="Insole attribute to sort by"),
    sort_dir: SortDirection | None = Query(None),
    store: InsoleStore = Depends(get_insole_store),
) -> list[InsoleResponse]:
    """Return the filtered, sorted view. Given criteria become the active ones."""
    store.set_filters(search=search, type=type, size=size, location=location)
    if sort_field is not None or sort_dir is not None:
        field = sort_field if sort_field is not None else store.sort.field
        if not store.set_sort(field, sort_dir or SortDirection.ASC):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Cannot sort by '{field}'",
            )
    return [_to_response(i, store.settings) for i in store.filtered]


@router.delete("/filters", response_model=list[InsoleResponse])
async def clear_filters(
    store: InsoleStore = Depends(get_insole_store),
) -> list[InsoleResponse]:
    return [_to_response(i, store.settings) for i in store.clear_filters()]


@router.get("/stats", response_model=InsoleStatsResponse)
async def get_stats(
    store: InsoleStore = Depends(get_insole_store),
) -> InsoleStatsResponse:
    """Counts over the filtered view plus the container's status flags."""
    stats = store.stats
    return InsoleStatsResponse(
        core=stats.core,
        advanced=stats.advanced,
        with_clients=stats.with_clients,
        lost_damaged=stats.lost_damaged,
        sizes=stats.sizes,
        unique_locations=store.unique_locations,
        has_active_filters=store.has_active_filters,
        last_synced=store.last_synced,
        loading=store.loading,
        syncing=store.syncing,
        saving=store.saving,
        deleting=store.deleting,
        offline=store.offline,
        api_configured=store.api_configured,
    )


@router.get("/locations", response_model=list[str])
async def get_location_suggestions(
    q: str = Query("", description="Substring to match"),
    store: InsoleStore = Depends(get_insole_store),
) -> list[str]:
    return suggest_locations(q, store.insoles, store.settings)


@router.get("/serial")
async def get_generated_serial() -> dict:
    """A random four-character serial for the add form."""
    return {"serial_number": generate_serial()}


@router.post("/sync")
async def sync_insoles(
    store: InsoleStore = Depends(get_insole_store),
) -> dict:
    """Replace the collection from the remote store (no-op while a sync runs)."""
    replaced = await store.synchronize()
    return {"synced": replaced, "count": len(store.insoles), "last_synced": store.last_synced}


@router.post("", response_model=InsoleResponse, status_code=status.HTTP_201_CREATED)
async def create_insole(
    data: InsoleCreate,
    store: InsoleStore = Depends(get_insole_store),
) -> InsoleResponse:
    insole = await store.create(data)
    if insole is None:
        raise _failed(store, "Insole could not be created", busy=store.saving)
    return _to_response(insole, store.settings)


@router.get("/{insole_id}", response_model=InsoleResponse)
async def get_insole(
    insole_id: str,
    store: InsoleStore = Depends(get_insole_store),
) -> InsoleResponse:
    return _to_response(_require(store, insole_id), store.settings)


@router.patch("/{insole_id}", response_model=InsoleResponse)
async def update_insole_field(
    insole_id: str,
    data: InsoleFieldUpdate,
    store: InsoleStore = Depends(get_insole_store),
) -> InsoleResponse:
    """Inline edit of one field. An unchanged value returns the insole as is."""
    _require(store, insole_id)
    changed = await store.update_field(insole_id, data.field, data.value)
    insole = _require(store, insole_id)
    if not changed and (
        not hasattr(insole, data.field)
        or insole.get_field(data.field) != normalize_field_value(data.field, data.value)
    ):
        raise _failed(store, "Insole could not be updated", busy=store.saving)
    return _to_response(insole, store.settings)


@router.delete("/{insole_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_insole(
    insole_id: str,
    store: InsoleStore = Depends(get_insole_store),
) -> None:
    _require(store, insole_id)
    if not await store.remove(insole_id):
        raise _failed(store, "Insole could not be deleted", busy=store.deleting)


@router.get("/{insole_id}/history", response_model=list[HistoryEntryResponse])
async def get_insole_history(
    insole_id: str,
    store: InsoleStore = Depends(get_insole_store),
    viewer: HistoryViewer = Depends(get_history_viewer),
) -> list[HistoryEntryResponse]:
    """Fresh change log for one insole (never cached)."""
    insole = store.get(insole_id)
    if insole is not None:
        entries = await viewer.open(insole)
    else:
        entries = await viewer.load(insole_id)
    return [HistoryEntryResponse.model_validate(e, from_attributes=True) for e in entries]
