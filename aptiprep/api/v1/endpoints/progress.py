"""
Progress Routes

Endpoints for saving and reading per-user video watch progress.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from aptiprep.api.deps import CurrentUser, get_current_user, get_store
from aptiprep.core.documents import DocumentStore
from aptiprep.schemas.progress import (
    ProgressListResponse,
    ProgressSave,
    ProgressSaveResponse,
    VideoProgress,
    WatchStatsResponse,
)
from aptiprep.services import progress_service


router = APIRouter(prefix="/progress", tags=["Progress"])


@router.post(
    "",
    response_model=ProgressSaveResponse,
    summary="Save playback position",
)
async def save_progress(
    data: ProgressSave,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> ProgressSaveResponse:
    """
    Save the caller's playback position for a video.

    Invalid positions (negative time, non-positive duration) and store
    failures are not errors: the response reports ``saved: false``.
    """
    progress = await progress_service.save_progress(
        store,
        current_user.uid,
        data.video_id,
        data.current_time,
        data.duration,
    )
    return ProgressSaveResponse(saved=progress is not None, progress=progress)


@router.get(
    "",
    response_model=ProgressListResponse,
    summary="List my progress records",
)
async def list_progress(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> ProgressListResponse:
    items = await progress_service.get_all_progress_for_user(store, current_user.uid)
    return ProgressListResponse(items=items, total=len(items))


@router.get(
    "/stats",
    response_model=WatchStatsResponse,
    summary="Get my watch statistics",
)
async def get_stats(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> WatchStatsResponse:
    """Aggregate statistics over all of the caller's progress records."""
    records = await progress_service.get_all_progress_for_user(store, current_user.uid)
    stats = progress_service.compute_stats(records)
    return WatchStatsResponse(
        **stats.model_dump(),
        formatted_watch_time=progress_service.format_duration(stats.total_watch_time),
    )


@router.get(
    "/{video_id}",
    response_model=VideoProgress,
    summary="Get progress for one video",
)
async def get_progress(
    video_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> VideoProgress:
    """
    Get the caller's progress for a single video.

    Raises:
        HTTPException: 404 if no progress has been recorded.
    """
    progress = await progress_service.get_progress(store, current_user.uid, video_id)
    if progress is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No progress recorded for video {video_id}",
        )
    return progress
