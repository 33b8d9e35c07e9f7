"""
Progress Schemas

Per-user video watch progress and derived statistics.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from aptiprep.schemas.base import DocumentModel


class VideoProgress(DocumentModel):
    """
    Watch progress for one (user, video) pair.

    Stored at ``videoProgress/{user_id}_{video_id}``. ``id`` carries that
    key on reads and is not part of the stored body.
    """

    id: Optional[str] = None
    user_id: str
    video_id: str
    current_time: float = 0
    duration: float = 0
    percentage: float = 0
    last_watched: Optional[Union[datetime, str]] = None
    completed: bool = False

    def to_document(self, exclude_none: bool = False) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"id"}, exclude_none=exclude_none)


class WatchStats(DocumentModel):
    """Aggregate statistics over a user's progress records."""

    total_videos: int = 0
    completed_videos: int = 0
    total_watch_time: int = 0  # seconds
    average_progress: int = 0  # percent
    completion_rate: int = 0  # percent


# ============== API Schemas ==============

class ProgressSave(DocumentModel):
    """Request body for saving watch progress."""

    video_id: str = Field(..., description="Video being watched")
    current_time: float = Field(..., description="Playback position in seconds")
    duration: float = Field(..., description="Video length in seconds")


class ProgressSaveResponse(BaseModel):
    saved: bool
    progress: Optional[VideoProgress] = None


class ProgressListResponse(BaseModel):
    items: List[VideoProgress]
    total: int


class WatchStatsResponse(WatchStats):
    formatted_watch_time: str = Field(..., description="Total watch time, e.g. '1h 5m'")
