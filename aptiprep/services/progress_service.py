"""
Progress Service

Per-user video watch progress: persistence, completion detection and
aggregate statistics.

Reads and saves follow the best-effort policy: store failures are logged and
turned into ``None`` or ``[]``, never raised to the caller.
"""

import logging
import math
from typing import List, Optional, Sequence

from aptiprep.core.documents import DocumentStore, utc_now
from aptiprep.core.errors import best_effort
from aptiprep.schemas.progress import VideoProgress, WatchStats


logger = logging.getLogger(__name__)

PROGRESS_COLLECTION = "videoProgress"

# Fraction of the video that must be watched to count as completed
COMPLETION_THRESHOLD = 0.95


def progress_key(user_id: str, video_id: str) -> str:
    """Document id of the progress record for a (user, video) pair."""
    return f"{user_id}_{video_id}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@best_effort(None)
async def save_progress(
    store: DocumentStore,
    user_id: str,
    video_id: str,
    current_time: float,
    duration: float,
) -> Optional[VideoProgress]:
    """
    Record the playback position of a video.

    The record is merge-written so fields added by other writers survive.

    Args:
        store: Document store.
        user_id: Watching user.
        video_id: Video being watched.
        current_time: Playback position in seconds.
        duration: Video length in seconds.

    Returns:
        The saved VideoProgress, or None if the input was rejected or the
        write failed.
    """
    if not user_id or not video_id or current_time < 0 or duration <= 0:
        return None

    key = progress_key(user_id, video_id)
    progress = VideoProgress(
        id=key,
        user_id=user_id,
        video_id=video_id,
        current_time=current_time,
        duration=duration,
        percentage=min(current_time / duration * 100, 100),
        last_watched=utc_now(),
        completed=current_time >= duration * COMPLETION_THRESHOLD,
    )

    await store.set(PROGRESS_COLLECTION, key, progress.to_document(), merge=True)
    return progress


@best_effort(None)
async def get_progress(
    store: DocumentStore,
    user_id: str,
    video_id: str,
) -> Optional[VideoProgress]:
    """
    Get the stored progress for one video.

    Returns:
        VideoProgress, or None if absent, if an id is empty, or on failure.
    """
    if not user_id or not video_id:
        return None

    key = progress_key(user_id, video_id)
    data = await store.get(PROGRESS_COLLECTION, key)
    if data is None:
        return None

    return VideoProgress.model_validate({**data, "id": key})


@best_effort([])
async def get_all_progress_for_user(store: DocumentStore, user_id: str) -> List[VideoProgress]:
    """
    Get every progress record belonging to a user.

    Each record carries its storage key as ``id``.
    """
    if not user_id:
        return []

    snapshots = await store.query(PROGRESS_COLLECTION, {"userId": user_id})
    return [
        VideoProgress.model_validate({**snapshot.data, "id": snapshot.id})
        for snapshot in snapshots
    ]


def compute_stats(records: Sequence[VideoProgress]) -> WatchStats:
    """
    Aggregate watch statistics over progress records.

    Sums use exact floating point summation and rounding is half-up, so the
    result does not depend on the order of ``records``.

    Args:
        records: Progress records of a single user.

    Returns:
        WatchStats, all zero for an empty input.
    """
    if not records:
        return WatchStats()

    total_videos = len(records)
    completed_videos = sum(1 for record in records if record.completed)
    total_watch_time = math.fsum(record.current_time or 0 for record in records)
    average_progress = math.fsum(record.percentage or 0 for record in records) / total_videos
    completion_rate = completed_videos / total_videos * 100

    return WatchStats(
        total_videos=total_videos,
        completed_videos=completed_videos,
        total_watch_time=_round_half_up(total_watch_time),
        average_progress=_round_half_up(average_progress),
        completion_rate=_round_half_up(completion_rate),
    )


def format_duration(seconds: Optional[float]) -> str:
    """
    Format seconds as ``"{h}h {m}m"`` or ``"{m}m"``.

    ``None``, zero and negative input give ``"0m"``.
    """
    if not seconds or seconds < 0:
        return "0m"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)

    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
