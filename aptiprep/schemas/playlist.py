"""
Playlist and Video Schemas

Playlists embed ordered video references; Video documents are a one-time
projection of those references plus playlist metadata.
"""

from typing import Any, List, Optional

from pydantic import Field, model_validator

from aptiprep.schemas.base import DocumentModel


THUMBNAIL_URL = "https://img.youtube.com/vi/{youtube_id}/{variant}.jpg"


# ============== Playlist ==============

class PlaylistVideo(DocumentModel):
    """
    Video reference inside a playlist.

    ``watch_time`` and ``is_completed`` are fixture placeholders, not live
    progress; live progress lives in the videoProgress collection.
    """

    video_id: str
    youtube_id: str
    title: str
    duration: int  # seconds
    order: int
    is_required: bool = True
    watch_time: int = 0
    is_completed: bool = False


class Instructor(DocumentModel):
    name: str
    bio: str = ""
    avatar: str = ""


class PlaylistStats(DocumentModel):
    enrolled_users: int = 0
    completion_rate: float = 0
    average_rating: float = 0
    total_ratings: int = 0


class PlaylistResources(DocumentModel):
    notes: List[Any] = []
    practice_sheets: List[Any] = []


class Playlist(DocumentModel):
    """
    Playlist document.

    ``total_videos`` and ``total_duration`` are denormalized and must agree
    with ``videos``. ``slug`` is a fixture-only key and is never stored.
    """

    slug: Optional[str] = Field(default=None, exclude=True)
    title: str
    description: str = ""
    thumbnail: str = ""
    category: str
    subcategory: str = ""
    level: str
    tags: List[str] = []
    videos: List[PlaylistVideo]
    total_videos: int
    total_duration: int  # seconds
    instructor: Instructor
    stats: PlaylistStats = PlaylistStats()
    resources: PlaylistResources = PlaylistResources()
    is_public: bool = True

    @model_validator(mode="after")
    def check_totals(self) -> "Playlist":
        if self.total_videos != len(self.videos):
            raise ValueError(
                f"total_videos={self.total_videos} but playlist has {len(self.videos)} videos"
            )
        duration = sum(video.duration for video in self.videos)
        if self.total_duration != duration:
            raise ValueError(
                f"total_duration={self.total_duration} but videos sum to {duration}"
            )
        return self


# ============== Video ==============

class Thumbnail(DocumentModel):
    default: str
    medium: str
    high: str

    @classmethod
    def for_youtube_id(cls, youtube_id: str) -> "Thumbnail":
        """Build the three standard YouTube thumbnail URLs."""
        return cls(
            default=THUMBNAIL_URL.format(youtube_id=youtube_id, variant="default"),
            medium=THUMBNAIL_URL.format(youtube_id=youtube_id, variant="mqdefault"),
            high=THUMBNAIL_URL.format(youtube_id=youtube_id, variant="hqdefault"),
        )


class VideoContent(DocumentModel):
    topics: List[str] = []
    learning_objectives: List[str] = []


class VideoResources(DocumentModel):
    notes: List[Any] = []
    practice_questions: List[Any] = []


class VideoStats(DocumentModel):
    views: int = 0
    likes: int = 0
    dislikes: int = 0
    average_watch_time: float = 0
    completion_rate: float = 0


class Video(DocumentModel):
    """
    Standalone Video document.

    Category, level, tags and instructor are copied from the owning playlist
    when the video is materialized; later playlist edits do not propagate.
    """

    video_id: str
    youtube_id: str
    title: str
    description: str = ""
    thumbnail: Thumbnail
    duration: int
    published_at: str
    category: str
    subcategory: str = ""
    tags: List[str] = []
    level: str
    instructor: Instructor
    content: VideoContent = VideoContent()
    resources: VideoResources = VideoResources()
    stats: VideoStats = VideoStats()
    is_active: bool = True
