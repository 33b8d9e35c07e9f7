"""
Content Schemas

Response bodies for the read-only catalogue of playlists and mock tests.
Documents are returned as stored, with their key added as ``id``.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from aptiprep.schemas.base import DocumentModel
from aptiprep.schemas.progress import VideoProgress


class PlaylistPage(DocumentModel):
    playlists: List[Dict[str, Any]]
    has_more: bool = False
    last_doc: Optional[str] = Field(default=None, description="Pass as start_after to get the next page")


class PlaylistDetails(DocumentModel):
    playlist: Dict[str, Any]
    user_progress: Optional[List[VideoProgress]] = Field(
        default=None,
        description="Caller's progress on this playlist's videos; null when anonymous",
    )


class MockTestList(DocumentModel):
    tests: List[Dict[str, Any]]
