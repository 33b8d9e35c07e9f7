"""
Content Service

Read-only access to the seeded catalogue: public playlists and active mock
tests. Answers never leave this module: mock test listings drop the
question bank entirely.
"""

import logging
from typing import Any, Dict, List, Optional

from aptiprep.core.documents import DocumentSnapshot, DocumentStore
from aptiprep.core.errors import DocumentNotFoundError
from aptiprep.schemas.content import PlaylistDetails, PlaylistPage
from aptiprep.services import progress_service
from aptiprep.services.seed_service import MOCK_TESTS_COLLECTION, PLAYLISTS_COLLECTION


logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def _newest_first(snapshots: List[DocumentSnapshot]) -> List[DocumentSnapshot]:
    # createdAt is a datetime on Firestore and an ISO string on SQL; both sort by str()
    return sorted(snapshots, key=lambda snapshot: str(snapshot.data.get("createdAt", "")), reverse=True)


def _with_id(snapshot: DocumentSnapshot) -> Dict[str, Any]:
    return {"id": snapshot.id, **snapshot.data}


async def list_playlists(
    store: DocumentStore,
    category: Optional[str] = None,
    level: Optional[str] = None,
    search: Optional[str] = None,
    start_after: Optional[str] = None,
    limit: int = DEFAULT_PAGE_SIZE,
) -> PlaylistPage:
    """
    List public playlists, newest first.

    Args:
        store: Document store.
        category: Only playlists in this category.
        level: Only playlists at this level.
        search: Title prefix filter.
        start_after: Id of the last playlist of the previous page.
        limit: Page size.

    Returns:
        PlaylistPage; ``has_more`` is True when the page is full.
    """
    filters: Dict[str, Any] = {"isPublic": True}
    if category:
        filters["category"] = category
    if level:
        filters["level"] = level

    snapshots = _newest_first(await store.query(PLAYLISTS_COLLECTION, filters))
    if search:
        snapshots = [s for s in snapshots if str(s.data.get("title", "")).startswith(search)]

    if start_after:
        ids = [snapshot.id for snapshot in snapshots]
        if start_after in ids:
            snapshots = snapshots[ids.index(start_after) + 1:]

    page = snapshots[:limit]
    return PlaylistPage(
        playlists=[_with_id(snapshot) for snapshot in page],
        has_more=len(page) == limit,
        last_doc=page[-1].id if page else None,
    )


async def get_playlist_details(
    store: DocumentStore,
    playlist_id: str,
    user_id: Optional[str] = None,
) -> PlaylistDetails:
    """
    Get one playlist, plus the caller's progress on its videos when signed in.

    Raises:
        ValueError: If ``playlist_id`` is empty.
        DocumentNotFoundError: If the playlist does not exist.
    """
    if not playlist_id:
        raise ValueError("Playlist ID is required")

    data = await store.get(PLAYLISTS_COLLECTION, playlist_id)
    if data is None:
        raise DocumentNotFoundError("Playlist not found")

    user_progress = None
    if user_id:
        video_ids = {entry.get("videoId") for entry in data.get("videos", [])}
        records = await progress_service.get_all_progress_for_user(store, user_id)
        user_progress = [record for record in records if record.video_id in video_ids]

    return PlaylistDetails(playlist={"id": playlist_id, **data}, user_progress=user_progress)


async def list_mock_tests(
    store: DocumentStore,
    company_id: Optional[str] = None,
    test_type: Optional[str] = None,
    difficulty: Optional[str] = None,
    limit: int = DEFAULT_PAGE_SIZE,
) -> List[Dict[str, Any]]:
    """List active mock tests, newest first, without their questions."""
    filters: Dict[str, Any] = {"isActive": True}
    if company_id:
        filters["companyId"] = company_id
    if test_type:
        filters["type"] = test_type
    if difficulty:
        filters["difficulty"] = difficulty

    snapshots = _newest_first(await store.query(MOCK_TESTS_COLLECTION, filters))[:limit]
    tests = []
    for snapshot in snapshots:
        test = _with_id(snapshot)
        test.pop("questions", None)
        tests.append(test)
    return tests
