"""
Content Routes

Read-only catalogue of playlists and mock tests.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from aptiprep.api.deps import CurrentUser, get_current_user, get_optional_user, get_store
from aptiprep.core.documents import DocumentStore
from aptiprep.core.errors import DocumentNotFoundError
from aptiprep.schemas.content import MockTestList, PlaylistDetails, PlaylistPage
from aptiprep.services import content_service


router = APIRouter(prefix="/content", tags=["Content"])


@router.get(
    "/playlists",
    response_model=PlaylistPage,
    summary="List public playlists",
)
async def list_playlists(
    store: Annotated[DocumentStore, Depends(get_store)],
    category: Optional[str] = None,
    level: Optional[str] = None,
    search: Optional[str] = Query(default=None, description="Title prefix"),
    start_after: Optional[str] = Query(default=None, description="Last playlist id of the previous page"),
    limit: int = Query(default=content_service.DEFAULT_PAGE_SIZE, ge=1, le=100),
) -> PlaylistPage:
    return await content_service.list_playlists(
        store,
        category=category,
        level=level,
        search=search,
        start_after=start_after,
        limit=limit,
    )


@router.get(
    "/playlists/{playlist_id}",
    response_model=PlaylistDetails,
    summary="Get a playlist",
)
async def get_playlist(
    playlist_id: str,
    store: Annotated[DocumentStore, Depends(get_store)],
    current_user: Annotated[Optional[CurrentUser], Depends(get_optional_user)],
) -> PlaylistDetails:
    """
    Get one playlist. Signed-in callers also get their progress on its videos.

    Raises:
        HTTPException: 404 if the playlist does not exist.
    """
    try:
        return await content_service.get_playlist_details(
            store,
            playlist_id,
            user_id=current_user.uid if current_user else None,
        )
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "/mock-tests",
    response_model=MockTestList,
    summary="List active mock tests",
)
async def list_mock_tests(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
    company_id: Optional[str] = None,
    type: Optional[str] = None,
    difficulty: Optional[str] = None,
    limit: int = Query(default=content_service.DEFAULT_PAGE_SIZE, ge=1, le=100),
) -> MockTestList:
    """Active mock tests without their questions."""
    tests = await content_service.list_mock_tests(
        store,
        company_id=company_id,
        test_type=type,
        difficulty=difficulty,
        limit=limit,
    )
    return MockTestList(tests=tests)
