"""
Mock Test Attempt Routes

Start, answer, complete and review attempts at a mock test.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from aptiprep.api.deps import CurrentUser, get_current_user, get_store
from aptiprep.core.documents import DocumentStore
from aptiprep.core.errors import AttemptStateError, DocumentNotFoundError, NotAuthorizedError
from aptiprep.schemas.attempt import (
    AnswerSubmit,
    AnswerSubmitResponse,
    AttemptCompleteResponse,
    AttemptResultsResponse,
    AttemptStart,
    AttemptStartResponse,
)
from aptiprep.services import attempt_service


router = APIRouter(prefix="/attempts", tags=["Mock Test Attempts"])


def _http_error(error: Exception) -> HTTPException:
    """Map attempt service errors to HTTP responses."""
    if isinstance(error, DocumentNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, NotAuthorizedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, AttemptStateError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


@router.post(
    "",
    response_model=AttemptStartResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a mock test attempt",
)
async def start_attempt(
    data: AttemptStart,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> AttemptStartResponse:
    """
    Open an attempt and return the test with shuffled questions.

    Correct answers and explanations are withheld until the attempt is
    completed.
    """
    try:
        started = await attempt_service.start_attempt(store, current_user.uid, data.test_id)
    except (DocumentNotFoundError, NotAuthorizedError, ValueError) as e:
        raise _http_error(e)
    return AttemptStartResponse(attempt_id=started.attempt_id, test=started.test)


@router.post(
    "/{attempt_id}/answers",
    response_model=AnswerSubmitResponse,
    summary="Submit an answer",
)
async def submit_answer(
    attempt_id: str,
    data: AnswerSubmit,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> AnswerSubmitResponse:
    """Record an answer; answering the same question again replaces it."""
    try:
        await attempt_service.submit_answer(
            store,
            current_user.uid,
            attempt_id,
            data.question_id,
            data.selected_answer,
            time_spent=data.time_spent,
            is_marked_for_review=data.is_marked_for_review,
        )
    except (DocumentNotFoundError, NotAuthorizedError, AttemptStateError, ValueError) as e:
        raise _http_error(e)
    return AnswerSubmitResponse()


@router.post(
    "/{attempt_id}/complete",
    response_model=AttemptCompleteResponse,
    summary="Complete and score an attempt",
)
async def complete_attempt(
    attempt_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> AttemptCompleteResponse:
    try:
        results, analytics = await attempt_service.complete_attempt(store, current_user.uid, attempt_id)
    except (DocumentNotFoundError, NotAuthorizedError, AttemptStateError, ValueError) as e:
        raise _http_error(e)
    return AttemptCompleteResponse(results=results, analytics=analytics)


@router.get(
    "/{attempt_id}/results",
    response_model=AttemptResultsResponse,
    summary="Review an attempt",
)
async def get_results(
    attempt_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[DocumentStore, Depends(get_store)],
) -> AttemptResultsResponse:
    """The attempt with each answer annotated by the correct option and explanation."""
    try:
        review = await attempt_service.get_attempt_results(store, current_user.uid, attempt_id)
    except (DocumentNotFoundError, NotAuthorizedError, ValueError) as e:
        raise _http_error(e)
    return AttemptResultsResponse(**review)
