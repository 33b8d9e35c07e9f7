"""
Test Attempt Schemas

A user's run through a mock test, the scored results and the API bodies of
the attempt lifecycle.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from aptiprep.schemas.base import DocumentModel


class AttemptAnswer(DocumentModel):
    """
    Answer to one question.

    ``selected_answer`` is a zero-based option index; None means the
    question was only visited or marked for review.
    """

    question_id: str
    selected_answer: Optional[int] = None
    time_spent: int = 0  # seconds
    is_marked_for_review: bool = False
    submitted_at: Optional[datetime] = None


class SectionResult(DocumentModel):
    attempted: int = 0
    correct: int = 0
    incorrect: int = 0
    score: float = 0
    percentage: float = 0


class TopicResult(DocumentModel):
    attempted: int = 0
    correct: int = 0
    accuracy: float = 0


class TimeAnalysis(DocumentModel):
    avg_time_per_question: int = 0  # seconds
    time_distribution: Dict[str, int] = {}


class AttemptResults(DocumentModel):
    """Scored outcome of a completed attempt; keys of the nested maps are section ids and topics."""

    total_questions: int
    attempted: int
    correct: int
    incorrect: int
    unattempted: int
    score: float
    percentage: float
    percentile: float = 0
    section_wise: Dict[str, SectionResult] = {}
    topic_wise: Dict[str, TopicResult] = {}
    time_analysis: TimeAnalysis = TimeAnalysis()


class AttemptAnalytics(DocumentModel):
    strengths: List[str] = []
    weaknesses: List[str] = []
    recommendations: List[str] = []


class TestAttempt(DocumentModel):
    """
    Stored attempt at ``testAttempts/{attempt_id}``.

    ``id`` carries the key on reads and is not part of the stored body.
    """

    __test__ = False

    id: Optional[str] = Field(default=None, exclude=True)
    attempt_id: str
    user_id: str
    test_id: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: int = 0  # seconds
    status: str
    answers: List[AttemptAnswer] = []
    results: Optional[AttemptResults] = None
    analytics: Optional[AttemptAnalytics] = None


# ============== API Schemas ==============

class AttemptStart(DocumentModel):
    test_id: str = Field(..., min_length=1)


class AttemptStartResponse(DocumentModel):
    attempt_id: str
    test: Dict[str, Any] = Field(..., description="Test with shuffled questions and no answers")


class AnswerSubmit(DocumentModel):
    question_id: str = Field(..., min_length=1)
    selected_answer: Optional[int] = None
    time_spent: int = Field(default=0, ge=0)
    is_marked_for_review: bool = False


class AnswerSubmitResponse(DocumentModel):
    success: bool = True
    message: str = "Answer submitted successfully"


class AttemptCompleteResponse(DocumentModel):
    message: str = "Test completed successfully"
    results: AttemptResults
    analytics: AttemptAnalytics


class AttemptResultsResponse(DocumentModel):
    attempt: Dict[str, Any]
    answers_with_explanations: List[Dict[str, Any]]
    test: Dict[str, Any]
