"""
Mock Test Attempt Service

Lifecycle of a user's attempt at a mock test: start, answer, complete and
review. Completion scores the answers against the stored question bank.

Scoring gives one mark per correct answer and deducts a quarter mark per
wrong answer; totals and percentages never go below zero.
"""

import logging
import math
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from aptiprep.core.documents import SERVER_TIMESTAMP, DocumentStore, utc_now
from aptiprep.core.errors import AttemptStateError, DocumentNotFoundError, NotAuthorizedError
from aptiprep.models.enums import AttemptStatus
from aptiprep.schemas.attempt import (
    AttemptAnalytics,
    AttemptAnswer,
    AttemptResults,
    SectionResult,
    TestAttempt,
    TimeAnalysis,
    TopicResult,
)
from aptiprep.schemas.mock_test import Question
from aptiprep.services.seed_service import MOCK_TESTS_COLLECTION


logger = logging.getLogger(__name__)

ATTEMPTS_COLLECTION = "testAttempts"

WRONG_ANSWER_PENALTY = 0.25

# Upper bounds in seconds; anything slower lands in the last bucket
TIME_BUCKETS = [(30, "0-30s"), (60, "31-60s"), (120, "61-120s")]
SLOW_BUCKET = "120s+"

STRENGTH_ACCURACY = 70
WEAKNESS_ACCURACY = 50
SLOW_AVERAGE_SECONDS = 90

# Fields a test taker must not see before completing the attempt
HIDDEN_QUESTION_FIELDS = ("correctAnswer", "explanation")


@dataclass
class StartedAttempt:
    """A fresh attempt and the test as shown to the taker."""
    attempt_id: str
    test: Dict[str, Any]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ============== Scoring ==============

def calculate_time_analysis(answers: Sequence[AttemptAnswer]) -> TimeAnalysis:
    """Average time per answer and a histogram of answer times."""
    distribution = {label: 0 for _, label in TIME_BUCKETS}
    distribution[SLOW_BUCKET] = 0

    for answer in answers:
        label = next(
            (label for limit, label in TIME_BUCKETS if answer.time_spent <= limit),
            SLOW_BUCKET,
        )
        distribution[label] += 1

    total_time = sum(answer.time_spent for answer in answers)
    average = _round_half_up(total_time / len(answers)) if answers else 0
    return TimeAnalysis(avg_time_per_question=average, time_distribution=distribution)


def calculate_results(answers: Sequence[AttemptAnswer], questions: Sequence[Question]) -> AttemptResults:
    """
    Score ``answers`` against ``questions``.

    Answers without a selected option, or for questions not in the test,
    count as unattempted. Section and topic breakdowns cover attempted
    questions only.
    """
    by_id = {question.question_id: question for question in questions}
    correct = 0
    incorrect = 0
    section_wise: Dict[str, SectionResult] = {}
    topic_wise: Dict[str, TopicResult] = {}
    answered = []

    for answer in answers:
        question = by_id.get(answer.question_id)
        if question is None or answer.selected_answer is None:
            continue
        answered.append(answer)

        is_correct = answer.selected_answer == question.correct_answer
        if is_correct:
            correct += 1
        else:
            incorrect += 1

        section = section_wise.setdefault(question.section_id, SectionResult())
        section.attempted += 1
        if is_correct:
            section.correct += 1
        else:
            section.incorrect += 1

        topic = topic_wise.setdefault(question.topic, TopicResult())
        topic.attempted += 1
        if is_correct:
            topic.correct += 1

    for section in section_wise.values():
        section.score = section.correct - section.incorrect * WRONG_ANSWER_PENALTY
        section.percentage = section.score / section.attempted * 100

    for topic in topic_wise.values():
        topic.accuracy = topic.correct / topic.attempted * 100

    total_questions = len(questions)
    score = correct - incorrect * WRONG_ANSWER_PENALTY
    percentage = score / total_questions * 100 if total_questions else 0

    return AttemptResults(
        total_questions=total_questions,
        attempted=len(answered),
        correct=correct,
        incorrect=incorrect,
        unattempted=total_questions - len(answered),
        score=max(0, score),
        percentage=max(0, percentage),
        section_wise=section_wise,
        topic_wise=topic_wise,
        time_analysis=calculate_time_analysis(answered),
    )


def generate_analytics(results: AttemptResults) -> AttemptAnalytics:
    """Strong and weak topics plus study recommendations."""
    strengths = [topic for topic, data in results.topic_wise.items() if data.accuracy >= STRENGTH_ACCURACY]
    weaknesses = [topic for topic, data in results.topic_wise.items() if data.accuracy < WEAKNESS_ACCURACY]

    recommendations = []
    if results.percentage < 50:
        recommendations.append("Focus on fundamental concepts and practice more questions")
    if results.time_analysis.avg_time_per_question > SLOW_AVERAGE_SECONDS:
        recommendations.append("Work on time management and speed")
    recommendations.extend(f"Practice more {topic} problems" for topic in weaknesses)

    return AttemptAnalytics(strengths=strengths, weaknesses=weaknesses, recommendations=recommendations)


# ============== Lifecycle ==============

async def _load_test(store: DocumentStore, test_id: str) -> Dict[str, Any]:
    test = await store.get(MOCK_TESTS_COLLECTION, test_id)
    if test is None:
        raise DocumentNotFoundError("Test not found")
    return test


async def _load_attempt(store: DocumentStore, user_id: str, attempt_id: str) -> TestAttempt:
    """Load an attempt owned by ``user_id``."""
    if not attempt_id:
        raise ValueError("Attempt ID is required")

    data = await store.get(ATTEMPTS_COLLECTION, attempt_id)
    if data is None:
        raise DocumentNotFoundError("Test attempt not found")

    attempt = TestAttempt.model_validate({**data, "id": attempt_id})
    if attempt.user_id != user_id:
        raise NotAuthorizedError("Unauthorized access to test attempt")
    return attempt


def _require_in_progress(attempt: TestAttempt) -> None:
    if attempt.status != AttemptStatus.IN_PROGRESS.value:
        raise AttemptStateError("Test attempt is not in progress")


def _questions(test: Dict[str, Any]) -> List[Question]:
    return [Question.model_validate(question) for question in test.get("questions", [])]


async def start_attempt(
    store: DocumentStore,
    user_id: str,
    test_id: str,
    shuffle: Callable[[List[Any]], None] = random.shuffle,
) -> StartedAttempt:
    """
    Open a new in-progress attempt.

    The returned test has its questions shuffled and stripped of correct
    answers and explanations.

    Raises:
        ValueError: If ``test_id`` is empty.
        DocumentNotFoundError: If the test does not exist.
        NotAuthorizedError: If the test is not active.
    """
    if not test_id:
        raise ValueError("Test ID is required")

    test = await _load_test(store, test_id)
    if not test.get("isActive"):
        raise NotAuthorizedError("Test is not active")

    attempt_id = store.new_id(ATTEMPTS_COLLECTION)
    await store.set(
        ATTEMPTS_COLLECTION,
        attempt_id,
        {
            "attemptId": attempt_id,
            "userId": user_id,
            "testId": test_id,
            "startTime": SERVER_TIMESTAMP,
            "endTime": None,
            "duration": 0,
            "status": AttemptStatus.IN_PROGRESS.value,
            "answers": [],
            "results": None,
            "analytics": None,
            "createdAt": SERVER_TIMESTAMP,
        },
    )

    questions = [
        {key: value for key, value in question.items() if key not in HIDDEN_QUESTION_FIELDS}
        for question in test.get("questions", [])
    ]
    shuffle(questions)

    logger.info(f"User {user_id} started attempt {attempt_id} on test {test_id}")
    return StartedAttempt(attempt_id=attempt_id, test={**test, "id": test_id, "questions": questions})


async def submit_answer(
    store: DocumentStore,
    user_id: str,
    attempt_id: str,
    question_id: str,
    selected_answer: Optional[int],
    time_spent: int = 0,
    is_marked_for_review: bool = False,
) -> AttemptAnswer:
    """
    Record or replace the answer to one question of an in-progress attempt.

    Raises:
        ValueError: If an id is empty.
        DocumentNotFoundError: If the attempt does not exist.
        NotAuthorizedError: If the attempt belongs to another user.
        AttemptStateError: If the attempt is already completed.
    """
    if not attempt_id or not question_id:
        raise ValueError("Attempt ID and Question ID are required")

    attempt = await _load_attempt(store, user_id, attempt_id)
    _require_in_progress(attempt)

    # Client clock: server timestamps are not allowed inside arrays
    answer = AttemptAnswer(
        question_id=question_id,
        selected_answer=selected_answer,
        time_spent=time_spent or 0,
        is_marked_for_review=is_marked_for_review,
        submitted_at=utc_now(),
    )
    answers = [existing for existing in attempt.answers if existing.question_id != question_id]
    position = next(
        (index for index, existing in enumerate(attempt.answers) if existing.question_id == question_id),
        len(answers),
    )
    answers.insert(position, answer)

    await store.update(
        ATTEMPTS_COLLECTION,
        attempt_id,
        {"answers": [item.to_document() for item in answers], "updatedAt": SERVER_TIMESTAMP},
    )
    return answer


async def complete_attempt(
    store: DocumentStore,
    user_id: str,
    attempt_id: str,
    now: Optional[datetime] = None,
) -> Tuple[AttemptResults, AttemptAnalytics]:
    """
    Score an in-progress attempt and mark it completed.

    Raises:
        DocumentNotFoundError: If the attempt or its test does not exist.
        NotAuthorizedError: If the attempt belongs to another user.
        AttemptStateError: If the attempt is already completed.
    """
    attempt = await _load_attempt(store, user_id, attempt_id)
    _require_in_progress(attempt)
    test = await _load_test(store, attempt.test_id)

    results = calculate_results(attempt.answers, _questions(test))
    analytics = generate_analytics(results)

    now = now or utc_now()
    duration = int((now - attempt.start_time).total_seconds()) if attempt.start_time else 0

    await store.update(
        ATTEMPTS_COLLECTION,
        attempt_id,
        {
            "endTime": SERVER_TIMESTAMP,
            "duration": max(0, duration),
            "status": AttemptStatus.COMPLETED.value,
            "results": results.to_document(),
            "analytics": analytics.to_document(),
            "updatedAt": SERVER_TIMESTAMP,
        },
    )

    logger.info(f"Attempt {attempt_id} completed: {results.correct}/{results.total_questions} correct")
    return results, analytics


async def get_attempt_results(store: DocumentStore, user_id: str, attempt_id: str) -> Dict[str, Any]:
    """
    An attempt with every answer annotated by its question, the correct
    option and the explanation.

    Returns:
        Dict with ``attempt``, ``answers_with_explanations`` and a ``test``
        summary (title, sections, time limit).
    """
    attempt = await _load_attempt(store, user_id, attempt_id)
    test = await _load_test(store, attempt.test_id)
    by_id = {question.question_id: question for question in _questions(test)}

    annotated = []
    for answer in attempt.answers:
        question = by_id.get(answer.question_id)
        annotated.append({
            **answer.to_document(),
            "isCorrect": question is not None and answer.selected_answer == question.correct_answer,
            "correctAnswer": question.correct_answer if question else None,
            "explanation": question.explanation if question else None,
            "question": question.question if question else None,
            "options": question.options if question else None,
        })

    return {
        "attempt": {**attempt.model_dump(by_alias=True), "id": attempt_id},
        "answers_with_explanations": annotated,
        "test": {
            "title": test.get("title"),
            "sections": test.get("sections", []),
            "timeLimit": test.get("timeLimit"),
        },
    }
