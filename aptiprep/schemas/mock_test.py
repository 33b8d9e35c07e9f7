"""
Mock Test Schemas

Company-specific practice tests with sections and multiple-choice questions.
"""

from typing import List, Optional

from pydantic import Field, model_validator

from aptiprep.schemas.base import DocumentModel


class MockTestSection(DocumentModel):
    section_id: str
    name: str
    time_limit: int  # minutes
    questions: int
    topics: List[str] = []


class Question(DocumentModel):
    """A multiple-choice question; ``correct_answer`` is a zero-based option index."""

    question_id: str
    section_id: str
    question: str
    options: List[str]
    correct_answer: int
    explanation: str = ""
    difficulty: str = "medium"
    topic: str = ""
    time_to_solve: int = 60  # seconds


class PassingCriteria(DocumentModel):
    minimum_score: int
    section_wise_minimum: bool = False


class MockTest(DocumentModel):
    """
    Mock test document.

    ``company_id`` is filled in by the seeding workflow. ``company_key`` is a
    fixture-only company short name used to resolve it.
    """

    company_key: Optional[str] = Field(default=None, exclude=True)
    title: str
    description: str = ""
    company_id: str = ""
    type: str = "company-specific"
    difficulty: str = "medium"
    time_limit: int  # minutes
    sections: List[MockTestSection]
    questions: List[Question] = []
    instructions: List[str] = []
    passing_criteria: PassingCriteria
    is_active: bool = True

    @model_validator(mode="after")
    def check_questions(self) -> "MockTest":
        section_ids = {section.section_id for section in self.sections}
        for question in self.questions:
            if question.section_id not in section_ids:
                raise ValueError(
                    f"Question {question.question_id} references unknown section {question.section_id}"
                )
            if not 0 <= question.correct_answer < len(question.options):
                raise ValueError(
                    f"Question {question.question_id} has correct_answer outside its options"
                )
        return self
