"""
Company Schemas

Hiring companies and their aptitude test pattern.
"""

from typing import List

from aptiprep.schemas.base import DocumentModel


class TestSection(DocumentModel):
    """One section of a company's aptitude test."""

    __test__ = False  # not a pytest test class

    name: str
    questions: int
    time_limit: int  # minutes
    topics: List[str] = []


class TestPattern(DocumentModel):
    """Ordered sections plus aggregate totals."""

    __test__ = False

    sections: List[TestSection]
    total_questions: int
    total_time: int  # minutes
    cutoff_percentage: int

    def totals_match(self) -> bool:
        """Whether the declared totals equal the sums over sections (not enforced)."""
        return (
            self.total_questions == sum(s.questions for s in self.sections)
            and self.total_time == sum(s.time_limit for s in self.sections)
        )


class AptitudeInfo(DocumentModel):
    test_pattern: TestPattern
    difficulty: str
    syllabus: List[str] = []
    tips: str = ""


class Company(DocumentModel):
    """
    Company document.

    ``short_name`` doubles as the logical key used to link mock tests and
    roadmaps during seeding.
    """

    name: str
    short_name: str
    logo: str = ""
    description: str = ""
    industry: str = ""
    headquarters: str = ""
    website: str = ""
    aptitude_info: AptitudeInfo
    is_active: bool = True
