"""
Roadmap Schemas

Company preparation plans: ordered phases of ordered modules.
"""

from typing import List, Optional

from pydantic import Field

from aptiprep.models.enums import ModuleType
from aptiprep.schemas.base import DocumentModel


class RoadmapModule(DocumentModel):
    """
    A roadmap step, tagged by ``type``.

    Only one reference field is meaningful per type: ``playlist_id`` for
    video series, ``practice_set_id`` for practice sets and
    ``test_series_id`` for mock test series. ``playlist_key`` is a
    fixture-only playlist slug used during seeding.
    """

    module_id: str
    title: str
    type: ModuleType
    playlist_id: Optional[str] = None
    practice_set_id: Optional[str] = None
    test_series_id: Optional[str] = None
    playlist_key: Optional[str] = Field(default=None, exclude=True)
    estimated_time: int  # minutes
    is_required: bool = True
    order: int


class Phase(DocumentModel):
    phase_id: str
    title: str
    description: str = ""
    duration: int  # days
    order: int
    modules: List[RoadmapModule] = []


class Roadmap(DocumentModel):
    company_key: Optional[str] = Field(default=None, exclude=True)
    title: str
    description: str = ""
    company_id: str = ""
    type: str = "company-specific"
    estimated_duration: int  # days
    difficulty: str = "intermediate"
    prerequisites: List[str] = []
    phases: List[Phase]
    skills: List[str] = []
    learning_outcomes: List[str] = []
    is_published: bool = True
