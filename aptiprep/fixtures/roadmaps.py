"""Sample company preparation roadmaps."""

from typing import List

from aptiprep.fixtures.playlists import LOGICAL_REASONING, QUANT_MASTERY
from aptiprep.models.enums import ModuleType
from aptiprep.schemas.roadmap import Phase, Roadmap, RoadmapModule


def build_roadmaps() -> List[Roadmap]:
    return [
        Roadmap(
            company_key="TCS",
            title="TCS Placement Preparation - Complete Roadmap",
            description="Comprehensive 60-day preparation plan for TCS placement",
            type="company-specific",
            estimated_duration=60,
            difficulty="intermediate",
            prerequisites=["basic-mathematics", "logical-thinking"],
            phases=[
                Phase(
                    phase_id="phase-1",
                    title="Foundation Building (Days 1-20)",
                    description="Master the fundamental concepts",
                    duration=20,
                    order=1,
                    modules=[
                        RoadmapModule(
                            module_id="module-1",
                            title="Quantitative Aptitude Basics",
                            type=ModuleType.VIDEO_SERIES,
                            playlist_id="",
                            playlist_key=QUANT_MASTERY,
                            estimated_time=300,
                            order=1,
                        ),
                        RoadmapModule(
                            module_id="module-2",
                            title="Logical Reasoning Fundamentals",
                            type=ModuleType.VIDEO_SERIES,
                            playlist_id="",
                            playlist_key=LOGICAL_REASONING,
                            estimated_time=180,
                            order=2,
                        ),
                    ],
                ),
                Phase(
                    phase_id="phase-2",
                    title="Skill Development (Days 21-40)",
                    description="Advanced problem solving and speed building",
                    duration=20,
                    order=2,
                    modules=[
                        RoadmapModule(
                            module_id="module-3",
                            title="Advanced Problem Solving",
                            type=ModuleType.PRACTICE_SET,
                            practice_set_id="practice-001",
                            estimated_time=240,
                            order=1,
                        ),
                    ],
                ),
                Phase(
                    phase_id="phase-3",
                    title="Test Preparation (Days 41-60)",
                    description="Mock tests and final preparation",
                    duration=20,
                    order=3,
                    modules=[
                        RoadmapModule(
                            module_id="module-4",
                            title="Full-Length Mock Tests",
                            type=ModuleType.MOCK_TEST_SERIES,
                            test_series_id="test-series-001",
                            estimated_time=600,
                            order=1,
                        ),
                    ],
                ),
            ],
            skills=["quantitative-aptitude", "logical-reasoning", "verbal-ability", "time-management"],
            learning_outcomes=[
                "Master all quantitative aptitude topics",
                "Achieve 80%+ accuracy in logical reasoning",
                "Complete mock tests within time limits",
                "Score above company cutoff consistently",
            ],
        ),
    ]
