"""
Enums

String enums for values stored inside documents.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    STUDENT = "student"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"


class ModuleType(str, enum.Enum):
    """Roadmap module type; selects which reference field is meaningful."""
    VIDEO_SERIES = "video-series"
    PRACTICE_SET = "practice-set"
    MOCK_TEST_SERIES = "mock-test-series"


class AttemptStatus(str, enum.Enum):
    """Lifecycle state of a mock test attempt."""
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
