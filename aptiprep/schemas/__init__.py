"""
Aptiprep Backend - Schemas Module

Pydantic models for stored documents and API request/response validation.
"""

from aptiprep.schemas.base import DocumentModel
from aptiprep.schemas.company import AptitudeInfo, Company, TestPattern, TestSection
from aptiprep.schemas.playlist import (
    Instructor,
    Playlist,
    PlaylistVideo,
    Thumbnail,
    Video,
)
from aptiprep.schemas.mock_test import MockTest, MockTestSection, PassingCriteria, Question
from aptiprep.schemas.roadmap import Phase, Roadmap, RoadmapModule
from aptiprep.schemas.user import Gamification, Preferences, Subscription, UserDocument, UserProfile
from aptiprep.schemas.progress import VideoProgress, WatchStats
from aptiprep.schemas.attempt import AttemptAnswer, AttemptResults, TestAttempt

__all__ = [
    "DocumentModel",
    # Company
    "AptitudeInfo",
    "Company",
    "TestPattern",
    "TestSection",
    # Playlist / Video
    "Instructor",
    "Playlist",
    "PlaylistVideo",
    "Thumbnail",
    "Video",
    # Mock tests
    "MockTest",
    "MockTestSection",
    "PassingCriteria",
    "Question",
    # Roadmaps
    "Phase",
    "Roadmap",
    "RoadmapModule",
    # Users
    "Gamification",
    "Preferences",
    "Subscription",
    "UserDocument",
    "UserProfile",
    # Progress
    "VideoProgress",
    "WatchStats",
    # Attempts
    "AttemptAnswer",
    "AttemptResults",
    "TestAttempt",
]
