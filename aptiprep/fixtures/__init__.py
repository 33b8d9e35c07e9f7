"""
Seed Fixtures

Static sample records used to populate an empty document store.
"""

from dataclasses import dataclass, field
from typing import List

from aptiprep.fixtures.companies import build_companies
from aptiprep.fixtures.mock_tests import build_mock_tests
from aptiprep.fixtures.playlists import build_playlists
from aptiprep.fixtures.roadmaps import build_roadmaps
from aptiprep.fixtures.users import ADMIN_USER_ID, build_admin_user
from aptiprep.schemas.company import Company
from aptiprep.schemas.mock_test import MockTest
from aptiprep.schemas.playlist import Playlist
from aptiprep.schemas.roadmap import Roadmap
from aptiprep.schemas.user import UserDocument


@dataclass
class SeedFixtures:
    """The full dataset handed to the seeding workflow."""
    companies: List[Company] = field(default_factory=build_companies)
    playlists: List[Playlist] = field(default_factory=build_playlists)
    mock_tests: List[MockTest] = field(default_factory=build_mock_tests)
    roadmaps: List[Roadmap] = field(default_factory=build_roadmaps)
    admin_user: UserDocument = field(default_factory=build_admin_user)

    @property
    def video_count(self) -> int:
        return sum(len(playlist.videos) for playlist in self.playlists)


__all__ = [
    "ADMIN_USER_ID",
    "SeedFixtures",
    "build_admin_user",
    "build_companies",
    "build_mock_tests",
    "build_playlists",
    "build_roadmaps",
]
