"""
Schema Validation Tests

Tests for document models and the bundled fixtures.
"""

import pytest
from pydantic import ValidationError

from aptiprep.fixtures import SeedFixtures
from aptiprep.schemas.mock_test import MockTest
from aptiprep.schemas.playlist import Playlist, Thumbnail
from aptiprep.schemas.progress import VideoProgress


def _playlist_data(**overrides):
    data = {
        "title": "P",
        "category": "quantitative",
        "level": "beginner",
        "videos": [
            {"videoId": "v1", "youtubeId": "y1", "title": "One", "duration": 100, "order": 1},
            {"videoId": "v2", "youtubeId": "y2", "title": "Two", "duration": 200, "order": 2},
        ],
        "totalVideos": 2,
        "totalDuration": 300,
        "instructor": {"name": "Dr. X"},
    }
    data.update(overrides)
    return data


def _mock_test_data(**overrides):
    data = {
        "title": "T",
        "timeLimit": 60,
        "sections": [{"sectionId": "s1", "name": "Quant", "timeLimit": 30, "questions": 1}],
        "questions": [{
            "questionId": "q1",
            "sectionId": "s1",
            "question": "2 + 2?",
            "options": ["3", "4"],
            "correctAnswer": 1,
        }],
        "passingCriteria": {"minimumScore": 50},
    }
    data.update(overrides)
    return data


class TestPlaylistSchema:
    """Tests for Playlist validation."""

    def test_valid(self):
        """Verify consistent totals validate and dump as camelCase."""
        playlist = Playlist.model_validate(_playlist_data(slug="p"))

        document = playlist.to_document()
        assert document["totalDuration"] == 300
        assert document["videos"][0]["youtubeId"] == "y1"
        assert "slug" not in document

    def test_total_videos_mismatch(self):
        """Verify total_videos must equal the number of videos."""
        with pytest.raises(ValidationError, match="total_videos"):
            Playlist.model_validate(_playlist_data(totalVideos=3))

    def test_total_duration_mismatch(self):
        """Verify total_duration must equal the sum of durations."""
        with pytest.raises(ValidationError, match="total_duration"):
            Playlist.model_validate(_playlist_data(totalDuration=301))

    def test_thumbnail_urls(self):
        thumbnail = Thumbnail.for_youtube_id("abc")

        assert thumbnail.default == "https://img.youtube.com/vi/abc/default.jpg"
        assert thumbnail.medium == "https://img.youtube.com/vi/abc/mqdefault.jpg"
        assert thumbnail.high == "https://img.youtube.com/vi/abc/hqdefault.jpg"


class TestMockTestSchema:
    """Tests for MockTest validation."""

    def test_valid(self):
        test = MockTest.model_validate(_mock_test_data(companyKey="tcs"))

        assert test.company_key == "tcs"
        assert "companyKey" not in test.to_document()

    def test_unknown_section(self):
        """Verify questions must reference a declared section."""
        data = _mock_test_data()
        data["questions"][0]["sectionId"] = "s9"

        with pytest.raises(ValidationError, match="unknown section"):
            MockTest.model_validate(data)

    def test_answer_out_of_range(self):
        """Verify correct_answer must index an option."""
        data = _mock_test_data()
        data["questions"][0]["correctAnswer"] = 2

        with pytest.raises(ValidationError, match="correct_answer"):
            MockTest.model_validate(data)


class TestVideoProgressSchema:
    """Tests for VideoProgress documents."""

    def test_id_not_stored(self):
        """Verify the document key is not part of the stored body."""
        progress = VideoProgress(id="u1_v1", user_id="u1", video_id="v1", current_time=5, duration=10)

        document = progress.to_document()
        assert "id" not in document
        assert document["userId"] == "u1"
        assert document["currentTime"] == 5


class TestFixtures:
    """Tests for the bundled sample data."""

    def test_fixture_counts(self):
        """Verify the sample dataset has the expected shape."""
        fixtures = SeedFixtures()

        assert len(fixtures.companies) == 3
        assert len(fixtures.playlists) == 2
        assert len(fixtures.mock_tests) == 1
        assert len(fixtures.roadmaps) == 1
        assert fixtures.video_count == 5

    def test_fixture_builders_return_fresh_objects(self):
        """Verify separate fixture sets do not share mutable state."""
        first = SeedFixtures()
        second = SeedFixtures()

        first.playlists[0].videos.clear()

        assert len(second.playlists[0].videos) > 0
