"""Sample learning playlists."""

from typing import List

from aptiprep.schemas.playlist import Instructor, Playlist, PlaylistVideo


# Placeholder YouTube id shared by every sample video
SAMPLE_YOUTUBE_ID = "dQw4w9WgXcQ"

QUANT_MASTERY = "quant-mastery"
LOGICAL_REASONING = "logical-reasoning-essentials"


def build_playlists() -> List[Playlist]:
    return [
        Playlist(
            slug=QUANT_MASTERY,
            title="Complete Quantitative Aptitude Mastery",
            description="Master all quantitative aptitude topics from basics to advanced level",
            thumbnail="https://example.com/thumbnails/qa-mastery.jpg",
            category="quantitative-aptitude",
            subcategory="comprehensive",
            level="intermediate",
            tags=["arithmetic", "algebra", "geometry", "data-interpretation", "competitive-exam"],
            videos=[
                PlaylistVideo(
                    video_id="video-001",
                    youtube_id=SAMPLE_YOUTUBE_ID,
                    title="Number System Fundamentals",
                    duration=1800,
                    order=1,
                ),
                PlaylistVideo(
                    video_id="video-002",
                    youtube_id=SAMPLE_YOUTUBE_ID,
                    title="Percentage Calculations",
                    duration=1200,
                    order=2,
                ),
                PlaylistVideo(
                    video_id="video-003",
                    youtube_id=SAMPLE_YOUTUBE_ID,
                    title="Profit and Loss Problems",
                    duration=1500,
                    order=3,
                ),
            ],
            total_videos=3,
            total_duration=4500,
            instructor=Instructor(
                name="Prof. Rajesh Kumar",
                bio="Mathematics expert with 15+ years of teaching experience",
                avatar="https://example.com/avatars/prof-rajesh.jpg",
            ),
        ),
        Playlist(
            slug=LOGICAL_REASONING,
            title="Logical Reasoning Essentials",
            description="Build strong logical reasoning skills for competitive exams",
            thumbnail="https://example.com/thumbnails/lr-essentials.jpg",
            category="logical-reasoning",
            subcategory="fundamentals",
            level="beginner",
            tags=["logical-reasoning", "analytical-reasoning", "pattern-recognition"],
            videos=[
                PlaylistVideo(
                    video_id="video-004",
                    youtube_id=SAMPLE_YOUTUBE_ID,
                    title="Introduction to Logical Reasoning",
                    duration=900,
                    order=1,
                ),
                PlaylistVideo(
                    video_id="video-005",
                    youtube_id=SAMPLE_YOUTUBE_ID,
                    title="Pattern Recognition Techniques",
                    duration=1200,
                    order=2,
                ),
            ],
            total_videos=2,
            total_duration=2100,
            instructor=Instructor(
                name="Dr. Priya Sharma",
                bio="Logical reasoning specialist and competitive exam trainer",
                avatar="https://example.com/avatars/dr-priya.jpg",
            ),
        ),
    ]
