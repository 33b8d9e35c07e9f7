"""
Seed Service

One-shot provisioning of an empty document store with the fixture dataset.

Records are written in dependency order (companies, playlists, videos, mock
tests, roadmaps, admin user) and generated ids are threaded forward into the
records that reference them. Each entity type is committed as one batch.
Failures are not retried or rolled back: a failed step raises SeedError and
leaves earlier batches in place.

Re-running the workflow creates a second copy of everything under new ids.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from aptiprep.core.documents import SERVER_TIMESTAMP, DocumentStore, WriteOp, utc_now
from aptiprep.core.errors import SeedError
from aptiprep.fixtures import SeedFixtures
from aptiprep.models.enums import ModuleType
from aptiprep.schemas.company import Company
from aptiprep.schemas.mock_test import MockTest
from aptiprep.schemas.playlist import Playlist, PlaylistVideo, Thumbnail, Video
from aptiprep.schemas.roadmap import Roadmap, RoadmapModule
from aptiprep.schemas.user import UserDocument


logger = logging.getLogger(__name__)

COMPANIES_COLLECTION = "companies"
PLAYLISTS_COLLECTION = "playlists"
VIDEOS_COLLECTION = "videos"
MOCK_TESTS_COLLECTION = "mockTests"
ROADMAPS_COLLECTION = "roadmaps"
USERS_COLLECTION = "users"


@dataclass
class SeedReport:
    """Ids generated by a seeding run, in creation order."""
    company_ids: List[str] = field(default_factory=list)
    playlist_ids: List[str] = field(default_factory=list)
    video_ids: List[str] = field(default_factory=list)
    mock_test_ids: List[str] = field(default_factory=list)
    roadmap_ids: List[str] = field(default_factory=list)
    admin_user_id: Optional[str] = None

    def counts(self) -> Dict[str, int]:
        return {
            "companies": len(self.company_ids),
            "playlists": len(self.playlist_ids),
            "videos": len(self.video_ids),
            "mock tests": len(self.mock_test_ids),
            "roadmaps": len(self.roadmap_ids),
            "admin users": 1 if self.admin_user_id else 0,
        }


def _timestamps() -> Dict[str, Any]:
    return {"createdAt": SERVER_TIMESTAMP, "updatedAt": SERVER_TIMESTAMP}


async def _commit(store: DocumentStore, step: str, ops: Sequence[WriteOp]) -> None:
    """Submit one step's batch, converting any failure into SeedError."""
    try:
        await store.batch_write(ops)
    except Exception as e:
        logger.error(f"Batch of {len(ops)} {step} failed: {e}")
        raise SeedError(step, e) from e


# ============== Id Resolution ==============

def resolve_company_id(
    company_key: Optional[str],
    company_lookup: Mapping[str, str],
    company_ids: Sequence[str],
) -> str:
    """
    Resolve a company short name to its generated id.

    A missing or unknown key falls back to the first generated company.
    """
    if company_key and company_key in company_lookup:
        return company_lookup[company_key]
    if company_key:
        logger.warning(f"Unknown company key '{company_key}', using the first company")
    return company_ids[0] if company_ids else ""


def resolve_playlist_id(
    module: RoadmapModule,
    module_index: int,
    playlist_lookup: Mapping[str, str],
    playlist_ids: Sequence[str],
) -> Optional[str]:
    """
    Pick the playlist id for a roadmap module.

    Video-series modules use their ``playlist_key`` when it names a seeded
    playlist. Otherwise the module's position within its phase selects a
    playlist, and positions past the end fall back to the first playlist.
    Other module types keep their current value.
    """
    if module.type != ModuleType.VIDEO_SERIES.value:
        return module.playlist_id

    if module.playlist_key and module.playlist_key in playlist_lookup:
        return playlist_lookup[module.playlist_key]

    if module_index < len(playlist_ids):
        return playlist_ids[module_index]
    if playlist_ids:
        return playlist_ids[0]
    return module.playlist_id


def backfill_modules(
    roadmap: Roadmap,
    playlist_lookup: Mapping[str, str],
    playlist_ids: Sequence[str],
) -> Roadmap:
    """Return a copy of ``roadmap`` with playlist ids filled into its modules."""
    filled = roadmap.model_copy(deep=True)
    for phase in filled.phases:
        for index, module in enumerate(phase.modules):
            module.playlist_id = resolve_playlist_id(module, index, playlist_lookup, playlist_ids)
    return filled


# ============== Video Projection ==============

def materialize_video(
    entry: PlaylistVideo,
    playlist: Playlist,
    video_id: str,
    published_at: str,
) -> Video:
    """
    Project a playlist entry into a standalone Video.

    Descriptive fields are copied from ``playlist`` once; later playlist
    edits are not reflected in the video.
    """
    return Video(
        video_id=video_id,
        youtube_id=entry.youtube_id,
        title=entry.title,
        description=f"Learn {entry.title} - Part of {playlist.title}",
        thumbnail=Thumbnail.for_youtube_id(entry.youtube_id),
        duration=entry.duration,
        published_at=published_at,
        category=playlist.category,
        subcategory=playlist.subcategory,
        tags=list(playlist.tags),
        level=playlist.level,
        instructor=playlist.instructor.model_copy(),
    )


# ============== Seeding Steps ==============

async def seed_companies(store: DocumentStore, companies: Sequence[Company]) -> List[str]:
    """Write all companies in one batch and return their ids."""
    logger.info("Seeding companies...")
    ops = []
    company_ids = []

    for company in companies:
        company_id = store.new_id(COMPANIES_COLLECTION)
        data = {**company.to_document(), "companyId": company_id, **_timestamps()}
        ops.append(WriteOp(COMPANIES_COLLECTION, company_id, data))
        company_ids.append(company_id)

    await _commit(store, "companies", ops)
    logger.info(f"Seeded {len(company_ids)} companies")
    return company_ids


async def seed_playlists(store: DocumentStore, playlists: Sequence[Playlist]) -> List[str]:
    """Write all playlists in one batch and return their ids."""
    logger.info("Seeding playlists...")
    ops = []
    playlist_ids = []

    for playlist in playlists:
        playlist_id = store.new_id(PLAYLISTS_COLLECTION)
        data = {**playlist.to_document(), "playlistId": playlist_id, **_timestamps()}
        ops.append(WriteOp(PLAYLISTS_COLLECTION, playlist_id, data))
        playlist_ids.append(playlist_id)

    await _commit(store, "playlists", ops)
    logger.info(f"Seeded {len(playlist_ids)} playlists")
    return playlist_ids


async def seed_videos(store: DocumentStore, playlists: Sequence[Playlist]) -> List[str]:
    """Materialize one Video per playlist entry, all in one batch."""
    logger.info("Seeding videos...")
    published_at = utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")
    ops = []
    video_ids = []

    for playlist in playlists:
        for entry in playlist.videos:
            video_id = store.new_id(VIDEOS_COLLECTION)
            video = materialize_video(entry, playlist, video_id, published_at)
            ops.append(WriteOp(VIDEOS_COLLECTION, video_id, {**video.to_document(), **_timestamps()}))
            video_ids.append(video_id)

    await _commit(store, "videos", ops)
    logger.info(f"Seeded {len(video_ids)} videos")
    return video_ids


async def seed_mock_tests(
    store: DocumentStore,
    mock_tests: Sequence[MockTest],
    company_ids: Sequence[str],
    company_lookup: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Write all mock tests in one batch, linked to their companies."""
    logger.info("Seeding mock tests...")
    company_lookup = company_lookup or {}
    ops = []
    test_ids = []

    for test in mock_tests:
        test_id = store.new_id(MOCK_TESTS_COLLECTION)
        data = {
            **test.to_document(),
            "testId": test_id,
            "companyId": resolve_company_id(test.company_key, company_lookup, company_ids),
            **_timestamps(),
        }
        ops.append(WriteOp(MOCK_TESTS_COLLECTION, test_id, data))
        test_ids.append(test_id)

    await _commit(store, "mock tests", ops)
    logger.info(f"Seeded {len(test_ids)} mock tests")
    return test_ids


async def seed_roadmaps(
    store: DocumentStore,
    roadmaps: Sequence[Roadmap],
    company_ids: Sequence[str],
    playlist_ids: Sequence[str],
    company_lookup: Optional[Mapping[str, str]] = None,
    playlist_lookup: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Write all roadmaps in one batch with company and playlist ids filled in."""
    logger.info("Seeding roadmaps...")
    company_lookup = company_lookup or {}
    playlist_lookup = playlist_lookup or {}
    ops = []
    roadmap_ids = []

    for roadmap in roadmaps:
        roadmap_id = store.new_id(ROADMAPS_COLLECTION)
        filled = backfill_modules(roadmap, playlist_lookup, playlist_ids)
        data = {
            **filled.to_document(exclude_none=True),
            "roadmapId": roadmap_id,
            "companyId": resolve_company_id(roadmap.company_key, company_lookup, company_ids),
            **_timestamps(),
        }
        ops.append(WriteOp(ROADMAPS_COLLECTION, roadmap_id, data))
        roadmap_ids.append(roadmap_id)

    await _commit(store, "roadmaps", ops)
    logger.info(f"Seeded {len(roadmap_ids)} roadmaps")
    return roadmap_ids


async def create_admin_user(store: DocumentStore, user: UserDocument) -> str:
    """Write the bootstrap administrator under its fixed id."""
    logger.info("Creating admin user...")
    data = {
        **user.to_document(),
        "createdAt": SERVER_TIMESTAMP,
        "updatedAt": SERVER_TIMESTAMP,
        "lastActiveAt": SERVER_TIMESTAMP,
    }

    try:
        await store.set(USERS_COLLECTION, user.user_id, data)
    except Exception as e:
        raise SeedError("admin user", e) from e

    logger.info(f"Created admin user {user.user_id}")
    return user.user_id


async def seed_database(
    store: DocumentStore,
    fixtures: Optional[SeedFixtures] = None,
) -> SeedReport:
    """
    Run every seeding step in dependency order.

    Args:
        store: Target document store.
        fixtures: Dataset to seed; the bundled fixtures by default.

    Returns:
        SeedReport with the generated ids.

    Raises:
        SeedError: If any step fails. Later steps are not attempted.
    """
    fixtures = fixtures or SeedFixtures()
    report = SeedReport()

    report.company_ids = await seed_companies(store, fixtures.companies)
    company_lookup = {
        company.short_name: company_id
        for company, company_id in zip(fixtures.companies, report.company_ids)
    }

    report.playlist_ids = await seed_playlists(store, fixtures.playlists)
    playlist_lookup = {
        playlist.slug: playlist_id
        for playlist, playlist_id in zip(fixtures.playlists, report.playlist_ids)
        if playlist.slug
    }

    report.video_ids = await seed_videos(store, fixtures.playlists)
    report.mock_test_ids = await seed_mock_tests(
        store, fixtures.mock_tests, report.company_ids, company_lookup
    )
    report.roadmap_ids = await seed_roadmaps(
        store,
        fixtures.roadmaps,
        report.company_ids,
        report.playlist_ids,
        company_lookup,
        playlist_lookup,
    )
    report.admin_user_id = await create_admin_user(store, fixtures.admin_user)

    logger.info(f"Seeding finished: {report.counts()}")
    return report
