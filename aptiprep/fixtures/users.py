"""Bootstrap administrator account."""

from aptiprep.core.documents import SERVER_TIMESTAMP
from aptiprep.models.enums import UserRole
from aptiprep.schemas.user import Gamification, Preferences, Subscription, UserDocument, UserProfile


ADMIN_USER_ID = "admin-user-001"


def build_admin_user() -> UserDocument:
    return UserDocument(
        user_id=ADMIN_USER_ID,
        email="admin@aptiprep.co.in",
        display_name="Admin User",
        photo_url="",
        role=UserRole.ADMIN,
        profile=UserProfile(
            full_name="Admin User",
            phone="+91-9999999999",
            college="Aptiprep",
            graduation_year=None,
            target_companies=[],
            goals=["platform-management"],
            bio="Platform administrator",
        ),
        preferences=Preferences(
            theme="light",
            notifications=True,
            email_updates=True,
            study_reminders=False,
            language="en",
        ),
        gamification=Gamification(
            total_xp=10000,
            current_streak=0,
            longest_streak=0,
            level=10,
            badges=["admin", "founder"],
            achievements=[],
        ),
        subscription=Subscription(
            plan="enterprise",
            start_date=SERVER_TIMESTAMP,
            end_date=None,
            auto_renew=False,
        ),
    )
