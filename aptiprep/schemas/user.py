"""
User Schemas

User profile documents stored in the ``users`` collection.
"""

from typing import Any, List, Optional

from pydantic import Field

from aptiprep.core.documents import SERVER_TIMESTAMP
from aptiprep.models.enums import UserRole
from aptiprep.schemas.base import DocumentModel


class UserProfile(DocumentModel):
    full_name: str = ""
    phone: str = ""
    college: str = ""
    graduation_year: Optional[int] = None
    target_companies: List[str] = []
    goals: List[str] = []
    bio: str = ""


class Preferences(DocumentModel):
    theme: str = "light"
    notifications: bool = True
    email_updates: bool = True
    study_reminders: bool = True
    language: str = "en"


class Gamification(DocumentModel):
    total_xp: int = Field(default=0, alias="totalXP")
    current_streak: int = 0
    longest_streak: int = 0
    level: int = 1
    badges: List[str] = []
    achievements: List[str] = []


class Subscription(DocumentModel):
    plan: str = "free"
    start_date: Any = SERVER_TIMESTAMP
    end_date: Optional[Any] = None
    auto_renew: bool = False


class UserDocument(DocumentModel):
    """
    A platform user.

    The bootstrap administrator is created with the fixed id
    ``admin-user-001`` at seed time.
    """

    user_id: str
    email: str
    display_name: str = ""
    photo_url: str = Field(default="", alias="photoURL")
    role: UserRole = UserRole.STUDENT
    profile: UserProfile = UserProfile()
    preferences: Preferences = Preferences()
    gamification: Gamification = Gamification()
    subscription: Subscription = Subscription()
