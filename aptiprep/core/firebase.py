"""
Firebase Admin Initialization

Initializes the default firebase_admin App once per process.
"""

from pathlib import Path
from typing import Optional

import firebase_admin
from firebase_admin import credentials

from aptiprep.core.config import Settings


def get_firebase_app(settings: Optional[Settings] = None) -> firebase_admin.App:
    """
    Get or initialize the default Firebase app.

    Uses the service account key at ``FIREBASE_CREDENTIALS_PATH`` when the
    file exists, and Application Default Credentials otherwise.

    Args:
        settings: Settings to read from; defaults to the global settings.

    Returns:
        firebase_admin.App: The initialized default app.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if settings is None:
        from aptiprep.core.config import settings as global_settings
        settings = global_settings

    key_path = Path(settings.FIREBASE_CREDENTIALS_PATH)
    if key_path.is_file():
        cred = credentials.Certificate(str(key_path))
    else:
        cred = credentials.ApplicationDefault()

    return firebase_admin.initialize_app(cred, {"projectId": settings.FIREBASE_PROJECT_ID})
