"""
Aptiprep Backend - Services Module

Business logic layer.
"""

from aptiprep.services import admin_service
from aptiprep.services import progress_service
from aptiprep.services import seed_service
from aptiprep.services import content_service
from aptiprep.services import attempt_service

__all__ = [
    "admin_service",
    "attempt_service",
    "content_service",
    "progress_service",
    "seed_service",
]
