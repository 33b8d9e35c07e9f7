"""
Aptiprep Backend - Core Module

Configuration, document stores, identity and session handling.
"""

from aptiprep.core.config import get_settings, settings
from aptiprep.core.documents import SERVER_TIMESTAMP, DocumentStore, WriteOp
from aptiprep.core.errors import (
    AptiprepError,
    AttemptStateError,
    AuthError,
    DocumentNotFoundError,
    DocumentStoreError,
    NotAuthorizedError,
    SeedError,
)

__all__ = [
    "settings",
    "get_settings",
    "SERVER_TIMESTAMP",
    "DocumentStore",
    "WriteOp",
    "AptiprepError",
    "AttemptStateError",
    "AuthError",
    "DocumentNotFoundError",
    "DocumentStoreError",
    "NotAuthorizedError",
    "SeedError",
]
