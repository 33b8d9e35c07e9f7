"""
Document Schema Base

Python attributes are snake_case; stored documents use camelCase keys.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Base for every model persisted as a document."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_document(self, exclude_none: bool = False) -> Dict[str, Any]:
        """Dump with camelCase keys, ready for the document store."""
        return self.model_dump(by_alias=True, exclude_none=exclude_none)
