from datetime import datetime, timezone
from typing import Any, Dict

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MongoModel(BaseModel):
    """
    Base class for stored documents and embedded entries.

    The id is generated on the client so an embedded entry (a like, a
    comment, an experience row) has its `_id` before the parent document
    is written.
    """

    id: ObjectId = Field(default_factory=ObjectId, alias="_id")

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    def to_mongo(self) -> Dict[str, Any]:
        """Dumps the model with `_id` and other aliases as stored keys."""
        return self.model_dump(by_alias=True)
