from datetime import datetime
from typing import Optional

from pydantic import Field

from devconnector.models.base import MongoModel, utcnow


class UserDocument(MongoModel):
    """
    An account in the `users` collection.

    `password` always holds a bcrypt hash. It is never part of a response
    schema, so it cannot leak through an endpoint.
    """

    name: str
    email: str
    password: str
    avatar: Optional[str] = None
    date: datetime = Field(default_factory=utcnow)
