"""
DevConnector Backend — Profile Service
========================================

What:  Profile CRUD plus the nested experience and education lists.
How:   Profiles are keyed by their owner's user id. Every read joins the
       owner's name and avatar from the users collection before shaping
       the document into a `ProfileResponse`.
Who:   Called by the /api/profile route handlers.

Behaviour the web client depends on:
    - POST /api/profile is an upsert; `social` is rebuilt from the links
      present in each request, so omitted links are cleared.
    - Experience/education edits never create a profile. Editing before
      the profile exists is a server error (ProfileRequiredError).
    - Deleting an experience/education id that does not exist leaves the
      list unchanged and still writes the profile back.
    - Deleting an account removes the profile and the user, not the
      user's posts.
"""

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from devconnector.database import Database, parse_object_id
from devconnector.exceptions import NoProfileError, ProfileRequiredError, ValidationError
from devconnector.models import EducationEntry, ExperienceEntry, MongoModel, ProfileDocument
from devconnector.schemas.common import MessageResponse
from devconnector.schemas.profile import (
    SOCIAL_NETWORKS,
    EducationRequest,
    ExperienceRequest,
    ProfileRequest,
    ProfileResponse,
)

logger = logging.getLogger(__name__)

OWNER_PROJECTION = {"name": 1, "avatar": 1}
TRIMMED_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")


def build_profile_fields(payload: ProfileRequest) -> Dict[str, Any]:
    """
    Builds the partial update document for a profile upsert.

    Only non-empty fields are included, trimmed. Skills become a list.
    `social` is always present and only holds the links sent this time.
    """
    fields: Dict[str, Any] = {}
    for name in TRIMMED_FIELDS:
        value = getattr(payload, name)
        if value and value.strip():
            fields[name] = value.strip()

    skills = payload.skill_list()
    if not skills:
        raise ValidationError("Skills is required", field="skills")
    fields["skills"] = skills

    social: Dict[str, str] = {}
    for network in SOCIAL_NETWORKS:
        link = getattr(payload, network)
        if link and link.strip():
            social[network] = link.strip()
    fields["social"] = social
    return fields


class ProfileService:
    def __init__(self, database: Database):
        self.database = database

    # ── Reads ─────────────────────────────────────────────────────────────

    async def _with_owner(self, profile: Dict[str, Any]) -> ProfileResponse:
        owner = await self.database.users.find_one({"_id": profile["user"]}, OWNER_PROJECTION)
        return ProfileResponse.model_validate({**profile, "user": owner})

    async def get_my_profile(self, user_id: ObjectId) -> ProfileResponse:
        profile = await self.database.profiles.find_one({"user": user_id})
        if profile is None:
            raise NoProfileError("There is no profile for this user")
        return await self._with_owner(profile)

    async def get_profile_by_user_id(self, user_id: str) -> ProfileResponse:
        """Public lookup; malformed ids answer like missing profiles."""
        oid = parse_object_id(user_id)
        profile = None
        if oid is not None:
            profile = await self.database.profiles.find_one({"user": oid})
        if profile is None:
            raise NoProfileError(context={"user_id": user_id})
        return await self._with_owner(profile)

    async def list_profiles(self) -> List[ProfileResponse]:
        profiles = await self.database.profiles.find().to_list(length=None)
        owner_ids = list({profile["user"] for profile in profiles})
        owners = {}
        if owner_ids:
            cursor = self.database.users.find({"_id": {"$in": owner_ids}}, OWNER_PROJECTION)
            owners = {owner["_id"]: owner for owner in await cursor.to_list(length=None)}
        return [
            ProfileResponse.model_validate({**profile, "user": owners.get(profile["user"])})
            for profile in profiles
        ]

    # ── Writes ────────────────────────────────────────────────────────────

    async def upsert_profile(self, user_id: ObjectId, payload: ProfileRequest) -> ProfileResponse:
        """Updates the caller's profile, or creates it on first save."""
        profiles = self.database.profiles
        fields = build_profile_fields(payload)

        if await profiles.find_one({"user": user_id}) is None:
            document = ProfileDocument(user=user_id, **fields).to_mongo()
            try:
                await profiles.insert_one(document)
                logger.info("Created profile for user %s", user_id)
            except DuplicateKeyError:
                # Lost a race with a concurrent first save
                await profiles.update_one({"user": user_id}, {"$set": fields})
        else:
            await profiles.update_one({"user": user_id}, {"$set": fields})

        return await self.get_my_profile(user_id)

    async def delete_account(self, user_id: ObjectId) -> MessageResponse:
        # Posts written by the user are left in place.
        await self.database.profiles.delete_one({"user": user_id})
        await self.database.users.delete_one({"_id": user_id})
        logger.info("Deleted profile and account of user %s", user_id)
        return MessageResponse(msg="Profile deleted!")

    # ── Experience / Education ────────────────────────────────────────────

    async def _load_for_edit(self, user_id: ObjectId) -> Dict[str, Any]:
        profile = await self.database.profiles.find_one({"user": user_id})
        if profile is None:
            logger.error("Profile edit for user %s without a profile", user_id)
            raise ProfileRequiredError(user_id=str(user_id))
        return profile

    async def _save_entries(
        self, profile: Dict[str, Any], field: str, entries: List[Dict[str, Any]]
    ) -> ProfileResponse:
        await self.database.profiles.update_one(
            {"_id": profile["_id"]}, {"$set": {field: entries}}
        )
        profile[field] = entries
        return await self._with_owner(profile)

    async def _prepend_entry(
        self, user_id: ObjectId, field: str, entry: MongoModel
    ) -> ProfileResponse:
        profile = await self._load_for_edit(user_id)
        entries = [entry.to_mongo()] + list(profile.get(field) or [])
        return await self._save_entries(profile, field, entries)

    async def _remove_entry(
        self, user_id: ObjectId, field: str, entry_id: str
    ) -> ProfileResponse:
        profile = await self._load_for_edit(user_id)
        entries = list(profile.get(field) or [])
        remove_index: Optional[int] = next(
            (i for i, entry in enumerate(entries) if str(entry.get("_id")) == entry_id),
            None,
        )
        if remove_index is None:
            logger.warning("No %s entry %s on profile of user %s", field, entry_id, user_id)
        else:
            del entries[remove_index]
        return await self._save_entries(profile, field, entries)

    async def add_experience(self, user_id: ObjectId, payload: ExperienceRequest) -> ProfileResponse:
        entry = ExperienceEntry.model_validate(payload.model_dump(by_alias=True))
        return await self._prepend_entry(user_id, "experience", entry)

    async def remove_experience(self, user_id: ObjectId, exp_id: str) -> ProfileResponse:
        return await self._remove_entry(user_id, "experience", exp_id)

    async def add_education(self, user_id: ObjectId, payload: EducationRequest) -> ProfileResponse:
        entry = EducationEntry.model_validate(payload.model_dump(by_alias=True))
        return await self._prepend_entry(user_id, "education", entry)

    async def remove_education(self, user_id: ObjectId, edu_id: str) -> ProfileResponse:
        return await self._remove_entry(user_id, "education", edu_id)
