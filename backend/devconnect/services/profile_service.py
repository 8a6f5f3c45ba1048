import logging
import uuid
from typing import Any, Dict, List, Union
from sqlalchemy.orm import Session
from devconnect.core.errors import NotFound
from devconnect.models.profile import Profile
from devconnect.models.user import User
from devconnect.services.auth_service import auth_service

logger = logging.getLogger(__name__)

NO_PROFILE_MESSAGE = "There is no profile for this user"
PROFILE_NOT_FOUND_MESSAGE = "Profile not found"

SCALAR_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")
SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def parse_skills(skills: Union[str, List[str]]) -> List[str]:
    """Split a comma-delimited skills string (or clean a list) into trimmed items"""
    items = skills.split(",") if isinstance(skills, str) else skills
    return [item.strip() for item in items if item and item.strip()]


def build_profile_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build the set of profile columns to write from a request field bag.

    Only non-empty fields are included, so an update never blanks out a
    value the caller left out. Social links may arrive flat or nested under
    "social"; flat keys win.
    """
    fields: Dict[str, Any] = {
        name: data[name] for name in SCALAR_FIELDS if data.get(name)
    }

    if data.get("skills"):
        skills = parse_skills(data["skills"])
        if skills:
            fields["skills"] = skills

    social = dict(data.get("social") or {})
    social.update({name: data[name] for name in SOCIAL_FIELDS if data.get(name)})
    social = {name: value for name, value in social.items()
              if name in SOCIAL_FIELDS and value}
    if social:
        fields["social"] = social

    return fields


def _new_entry(entry: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": uuid.uuid4().hex, **entry}


def _without_entry(entries: List[Dict[str, Any]], entry_id: str, not_found_message: str) -> List[Dict[str, Any]]:
    remaining = [entry for entry in entries if entry.get("id") != entry_id]
    if len(remaining) == len(entries):
        raise NotFound(not_found_message)
    return remaining


class ProfileService:
    """Profile upserts and experience/education sub-list mutations"""

    @staticmethod
    def get_own_profile(db: Session, user_id: int) -> Profile:
        profile = db.query(Profile).filter(Profile.user_id == user_id).first()
        if not profile:
            raise NotFound(NO_PROFILE_MESSAGE)
        return profile

    @staticmethod
    def get_profile_by_user(db: Session, user_id: int) -> Profile:
        profile = db.query(Profile).filter(Profile.user_id == user_id).first()
        if not profile:
            raise NotFound(PROFILE_NOT_FOUND_MESSAGE)
        return profile

    @staticmethod
    def list_profiles(db: Session) -> List[Profile]:
        return db.query(Profile).order_by(Profile.id).all()

    @staticmethod
    def upsert_profile(db: Session, user_id: int, data: Dict[str, Any]) -> Profile:
        """Create the caller's profile, or update the fields present in data"""
        auth_service.get_user(db, user_id)
        fields = build_profile_fields(data)

        profile = db.query(Profile).filter(Profile.user_id == user_id).first()
        if profile:
            for name, value in fields.items():
                setattr(profile, name, value)
            logger.info("Updated profile for user %s", user_id)
        else:
            profile = Profile(user_id=user_id, **fields)
            db.add(profile)
            logger.info("Created profile for user %s", user_id)

        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def delete_account(db: Session, user_id: int) -> None:
        """
        Delete the caller's profile and user record.

        Posts written by the user are kept, still carrying the author
        snapshot they were created with.
        """
        db.query(Profile).filter(Profile.user_id == user_id).delete(synchronize_session=False)
        db.query(User).filter(User.id == user_id).delete(synchronize_session=False)
        db.commit()
        logger.info("Deleted account %s", user_id)

    @staticmethod
    def add_experience(db: Session, user_id: int, entry: Dict[str, Any]) -> Profile:
        profile = ProfileService.get_own_profile(db, user_id)
        # Reassigning the list (not mutating it) is what marks the JSON column dirty
        profile.experience = [_new_entry(entry)] + list(profile.experience or [])
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def remove_experience(db: Session, user_id: int, exp_id: str) -> Profile:
        profile = ProfileService.get_own_profile(db, user_id)
        profile.experience = _without_entry(
            list(profile.experience or []), exp_id, "Experience not found")
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def add_education(db: Session, user_id: int, entry: Dict[str, Any]) -> Profile:
        profile = ProfileService.get_own_profile(db, user_id)
        profile.education = [_new_entry(entry)] + list(profile.education or [])
        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def remove_education(db: Session, user_id: int, edu_id: str) -> Profile:
        profile = ProfileService.get_own_profile(db, user_id)
        profile.education = _without_entry(
            list(profile.education or []), edu_id, "Education not found")
        db.commit()
        db.refresh(profile)
        return profile


profile_service = ProfileService()
