from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Optional, Union
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel, ConfigDict, Field, field_validator
from devconnect.core.database import get_db
from devconnect.api.dependencies import get_current_user_id, get_github_client
from devconnect.api.validation import NonEmptyStr
from devconnect.services.github_service import GithubClient
from devconnect.services.profile_service import parse_skills, profile_service

router = APIRouter(prefix="/profile", tags=["profile"])


class SocialLinks(BaseModel):
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class ProfileUpsert(BaseModel):
    status: NonEmptyStr
    # Comma-delimited string as sent by the web client; a list also works
    skills: Union[NonEmptyStr, Annotated[List[NonEmptyStr], Field(min_length=1)]]
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    social: Optional[SocialLinks] = None
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

    @field_validator("skills")
    @classmethod
    def split_skills(cls, value):
        # " , " passes the string check but holds no skill
        skills = parse_skills(value)
        if not skills:
            raise ValueError("Skills is required")
        return skills


class ExperienceCreate(BaseModel):
    title: NonEmptyStr
    company: NonEmptyStr
    location: Optional[str] = None
    from_: date = Field(alias="from")
    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class EducationCreate(BaseModel):
    school: NonEmptyStr
    degree: NonEmptyStr
    fieldofstudy: NonEmptyStr
    from_: date = Field(alias="from")
    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class ExperienceEntry(ExperienceCreate):
    id: str


class EducationEntry(EducationCreate):
    id: str


class ProfileUser(BaseModel):
    id: int
    name: str
    avatar: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ProfileResponse(BaseModel):
    id: int
    user: ProfileUser
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    githubusername: Optional[str] = None
    skills: Optional[List[str]] = None
    social: Optional[SocialLinks] = None
    experience: List[ExperienceEntry] = []
    education: List[EducationEntry] = []
    date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    msg: str


def _entry_document(entry: BaseModel) -> Dict[str, Any]:
    # Stored with the "from" key and ISO dates, as returned to clients
    return entry.model_dump(by_alias=True, mode="json")


# Unset profile fields are left out of responses rather than sent as null

@router.get("/me", response_model=ProfileResponse, response_model_exclude_none=True)
async def get_my_profile(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Get current user's profile"""
    return profile_service.get_own_profile(db, user_id)


@router.post("", response_model=ProfileResponse, response_model_exclude_none=True)
async def upsert_profile(
    profile: ProfileUpsert,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Create or update the current user's profile"""
    data = profile.model_dump(exclude_none=True)
    return profile_service.upsert_profile(db, user_id, data)


@router.get("", response_model=List[ProfileResponse], response_model_exclude_none=True)
async def list_profiles(db: Session = Depends(get_db)):
    """Get all profiles"""
    return profile_service.list_profiles(db)


@router.get("/user/{user_id}", response_model=ProfileResponse, response_model_exclude_none=True)
async def get_profile_by_user(user_id: int, db: Session = Depends(get_db)):
    """Get profile by user ID"""
    return profile_service.get_profile_by_user(db, user_id)


@router.delete("", response_model=MessageResponse)
async def delete_account(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Delete profile and user; the user's posts are kept"""
    profile_service.delete_account(db, user_id)
    return {"msg": "User deleted"}


@router.put("/experience", response_model=ProfileResponse, response_model_exclude_none=True)
async def add_experience(
    experience: ExperienceCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Add an experience entry to the front of the profile's list"""
    return profile_service.add_experience(db, user_id, _entry_document(experience))


@router.delete("/experience/{exp_id}", response_model=ProfileResponse, response_model_exclude_none=True)
async def delete_experience(
    exp_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Delete experience from profile"""
    return profile_service.remove_experience(db, user_id, exp_id)


@router.put("/education", response_model=ProfileResponse, response_model_exclude_none=True)
async def add_education(
    education: EducationCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Add an education entry to the front of the profile's list"""
    return profile_service.add_education(db, user_id, _entry_document(education))


@router.delete("/education/{edu_id}", response_model=ProfileResponse, response_model_exclude_none=True)
async def delete_education(
    edu_id: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """Delete education from profile"""
    return profile_service.remove_education(db, user_id, edu_id)


@router.get("/github/{username}")
def get_github_repos(
    username: str,
    github: GithubClient = Depends(get_github_client)
):
    """Get a user's latest GitHub repositories"""
    # Plain def: FastAPI runs it in the threadpool, so the blocking httpx call is fine
    return github.get_repos(username)
