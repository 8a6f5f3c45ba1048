from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from devconnect.core.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Profile(Base):
    """
    One profile per user.

    Experience and education entries are embedded JSON documents, newest
    first. Each entry carries its own string id so it can be removed without
    relying on its position.
    """
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"),
                     unique=True, index=True, nullable=False)
    company = Column(String, nullable=True)
    website = Column(String, nullable=True)
    location = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    status = Column(String, nullable=True)
    githubusername = Column(String, nullable=True)
    skills = Column(JSON, nullable=True)
    social = Column(JSON, nullable=True)
    experience = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)
    date = Column(DateTime(timezone=True), default=_utcnow)
    # Checked and bumped on every UPDATE; a stale write raises StaleDataError
    version = Column(Integer, nullable=False)

    # Populated into responses as {id, name, avatar}
    user = relationship("User", lazy="joined")

    __mapper_args__ = {"version_id_col": version}
