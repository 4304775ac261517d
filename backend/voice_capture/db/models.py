import enum
from uuid import uuid4
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from .base import Base
from datetime import datetime, timezone


def utcnow():
    return datetime.now(timezone.utc)


def new_uuid() -> str:
    return str(uuid4())


class SessionStatus(str, enum.Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class SubmissionStatus(str, enum.Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True, default=new_uuid)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    full_name = Column(String)
    phone = Column(String)
    state = Column(String)
    mother_tongue = Column(String)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class AdminUser(Base):
    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow)


class Sentence(Base):
    __tablename__ = "sentences"

    # id order is creation order
    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)


class RecordingSession(Base):
    __tablename__ = "recording_sessions"
    __table_args__ = (
        # at most one open session per user
        Index(
            "uq_recording_sessions_open_user",
            "user_id",
            unique=True,
            sqlite_where=text("status = 'in_progress'"),
            postgresql_where=text("status = 'in_progress'"),
        ),
    )

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(
        String(36), ForeignKey("user_profiles.id", ondelete="CASCADE"), index=True
    )
    total_sentences = Column(Integer, nullable=False)
    completed_sentences = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default=SessionStatus.IN_PROGRESS.value)
    started_at = Column(DateTime, default=utcnow)
    completed_at = Column(DateTime, nullable=True)


class Recording(Base):
    __tablename__ = "recordings"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "sentence_id",
            "rejection_ordinal",
            name="uq_recordings_rejection_ordinal",
        ),
    )

    # semantic id, see services.submissions
    id = Column(String, primary_key=True)
    user_id = Column(
        String(36), ForeignKey("user_profiles.id", ondelete="SET NULL"), index=True
    )
    sentence_id = Column(
        Integer, ForeignKey("sentences.id", ondelete="SET NULL"), index=True
    )
    audio_url = Column(String, nullable=False)
    status = Column(String, nullable=False)
    attempt_number = Column(Integer, default=1)
    rejection_ordinal = Column(Integer, nullable=True)
    recorded_at = Column(DateTime, default=utcnow)
    duration_seconds = Column(Float, nullable=True)
