"""Database models for persisted learner state."""
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
)

from ieltsprep.models.base import Base, TimestampMixin


class ReviewStateRecord(Base, TimestampMixin):
    """Review progress of one learner on one catalog word."""

    __tablename__ = "review_states"
    __table_args__ = (UniqueConstraint("learner_id", "word_id", name="uq_review_state_learner_word"),)

    id = Column(Integer, primary_key=True)
    learner_id = Column(String, nullable=False, index=True)
    word_id = Column(String, nullable=False)
    review_count = Column(Integer, nullable=False, default=0)
    is_learned = Column(Boolean, nullable=False, default=False)
    next_review_date = Column(DateTime(timezone=True), nullable=False)
    last_reviewed_at = Column(DateTime(timezone=True), nullable=True)


class ConfigEntry(Base, TimestampMixin):
    """Key-value configuration entry (exam date, target band)."""

    __tablename__ = "config_entries"

    id = Column(Integer, primary_key=True)
    key = Column(String, unique=True, nullable=False)
    value = Column(String, nullable=False)
