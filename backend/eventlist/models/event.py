"""
Event model: one row per listed event.

Key design decisions:
- UUID primary key generated on insert, never exposed as a sequence
- price_per_person is integer cents; no float or numeric money columns
- Index on starts_at for date-range search and search ordering
- Index on created_at for the default (newest first) listing
"""

import uuid

from sqlalchemy import Column, Integer, String, Text, DateTime, Uuid, Index, CheckConstraint

from eventlist.db.base import Base, TimestampMixin


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    starts_at = Column(DateTime(timezone=True), nullable=False)
    location = Column(String(255), nullable=False)
    capacity = Column(Integer, nullable=False)
    price_per_person = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("capacity > 0", name="check_capacity_positive"),
        CheckConstraint("price_per_person >= 0", name="check_price_non_negative"),
        Index("ix_events_starts_at", "starts_at"),
        Index("ix_events_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, starts_at={self.starts_at})>"
