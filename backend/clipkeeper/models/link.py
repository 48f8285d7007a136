from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship

from clipkeeper.database import Base

TITLE_MAX_LENGTH = 500
CATEGORY_MAX_LENGTH = 100
DURATION_MAX_LENGTH = 50


class Link(Base):
    """Saved short-form video (or web content) link."""

    __tablename__ = "links"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Not unique: the URL doubles as the metadata cache key across users
    url = Column(Text, nullable=False, index=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    platform = Column(String(50), nullable=False, index=True)
    thumbnail_url = Column(Text, nullable=True)
    category = Column(String(CATEGORY_MAX_LENGTH), nullable=False)
    duration = Column(String(DURATION_MAX_LENGTH), nullable=True)

    # Classifier output reused for later submissions of the same URL
    link_metadata = Column("metadata", JSON(none_as_null=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_viewed = Column(DateTime, default=datetime.utcnow, nullable=True)

    # Relationships
    user = relationship("User", back_populates="links")
    tags = relationship(
        "Tag",
        back_populates="link",
        cascade="all, delete-orphan",
        order_by="Tag.id",
    )
    link_tabs = relationship(
        "LinkTab", back_populates="link", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_user_created", "user_id", "created_at"),
        Index("idx_user_platform", "user_id", "platform"),
    )
