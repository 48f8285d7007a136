from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from clipkeeper.database import Base

TAG_NAME_MAX_LENGTH = 100


class Tag(Base):
    """Tag attached to a single link (one row per link and tag name)."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(TAG_NAME_MAX_LENGTH), nullable=False, index=True)
    link_id = Column(
        Integer, ForeignKey("links.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    link = relationship("Link", back_populates="tags")
