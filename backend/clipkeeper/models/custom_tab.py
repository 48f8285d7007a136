from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from clipkeeper.database import Base


class CustomTab(Base):
    """User-defined folder for organizing links."""

    __tablename__ = "custom_tabs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(100), nullable=False)
    icon = Column(String(50), default="folder", nullable=False)
    description = Column(String(500), default="", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="custom_tabs")
    link_tabs = relationship(
        "LinkTab", back_populates="tab", cascade="all, delete-orphan"
    )


class LinkTab(Base):
    """Association between links and custom tabs."""

    __tablename__ = "link_tabs"

    id = Column(Integer, primary_key=True, index=True)
    link_id = Column(
        Integer, ForeignKey("links.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tab_id = Column(
        Integer,
        ForeignKey("custom_tabs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    link = relationship("Link", back_populates="link_tabs")
    tab = relationship("CustomTab", back_populates="link_tabs")

    __table_args__ = (Index("idx_link_tab", "link_id", "tab_id", unique=True),)
