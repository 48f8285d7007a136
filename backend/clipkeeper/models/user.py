from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text, Boolean, JSON
from sqlalchemy.orm import relationship

from clipkeeper.database import Base


def default_notification_preferences() -> dict:
    return {
        "email_notifications": True,
        "new_content_alerts": True,
        "weekly_digest": False,
        "platform_updates": True,
    }


class User(Base):
    """User model for account and profile information."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Subscription tier
    is_premium = Column(Boolean, default=False, nullable=False)

    # Profile
    display_name = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    avatar_url = Column(String(512), nullable=True)
    notification_preferences = Column(
        JSON, default=default_notification_preferences, nullable=False
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    # Relationships
    links = relationship("Link", back_populates="user", cascade="all, delete-orphan")
    custom_tabs = relationship(
        "CustomTab", back_populates="user", cascade="all, delete-orphan"
    )
