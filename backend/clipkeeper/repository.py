"""Persistence handle wrapping a SQLAlchemy session."""

from datetime import datetime
from typing import Any, List

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from clipkeeper.models.custom_tab import CustomTab, LinkTab
from clipkeeper.models.link import Link
from clipkeeper.models.tag import Tag
from clipkeeper.models.user import User


class LinkRepository:
    """
    Data access for users, links, tags and custom tabs.

    Writes are flushed, not committed; callers own the transaction and call
    ``commit`` once a request's work is done.
    """

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def get_user_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def get_user_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def create_user(
        self, username: str, email: str, password_hash: str, is_premium: bool = False
    ) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            is_premium=is_premium,
        )
        self.db.add(user)
        self.db.flush()
        return user

    def update_user_profile(self, user: User, **fields: Any) -> User:
        """Set the provided profile fields, ignoring those passed as None."""
        for field in ("username", "email", "display_name", "bio", "avatar_url"):
            value = fields.get(field)
            if value is not None:
                setattr(user, field, value)
        self.db.flush()
        return user

    def update_user_password(self, user: User, password_hash: str) -> None:
        user.password_hash = password_hash
        self.db.flush()

    def update_notification_preferences(
        self, user: User, preferences: dict[str, bool]
    ) -> dict[str, bool]:
        # Reassign so the JSON column is marked dirty
        merged = {**(user.notification_preferences or {}), **preferences}
        user.notification_preferences = merged
        self.db.flush()
        return merged

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    def _links_query(self):
        return self.db.query(Link).options(selectinload(Link.tags))

    def create_link(
        self,
        user_id: int,
        url: str,
        title: str,
        platform: str,
        category: str,
        thumbnail_url: str | None = None,
        duration: str | None = None,
        link_metadata: dict | None = None,
    ) -> Link:
        now = datetime.utcnow()
        link = Link(
            user_id=user_id,
            url=url,
            title=title,
            platform=platform,
            category=category,
            thumbnail_url=thumbnail_url,
            duration=duration,
            link_metadata=link_metadata,
            created_at=now,
            last_viewed=now,
        )
        self.db.add(link)
        self.db.flush()
        return link

    def get_link_by_id(self, link_id: int) -> Link | None:
        return self._links_query().filter(Link.id == link_id).first()

    def get_link_by_url(self, url: str) -> Link | None:
        """Most recent link for this exact URL that carries cached metadata."""
        return (
            self.db.query(Link)
            .filter(Link.url == url, Link.link_metadata.isnot(None))
            .order_by(Link.id.desc())
            .first()
        )

    def get_user_link_by_url(self, user_id: int, url: str) -> Link | None:
        return (
            self.db.query(Link)
            .filter(Link.user_id == user_id, Link.url == url)
            .order_by(Link.id.asc())
            .first()
        )

    def get_links_by_user_id(self, user_id: int) -> List[Link]:
        return (
            self._links_query()
            .filter(Link.user_id == user_id)
            .order_by(Link.created_at.desc(), Link.id.desc())
            .all()
        )

    def get_recent_links(self, user_id: int, limit: int = 5) -> List[Link]:
        return (
            self._links_query()
            .filter(Link.user_id == user_id)
            .order_by(Link.created_at.desc(), Link.id.desc())
            .limit(limit)
            .all()
        )

    def get_links_by_platform(self, user_id: int, platform: str) -> List[Link]:
        return (
            self._links_query()
            .filter(Link.user_id == user_id, Link.platform == platform)
            .order_by(Link.created_at.desc(), Link.id.desc())
            .all()
        )

    def get_link_count(self, user_id: int) -> int:
        return (
            self.db.query(func.count(Link.id)).filter(Link.user_id == user_id).scalar()
            or 0
        )

    def delete_link(self, link_id: int, user_id: int) -> bool:
        """Delete a user's link and its tags. Returns False if nothing matched."""
        link = (
            self.db.query(Link)
            .filter(Link.id == link_id, Link.user_id == user_id)
            .first()
        )
        if not link:
            return False

        self.db.delete(link)
        self.db.flush()
        return True

    def update_link_category(self, link: Link, category: str) -> Link:
        link.category = category
        self.db.flush()
        return link

    def update_link_title(self, link: Link, title: str) -> Link:
        link.title = title
        self.db.flush()
        return link

    def update_last_viewed(self, link: Link) -> Link:
        link.last_viewed = datetime.utcnow()
        self.db.flush()
        return link

    def get_recommended_links(self, user_id: int, limit: int = 5) -> List[Link]:
        """Links the user has not opened for the longest time."""
        return (
            self._links_query()
            .filter(Link.user_id == user_id)
            .order_by(Link.last_viewed.asc(), Link.id.asc())
            .limit(limit)
            .all()
        )

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def create_tag(self, link_id: int, name: str) -> Tag:
        tag = Tag(name=name, link_id=link_id, created_at=datetime.utcnow())
        self.db.add(tag)
        self.db.flush()
        return tag

    def get_tag_by_id(self, tag_id: int) -> Tag | None:
        return self.db.query(Tag).filter(Tag.id == tag_id).first()

    def get_tags_by_link_id(self, link_id: int) -> List[Tag]:
        return (
            self.db.query(Tag).filter(Tag.link_id == link_id).order_by(Tag.id).all()
        )

    def get_tag_counts(self, user_id: int) -> List[tuple[str, int]]:
        """Tag names across a user's links with how many links carry each."""
        return (
            self.db.query(Tag.name, func.count(Tag.id).label("count"))
            .join(Link, Tag.link_id == Link.id)
            .filter(Link.user_id == user_id)
            .group_by(Tag.name)
            .order_by(func.count(Tag.id).desc(), Tag.name.asc())
            .all()
        )

    def delete_tag(self, tag: Tag) -> None:
        self.db.delete(tag)
        self.db.flush()

    # ------------------------------------------------------------------
    # Custom tabs
    # ------------------------------------------------------------------

    def create_custom_tab(
        self, user_id: int, name: str, icon: str = "folder", description: str = ""
    ) -> CustomTab:
        tab = CustomTab(
            user_id=user_id, name=name, icon=icon, description=description
        )
        self.db.add(tab)
        self.db.flush()
        return tab

    def get_custom_tabs_by_user_id(self, user_id: int) -> List[CustomTab]:
        return (
            self.db.query(CustomTab)
            .filter(CustomTab.user_id == user_id)
            .order_by(CustomTab.created_at.asc(), CustomTab.id.asc())
            .all()
        )

    def get_custom_tab_by_id(self, tab_id: int) -> CustomTab | None:
        return self.db.query(CustomTab).filter(CustomTab.id == tab_id).first()

    def delete_custom_tab(self, tab_id: int, user_id: int) -> bool:
        tab = (
            self.db.query(CustomTab)
            .filter(CustomTab.id == tab_id, CustomTab.user_id == user_id)
            .first()
        )
        if not tab:
            return False

        self.db.delete(tab)
        self.db.flush()
        return True

    def add_link_to_tab(self, link_id: int, tab_id: int) -> LinkTab:
        """Attach a link to a tab; attaching twice returns the existing row."""
        existing = (
            self.db.query(LinkTab)
            .filter(LinkTab.link_id == link_id, LinkTab.tab_id == tab_id)
            .first()
        )
        if existing:
            return existing

        link_tab = LinkTab(link_id=link_id, tab_id=tab_id)
        self.db.add(link_tab)
        self.db.flush()
        return link_tab

    def remove_link_from_tab(self, link_id: int, tab_id: int) -> bool:
        deleted = (
            self.db.query(LinkTab)
            .filter(LinkTab.link_id == link_id, LinkTab.tab_id == tab_id)
            .delete(synchronize_session="fetch")
        )
        self.db.flush()
        return deleted > 0

    def get_links_by_tab_id(self, tab_id: int) -> List[Link]:
        return (
            self._links_query()
            .join(LinkTab, LinkTab.link_id == Link.id)
            .filter(LinkTab.tab_id == tab_id)
            .order_by(LinkTab.created_at.desc(), Link.id.desc())
            .all()
        )

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    def count_links_by(self, user_id: int, column) -> List[tuple[str, int]]:
        return (
            self.db.query(column, func.count(Link.id))
            .filter(Link.user_id == user_id)
            .group_by(column)
            .order_by(func.count(Link.id).desc())
            .all()
        )

    def count_links_since(self, user_id: int, since: datetime) -> int:
        return (
            self.db.query(func.count(Link.id))
            .filter(Link.user_id == user_id, Link.created_at >= since)
            .scalar()
            or 0
        )
